from typing import List

from config import INSTAGRAM_GRAPH_API_BASE
from graph_api.client import UpstreamClient
from graph_api.errors import PostFetchError, UpstreamError
from graph_api.models import Post

MEDIA_FIELDS = [
    "id",
    "caption",
    "media_url",
    "media_type",
    "timestamp",
    "like_count",
    "comments_count",
    "permalink",
]


def _to_post(item: dict) -> Post:
    return Post(
        id=str(item.get("id", "")),
        caption=item.get("caption"),
        media_url=item.get("media_url"),
        media_type=item.get("media_type"),
        timestamp=item.get("timestamp"),
        like_count=item.get("like_count"),
        comments_count=item.get("comments_count"),
        permalink=item.get("permalink"),
    )


async def fetch_posts(client: UpstreamClient, account_id: str, token: str, limit: int) -> List[Post]:
    """Single page of media, upstream order (newest first by convention). No pagination."""
    params = {
        "fields": ",".join(MEDIA_FIELDS),
        "limit": limit,
        "access_token": token,
    }
    try:
        js = await client.get(f"{INSTAGRAM_GRAPH_API_BASE}/{account_id}/media", params=params)
    except UpstreamError as e:
        raise PostFetchError(e) from e

    items = (js or {}).get("data") or []
    return [_to_post(it) for it in items[:limit]]
