import logging

from config import FACEBOOK_GRAPH_API_BASE, INSTAGRAM_GRAPH_API_BASE
from graph_api.client import UpstreamClient
from graph_api.errors import NoBusinessAccount, NoLinkedPages, ResolutionError, UpstreamError
from graph_api.models import Profile, ResolvedAccount

logger = logging.getLogger(__name__)

PROFILE_FIELDS = [
    "id",
    "username",
    "name",
    "profile_picture_url",
    "followers_count",
    "follows_count",
    "media_count",
]


async def resolve_account(client: UpstreamClient, credential: str) -> ResolvedAccount:
    """
    credential -> linked pages -> page's instagram_business_account -> profile fields.

    Each step feeds the next, so the calls run one after another and the first
    failure ends the lookup. The returned access_token is the page-scoped token
    of the first page, which is what the media listing has to be called with.
    """
    try:
        pages = await client.get(f"{FACEBOOK_GRAPH_API_BASE}/me/accounts",
                                 params={"access_token": credential})
        data = (pages or {}).get("data") or []
        if not data:
            raise NoLinkedPages()

        # first page wins, no tie-break between several linked pages
        page = data[0]
        page_id = page.get("id")
        page_token = page.get("access_token")
        logger.debug("resolving via page %s (%d linked)", page_id, len(data))

        linked = await client.get(f"{FACEBOOK_GRAPH_API_BASE}/{page_id}",
                                  params={"fields": "instagram_business_account",
                                          "access_token": page_token})
        ig_ref = (linked or {}).get("instagram_business_account") or {}
        ig_id = ig_ref.get("id")
        if not ig_id:
            raise NoBusinessAccount()

        info = await client.get(f"{INSTAGRAM_GRAPH_API_BASE}/{ig_id}",
                                params={"fields": ",".join(PROFILE_FIELDS),
                                        "access_token": page_token})
    except UpstreamError as e:
        raise ResolutionError(e.message, upstream=e) from e

    info = info or {}
    profile = Profile(
        id=str(info.get("id") or ig_id),
        username=info.get("username") or "",
        name=info.get("name"),
        profile_picture_url=info.get("profile_picture_url"),
        followers_count=info.get("followers_count"),
        follows_count=info.get("follows_count"),
        media_count=info.get("media_count"),
    )
    return ResolvedAccount(account_id=str(ig_id), access_token=page_token or "", profile=profile)
