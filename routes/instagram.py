import json
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import INSTAGRAM_WEB_BASE, RATE_LIMIT, RATE_LIMIT_ENABLED
from graph_api.client import UpstreamClient, get_upstream_client
from graph_api.errors import MissingCredential, ScrapeUnavailable, UpstreamError, UsernameMismatch
from graph_api.models import (
    BusinessPostsResponse,
    ErrorResponse,
    PublicPost,
    PublicPostsResponse,
    PublicProfile,
)
from graph_api.posts import fetch_posts
from graph_api.resolver import resolve_account
from graph_api.validation import matches, validate_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/instagram", tags=["instagram"])
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/business/{username}", response_model=BusinessPostsResponse, responses=ERRORS)
@limiter.limit(RATE_LIMIT)
async def business_posts(
    request: Request,
    username: str,
    access_token: Optional[str] = Query(None, description="Facebook user access token"),
    limit: Optional[str] = Query(None, description="Posts to return, 1-100 (default 25)"),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """
    Posts of the Instagram Business/Creator account linked to `access_token`.
    The path username has to be that account (case-insensitive), otherwise 404.
    """
    username, n = validate_request(username, limit, default_limit=25, max_limit=100)
    if not access_token:
        raise MissingCredential("Access token is required for business accounts")

    account = await resolve_account(client, access_token)
    if not matches(username, account.profile.username):
        logger.info("username %s does not match resolved account %s", username, account.profile.username)
        raise UsernameMismatch("Username does not match the authenticated business account")

    posts = await fetch_posts(client, account.account_id, account.access_token, n)
    return BusinessPostsResponse(
        username=account.profile.username,
        profile=account.profile,
        posts=posts,
    )


# ==== Public profile scrape (best effort) ====
# instagram.com stopped embedding _sharedData for most visitors, so this
# usually ends in a 501 pointing callers at the Graph API route above.
# =============================================

CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

SCRAPE_HEADERS = {
    "User-Agent": CHROME_UA,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}

SHARED_DATA_RE = re.compile(r"window\._sharedData = ({.*?});", re.S)


def extract_shared_data(html: str) -> dict:
    """Pulls the window._sharedData JSON out of a profile page."""
    soup = BeautifulSoup(html or "", "html.parser")
    for script in soup.find_all("script"):
        text = script.string or ""
        if "window._sharedData" not in text:
            continue
        m = SHARED_DATA_RE.search(text)
        if m:
            try:
                return json.loads(m.group(1))
            except ValueError:
                break
    raise ScrapeUnavailable("Could not extract Instagram data")


def _count(node: dict, edge: str) -> Optional[int]:
    return (node.get(edge) or {}).get("count")


def _caption(node: dict) -> Optional[str]:
    edges = (node.get("edge_media_to_caption") or {}).get("edges") or []
    return edges[0].get("node", {}).get("text") if edges else None


def normalize_public_profile(shared: dict, limit: int) -> tuple[PublicProfile, List[PublicPost]]:
    try:
        user = shared["entry_data"]["ProfilePage"][0]["graphql"]["user"]
    except (KeyError, IndexError, TypeError):
        raise ScrapeUnavailable("Unexpected profile page layout")

    timeline = user.get("edge_owner_to_timeline_media") or {}
    profile = PublicProfile(
        id=user.get("id"),
        username=user.get("username") or "",
        full_name=user.get("full_name"),
        profile_pic_url=user.get("profile_pic_url"),
        followers=_count(user, "edge_followed_by"),
        following=_count(user, "edge_follow"),
        posts_count=timeline.get("count"),
    )

    posts: List[PublicPost] = []
    for edge in (timeline.get("edges") or [])[:limit]:
        node = edge.get("node") or {}
        posts.append(PublicPost(
            id=str(node.get("id", "")),
            shortcode=node.get("shortcode"),
            display_url=node.get("display_url"),
            caption=_caption(node),
            taken_at_timestamp=node.get("taken_at_timestamp"),
            like_count=_count(node, "edge_liked_by") or _count(node, "edge_media_preview_like"),
            comment_count=_count(node, "edge_media_to_comment"),
        ))
    return profile, posts


async def scrape_public_profile(client: UpstreamClient, username: str, limit: int):
    try:
        html = await client.get_text(f"{INSTAGRAM_WEB_BASE}/{username}/",
                                     params={"__a": "1", "__d": "dis"},
                                     headers=SCRAPE_HEADERS)
    except UpstreamError as e:
        raise ScrapeUnavailable(e.message) from e
    return normalize_public_profile(extract_shared_data(html), limit)


@router.get("/public/{username}", response_model=PublicPostsResponse,
            responses={400: {"model": ErrorResponse}, 501: {"model": ErrorResponse}})
async def public_posts(
    username: str,
    limit: Optional[str] = Query(None, description="Posts to return, 1-50 (default 12)"),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Public posts via web scraping. Use responsibly; expect 501 most of the time."""
    username, n = validate_request(username, limit, default_limit=12, max_limit=50)
    try:
        profile, posts = await scrape_public_profile(client, username, n)
    except ScrapeUnavailable as e:
        logger.info("public scrape for %s unavailable: %s", username, e.reason)
        raise
    return PublicPostsResponse(username=profile.username or username, profile=profile, posts=posts)
