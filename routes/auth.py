import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query

from config import FACEBOOK_GRAPH_API_BASE, GRAPH_API_VERSION
from graph_api.client import UpstreamClient, get_upstream_client
from graph_api.errors import MissingParameters, TokenExchangeError, UpstreamError
from graph_api.models import AuthUrlResponse, ErrorResponse, TokenExchangeRequest, TokenExchangeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

OAUTH_SCOPES = ["instagram_basic", "pages_show_list", "pages_read_engagement"]

INSTRUCTIONS = [
    "1. Visit the auth_url to authorize your app",
    "2. Copy the authorization code from the redirect",
    "3. Exchange the code for an access token using /api/auth/token",
]


# left unescaped by JS encodeURIComponent as well
URI_COMPONENT_SAFE = "!*'()"


def build_auth_url(app_id: str, redirect_uri: str) -> str:
    return (
        f"https://www.facebook.com/{GRAPH_API_VERSION}/dialog/oauth"
        f"?client_id={app_id}"
        f"&redirect_uri={quote(redirect_uri, safe=URI_COMPONENT_SAFE)}"
        f"&scope={','.join(OAUTH_SCOPES)}"
        f"&response_type=code"
    )


@router.get("/instagram", response_model=AuthUrlResponse, responses={400: {"model": ErrorResponse}})
async def instagram_auth_url(app_id: Optional[str] = Query(None), redirect_uri: Optional[str] = Query(None)):
    if not (app_id and redirect_uri):
        raise MissingParameters("app_id and redirect_uri are required")
    return AuthUrlResponse(auth_url=build_auth_url(app_id, redirect_uri), instructions=INSTRUCTIONS)


@router.post("/token", response_model=TokenExchangeResponse,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def exchange_token(
    body: Optional[TokenExchangeRequest] = None,
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Swap an OAuth authorization code for a user access token (one upstream call)."""
    if not (body and body.code and body.app_id and body.app_secret and body.redirect_uri):
        raise MissingParameters("code, app_id, app_secret, and redirect_uri are required")

    params = {
        "client_id": body.app_id,
        "redirect_uri": body.redirect_uri,
        "client_secret": body.app_secret,
        "code": body.code,
    }
    try:
        js = await client.get(f"{FACEBOOK_GRAPH_API_BASE}/{GRAPH_API_VERSION}/oauth/access_token", params=params)
    except UpstreamError as e:
        logger.error("Token exchange error: %s", e.message)
        raise TokenExchangeError(e) from e

    js = js or {}
    return TokenExchangeResponse(
        access_token=js.get("access_token"),
        token_type=js.get("token_type"),
        expires_in=js.get("expires_in"),
    )
