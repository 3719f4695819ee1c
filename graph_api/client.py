import logging
from typing import Any, Dict, Optional

import httpx

from config import UPSTREAM_TIMEOUT
from graph_api.errors import UpstreamError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """One HTTP round trip per call, no retries. Failures come back as UpstreamError."""

    def __init__(self, timeout: float = UPSTREAM_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        r = await self._send("GET", url, params=params)
        return _json(r)

    async def post(self, url: str, data: Optional[Dict[str, Any]] = None) -> Any:
        r = await self._send("POST", url, data=data)
        return _json(r)

    async def get_text(self, url: str, params: Optional[Dict[str, Any]] = None,
                       headers: Optional[Dict[str, str]] = None) -> str:
        r = await self._send("GET", url, params=params, headers=headers)
        return r.text

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("upstream %s %s failed: %s", method, url, type(e).__name__)
            raise UpstreamError(None, f"{type(e).__name__}: {e}", url=url) from e

        if r.is_error:
            # body may echo token details; keep it in the log, not in the response
            logger.warning("upstream %s %s -> %s: %s", method, url, r.status_code, r.text[:500])
            raise UpstreamError(r.status_code, r.text, url=url)
        return r


def _json(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError as e:
        raise UpstreamError(r.status_code, r.text, url=str(r.request.url)) from e


def get_upstream_client() -> UpstreamClient:
    """FastAPI dependency; tests override it with a client on an httpx.MockTransport."""
    return UpstreamClient()
