from typing import List, Optional


class GatewayError(Exception):
    """Base for every error that ends a request with {"success": false, "error": ...}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"success": False, "error": self.message}


class ValidationError(GatewayError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class MissingCredential(GatewayError):
    status_code = 400


class MissingParameters(GatewayError):
    status_code = 400


class UsernameMismatch(GatewayError):
    status_code = 404


class UpstreamError(GatewayError):
    """A failed round trip to the Graph API (or instagram.com).

    `upstream_status` is None when the request never got a response.
    `body` is the remote payload verbatim; it is logged, never returned to callers.
    """

    status_code = 500

    def __init__(self, upstream_status: Optional[int], body: str = "", url: str = ""):
        if upstream_status is None:
            message = f"Request failed: {body}" if body else "Request failed"
        else:
            message = f"Request failed with status code {upstream_status}"
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body
        self.url = url


class ResolutionError(GatewayError):
    prefix = "Failed to get business account info: "

    def __init__(self, reason: str, upstream: Optional[UpstreamError] = None):
        super().__init__(self.prefix + reason)
        self.upstream = upstream


class NoLinkedPages(ResolutionError):
    def __init__(self):
        super().__init__("No Facebook pages found")


class NoBusinessAccount(ResolutionError):
    def __init__(self):
        super().__init__("No Instagram business account connected")


class PostFetchError(GatewayError):
    def __init__(self, upstream: UpstreamError):
        super().__init__(f"Failed to get business posts: {upstream.message}")
        self.upstream = upstream


class TokenExchangeError(GatewayError):
    def __init__(self, upstream: Optional[UpstreamError] = None):
        super().__init__("Failed to exchange code for token")
        self.upstream = upstream


class ScrapeUnavailable(GatewayError):
    status_code = 501

    recommendation = "Use Instagram Graph API with business accounts"
    alternatives: List[str] = [
        "Convert to Instagram Business account",
        "Use Instagram Graph API",
        "Use third-party services like RapidAPI",
    ]

    def __init__(self, reason: str = ""):
        super().__init__(
            "Public profile scraping is no longer reliable due to Instagram's restrictions"
        )
        self.reason = reason

    def payload(self) -> dict:
        body = super().payload()
        body["recommendation"] = self.recommendation
        body["alternatives"] = list(self.alternatives)
        return body
