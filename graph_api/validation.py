import re
from typing import Optional, Tuple

from graph_api.errors import ValidationError

# used with fullmatch; "$" would let a trailing newline through
USERNAME_RE = re.compile(r"[A-Za-z0-9._]{1,30}")
LIMIT_RE = re.compile(r"[+-]?[0-9]+")


def validate_request(username: Optional[str], limit: Optional[str],
                     default_limit: int = 25, max_limit: int = 100) -> Tuple[str, int]:
    """
    Checks the path username and raw `limit` query value before anything goes upstream.
    Missing limit -> default_limit. Returns (username, limit) or raises ValidationError.
    """
    if not username or not USERNAME_RE.fullmatch(username):
        raise ValidationError("username", "Invalid username format")

    if limit is None or limit.strip() == "":
        return username, default_limit
    raw = limit.strip()
    if not LIMIT_RE.fullmatch(raw):
        raise ValidationError("limit", f"Limit must be an integer between 1 and {max_limit}")
    n = int(raw)
    if n < 1 or n > max_limit:
        raise ValidationError("limit", f"Limit must be between 1 and {max_limit}")
    return username, n


def matches(requested: str, resolved_username: str) -> bool:
    return requested.lower() == (resolved_username or "").lower()
