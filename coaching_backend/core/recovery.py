"""
Password recovery link parsing.

Reset e-mails land on the site with the token pair either in the URL
fragment (``#access_token=...&type=recovery``) or in the query string.

Dependencies: urllib
System role: Extracts recovery tokens for the password update flow
"""

from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit


@dataclass(frozen=True)
class RecoveryTokens:
    """Tokens carried by a recovery link."""

    access_token: str
    refresh_token: str | None = None
    type: str | None = None

    @property
    def is_recovery(self) -> bool:
        return self.type in (None, "recovery")


def _first(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)
    return values[0] if values and values[0] else None


def parse_recovery_tokens(url: str) -> RecoveryTokens | None:
    """
    Extract recovery tokens from a reset link.

    Each field is read from the fragment first and from the query string
    when the fragment lacks it.

    Args:
        url: Full URL, or just its fragment/query part

    Returns:
        RecoveryTokens, or None when no access token is present
    """
    parts = urlsplit(url)
    fragment = parse_qs(parts.fragment)
    query = parse_qs(parts.query)

    def lookup(name: str) -> str | None:
        return _first(fragment, name) or _first(query, name)

    access_token = lookup("access_token")
    if access_token is None:
        return None
    return RecoveryTokens(
        access_token=access_token,
        refresh_token=lookup("refresh_token"),
        type=lookup("type"),
    )
