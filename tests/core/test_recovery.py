"""
Test suite for password recovery link parsing.

System role: Verification of recovery token extraction
"""

from coaching_backend.core.recovery import parse_recovery_tokens


def test_tokens_read_from_fragment() -> None:
    tokens = parse_recovery_tokens(
        "https://coaching.example/reset-password#access_token=abc&refresh_token=def&type=recovery"
    )
    assert tokens is not None
    assert tokens.access_token == "abc"
    assert tokens.refresh_token == "def"
    assert tokens.is_recovery


def test_tokens_read_from_query_string() -> None:
    tokens = parse_recovery_tokens(
        "https://coaching.example/reset-password?access_token=abc&type=recovery"
    )
    assert tokens is not None
    assert tokens.access_token == "abc"
    assert tokens.refresh_token is None


def test_fragment_wins_over_query() -> None:
    tokens = parse_recovery_tokens(
        "https://coaching.example/reset-password?access_token=old&refresh_token=r1#access_token=new"
    )
    assert tokens.access_token == "new"
    # Missing in the fragment, so taken from the query
    assert tokens.refresh_token == "r1"


def test_missing_access_token_returns_none() -> None:
    assert parse_recovery_tokens("https://coaching.example/reset-password#type=recovery") is None
    assert parse_recovery_tokens("https://coaching.example/reset-password") is None


def test_other_link_types_are_not_recovery() -> None:
    tokens = parse_recovery_tokens("https://coaching.example/#access_token=abc&type=signup")
    assert tokens is not None
    assert not tokens.is_recovery
