"""Tests for the Coinbase scope whitelist."""

from coinbase_advanced.oauth.scopes import VALID_SCOPES, is_valid_scope


def test_known_scopes_are_valid():
    assert is_valid_scope("wallet:accounts:read")
    assert is_valid_scope("wallet:transactions:read")
    assert is_valid_scope("wallet:user:read")


def test_unknown_scopes_are_invalid():
    assert not is_valid_scope("wallet:orders:read")
    assert not is_valid_scope("")
    assert not is_valid_scope("WALLET:ACCOUNTS:READ")


def test_whitelist_size():
    assert len(VALID_SCOPES) == 25
    assert all(scope.startswith("wallet:") for scope in VALID_SCOPES)
