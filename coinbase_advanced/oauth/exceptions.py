"""
OAuth exception classes for Coinbase API integration.

This module defines the exception hierarchy for all OAuth-related errors,
providing clear error messages and recovery guidance.
"""


class CoinbaseOAuthError(Exception):
    """Base exception for all Coinbase OAuth errors."""

    pass


class ConfigError(CoinbaseOAuthError):
    """OAuth configuration error (malformed credentials or redirect URL)."""

    pass


class InvalidScopeError(ConfigError):
    """Requested scope is not in the list of valid Coinbase scopes."""

    pass


class AuthorizationError(CoinbaseOAuthError):
    """OAuth authorization flow error."""

    pass


class CallbackParseError(AuthorizationError):
    """The redirect request did not carry both `code` and `state`."""

    pass


class CsrfMismatchError(AuthorizationError):
    """
    The `state` echoed by the authorization server does not match.

    The authorization attempt is aborted and no token is stored. A new
    attempt can be started with a fresh state.
    """

    pass


class CallbackTimeoutError(AuthorizationError):
    """No callback was received before the timeout (or the wait was cancelled)."""

    pass


class TokenExchangeError(CoinbaseOAuthError):
    """Failed to exchange authorization code for tokens."""

    pass


class RevocationError(CoinbaseOAuthError):
    """
    Failed to revoke a token.

    Tokens still expire on their own (about 2 hours for Coinbase), so this
    is reported to the caller instead of being treated as fatal.
    """

    pass


class TokenNotAvailableError(CoinbaseOAuthError):
    """No valid tokens available (need to authorize first, or tokens revoked)."""

    pass
