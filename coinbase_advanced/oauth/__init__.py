"""
OAuth 2.0 module for Coinbase API integration.

This module provides a minimal, single-use OAuth 2.0 Authorization Code
flow for Coinbase: tokens are obtained once through a local callback
listener and revoked at shutdown. There is no refresh and no persistence.

Public API:
    AuthorizationFlow: Scope builder, authorization and revocation
    OAuthConfig: Validated credentials and redirect URL
    TokenStore: Holds the obtained tokens for the request executor
    AccessTokenProvider: Capability the request executor reads tokens through

Exceptions:
    CoinbaseOAuthError: Base exception
    ConfigError: Invalid credentials or redirect URL
    InvalidScopeError: Scope not in the Coinbase whitelist
    AuthorizationError: Authorization flow error
    CallbackParseError: Redirect lacked code or state
    CsrfMismatchError: Redirect state did not match
    CallbackTimeoutError: No redirect arrived in time
    TokenExchangeError: Token exchange failed
    RevocationError: Token revocation failed
    TokenNotAvailableError: No usable tokens
"""

from .callback_server import AuthorizationResult, OAuthCallbackServer, run_authorization_flow
from .config import OAuthConfig
from .exceptions import (
    AuthorizationError,
    CallbackParseError,
    CallbackTimeoutError,
    CoinbaseOAuthError,
    ConfigError,
    CsrfMismatchError,
    InvalidScopeError,
    RevocationError,
    TokenExchangeError,
    TokenNotAvailableError,
)
from .flow import AuthorizationFlow, FlowState
from .scopes import VALID_SCOPES, is_valid_scope
from .token_store import AccessTokenProvider, TokenData, TokenStore

__all__ = [
    # Configuration
    "OAuthConfig",
    "VALID_SCOPES",
    "is_valid_scope",
    # Tokens
    "AccessTokenProvider",
    "TokenData",
    "TokenStore",
    # Callback listener
    "OAuthCallbackServer",
    "AuthorizationResult",
    "run_authorization_flow",
    # Flow
    "AuthorizationFlow",
    "FlowState",
    # Exceptions
    "CoinbaseOAuthError",
    "ConfigError",
    "InvalidScopeError",
    "AuthorizationError",
    "CallbackParseError",
    "CsrfMismatchError",
    "CallbackTimeoutError",
    "TokenExchangeError",
    "RevocationError",
    "TokenNotAvailableError",
]
