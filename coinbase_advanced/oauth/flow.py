"""
Authorization flow for Coinbase OAuth integration.

This module drives the three-legged OAuth 2.0 authorization-code flow:

- Scope accumulation (validated against the Coinbase whitelist)
- Authorization URL with a fresh anti-forgery state per attempt
- One-shot local callback listener
- Token exchange (authorization code → access/refresh tokens)
- Token revocation

It is deliberately minimal: tokens are obtained once and never refreshed.
Coinbase access tokens expire after about 2 hours.
"""

import logging
import secrets
import threading
from base64 import b64encode
from enum import Enum
from typing import Dict, Optional, Set
from urllib.parse import urlencode

import requests

from .callback_server import AuthorizationResult, OAuthCallbackServer, run_authorization_flow
from .config import OAuthConfig
from .exceptions import (
    AuthorizationError,
    CallbackParseError,
    CallbackTimeoutError,
    ConfigError,
    CsrfMismatchError,
    InvalidScopeError,
    RevocationError,
    TokenExchangeError,
)
from .scopes import is_valid_scope
from .token_store import TokenData, TokenStore

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    """Lifecycle of an AuthorizationFlow."""

    CONFIGURED = "configured"
    PENDING = "pending"
    AUTHORIZED = "authorized"
    REVOKED = "revoked"


class AuthorizationFlow:
    """
    Minimal single-use OAuth 2.0 authorization for Coinbase.

    Example:
        flow = (
            AuthorizationFlow.configure(client_id, client_secret, "http://localhost:3001")
            .add_scope("wallet:accounts:read")
            .add_scope("wallet:user:read")
        )
        token_store = flow.authorize_once()
        client = CoinbaseClient(token_store)
        ...
        flow.revoke_access()

    A failed authorize_once() (timeout, malformed callback, CSRF mismatch,
    rejected exchange) leaves the flow configured, so it can be retried.
    """

    def __init__(self, config: OAuthConfig, http_timeout: int = 30):
        """
        Initialize authorization flow.

        Args:
            config: OAuth credentials and redirect URL
            http_timeout: Timeout in seconds for token and revocation calls
        """
        self.config = config
        self.http_timeout = http_timeout
        self.scopes: Set[str] = set()
        self.token_store = TokenStore()
        self.state = FlowState.CONFIGURED
        self._server: Optional[OAuthCallbackServer] = None
        self._lock = threading.Lock()

    @classmethod
    def configure(
        cls, client_id: str, client_secret: str, redirect_url: str, **options
    ) -> "AuthorizationFlow":
        """
        Create a flow from raw credentials.

        Args:
            client_id: OAuth client ID provided by Coinbase
            client_secret: OAuth client secret provided by Coinbase
            redirect_url: Registered redirect URL with host and port
            **options: Extra OAuthConfig fields (ssl paths, callback_timeout, ...)

        Returns:
            New AuthorizationFlow

        Raises:
            ConfigError: If credentials or redirect URL are invalid
        """
        return cls(OAuthConfig(client_id, client_secret, redirect_url, **options))

    @classmethod
    def from_env(cls) -> "AuthorizationFlow":
        """Create a flow from CB_OAUTH_* environment variables (or .env)."""
        return cls(OAuthConfig.from_env())

    def add_scope(self, scope: str) -> "AuthorizationFlow":
        """
        Request an additional scope; can be chained.

        Args:
            scope: Coinbase scope, e.g. "wallet:accounts:read"

        Returns:
            This flow

        Raises:
            InvalidScopeError: If the scope is not a valid Coinbase scope
            ConfigError: If authorization has already started
        """
        if not is_valid_scope(scope):
            raise InvalidScopeError(f"Invalid Coinbase scope: {scope!r}")
        if self.state != FlowState.CONFIGURED:
            raise ConfigError(f"Cannot add scopes once the flow is {self.state.value}")

        self.scopes.add(scope)
        return self

    def build_authorization_url(self, csrf_token: str) -> str:
        """
        Build the URL the user opens to grant access.

        Args:
            csrf_token: Anti-forgery state for this attempt

        Returns:
            Complete authorization URL with query parameters
        """
        params = {
            "response_type": "code",
            "client_id": self.config.client_id,
            "state": csrf_token,
            "redirect_uri": self.config.redirect_url,
        }
        if self.scopes:
            params["scope"] = " ".join(sorted(self.scopes))
        return f"{self.config.authorization_url}?{urlencode(params)}"

    def authorize_once(
        self,
        open_browser: bool = False,
        timeout: Optional[float] = None,
        server: Optional[OAuthCallbackServer] = None,
    ) -> TokenStore:
        """
        Get tokens from Coinbase; returns once they are stored.

        Args:
            open_browser: Open the authorization URL in a browser automatically
            timeout: Seconds to wait for the redirect (default: config.callback_timeout)
            server: Callback listener to use (creates one if not provided)

        Returns:
            The populated TokenStore

        Raises:
            ConfigError: If timeout is not positive
            AuthorizationError: If the flow is not in the configured state, or
                Coinbase reported an error in the redirect
            CallbackTimeoutError: If no redirect arrived in time or cancel() was called
            CallbackParseError: If the redirect lacked code or state
            CsrfMismatchError: If the returned state does not match
            TokenExchangeError: If the code could not be exchanged
        """
        if timeout is not None and timeout <= 0:
            raise ConfigError(f"Callback timeout must be positive, got {timeout}")

        with self._lock:
            if self.state != FlowState.CONFIGURED:
                raise AuthorizationError(
                    f"Cannot authorize: flow is {self.state.value}. Create a new flow to re-authorize."
                )
            self.state = FlowState.PENDING
            self._server = server or OAuthCallbackServer(self.config)

        logger.info("Starting OAuth authorization flow")

        try:
            csrf_token = secrets.token_urlsafe(16)
            result = run_authorization_flow(
                self.config,
                self.build_authorization_url(csrf_token),
                open_browser=open_browser,
                timeout=timeout,
                server=self._server,
            )
            code = self._validate_callback(result, csrf_token)
            token_data = self.exchange_code_for_tokens(code)

            self.token_store.populate(token_data)
            self.state = FlowState.AUTHORIZED
            logger.info("Authorization complete")
            return self.token_store

        finally:
            with self._lock:
                self._server = None
                if self.state == FlowState.PENDING:
                    self.state = FlowState.CONFIGURED

    def cancel(self) -> None:
        """Abandon an in-flight authorize_once(); safe to call from another thread."""
        with self._lock:
            if self._server is not None:
                logger.info("Cancelling OAuth authorization flow")
                self._server.cancel()

    def _validate_callback(self, result: AuthorizationResult, csrf_token: str) -> str:
        """
        Turn the callback result into an authorization code.

        Returns:
            Authorization code

        Raises:
            CallbackTimeoutError, CallbackParseError, AuthorizationError, CsrfMismatchError
        """
        if not result.success:
            if result.error in ("timeout", "cancelled"):
                raise CallbackTimeoutError(result.error_description)
            if result.error == "invalid_callback":
                raise CallbackParseError(result.error_description)
            raise AuthorizationError(
                f"Authorization denied: {result.error} - {result.error_description}"
            )

        returned_state = (result.state or "").encode("utf-8")
        if not secrets.compare_digest(returned_state, csrf_token.encode("utf-8")):
            logger.error("OAuth state mismatch; aborting authorization")
            raise CsrfMismatchError(
                "State returned by the authorization server does not match. "
                "The callback may be forged; no token was requested."
            )

        return result.authorization_code

    def _basic_auth_header(self) -> Dict[str, str]:
        credentials = f"{self.config.client_id}:{self.config.client_secret}"
        return {
            "Authorization": f"Basic {b64encode(credentials.encode()).decode()}",
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }

    def exchange_code_for_tokens(self, authorization_code: str) -> TokenData:
        """
        Exchange authorization code for access and refresh tokens.

        Args:
            authorization_code: Code received from OAuth callback

        Returns:
            TokenData with access (and possibly refresh) token

        Raises:
            TokenExchangeError: If exchange fails
        """
        logger.info("Exchanging authorization code for tokens")

        try:
            response = requests.post(
                self.config.token_url,
                headers=self._basic_auth_header(),
                data={
                    "grant_type": "authorization_code",
                    "code": authorization_code,
                    "redirect_uri": self.config.redirect_url,
                },
                timeout=self.http_timeout,
            )

            if response.status_code != 200:
                logger.error(f"Token exchange failed: {response.status_code} - {response.text}")
                raise TokenExchangeError(
                    f"Token exchange failed with status {response.status_code}. "
                    f"Check that your client_id, client_secret and redirect URL are correct."
                )

            token_data = TokenData.from_token_response(response.json())

        except requests.RequestException as e:
            logger.error(f"Network error during token exchange: {e}")
            raise TokenExchangeError(f"Network error during token exchange: {e}") from e
        except (KeyError, ValueError) as e:
            logger.error(f"Invalid response from token endpoint: {e}")
            raise TokenExchangeError(f"Invalid response from token endpoint: {e}") from e

        logger.info("Successfully obtained tokens")
        return token_data

    def revoke_access(self) -> None:
        """
        Revoke the obtained tokens on Coinbase's servers.

        The refresh token is revoked when one was issued, otherwise the
        access token. Without this call Coinbase tokens expire on their own.

        Raises:
            AuthorizationError: If the flow has no tokens to revoke
            RevocationError: If Coinbase rejected the revocation or was unreachable
        """
        if self.state != FlowState.AUTHORIZED:
            raise AuthorizationError(f"Nothing to revoke: flow is {self.state.value}")

        token, token_type_hint = self.token_store.token_to_revoke()
        logger.info(f"Revoking {token_type_hint}")

        try:
            response = requests.post(
                self.config.revoke_url,
                headers=self._basic_auth_header(),
                data={"token": token, "token_type_hint": token_type_hint},
                timeout=self.http_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Network error during token revocation: {e}")
            raise RevocationError(f"Network error during token revocation: {e}") from e

        if response.status_code != 200:
            logger.error(f"Token revocation failed: {response.status_code} - {response.text}")
            raise RevocationError(f"Token revocation failed with status {response.status_code}")

        self.token_store.mark_revoked()
        self.state = FlowState.REVOKED
        logger.info("Access revoked")

    def access_token(self) -> str:
        """Current access token; lets the flow itself act as an AccessTokenProvider."""
        return self.token_store.access_token()
