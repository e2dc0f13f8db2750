"""
In-memory token store for Coinbase OAuth integration.

The store is created empty, populated exactly once by the authorization
flow after a successful code exchange, and then only read. API clients see
it through the `AccessTokenProvider` protocol, which exposes nothing but
the current access token.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, FrozenSet, Optional, Protocol, Tuple

from .exceptions import TokenNotAvailableError

logger = logging.getLogger(__name__)


class AccessTokenProvider(Protocol):
    """Anything able to hand out a bearer token for API calls."""

    def access_token(self) -> str:
        ...


@dataclass
class TokenData:
    """
    OAuth token data returned by the token endpoint.

    Attributes:
        access_token: Short-lived access token for API calls
        refresh_token: Long-lived token, if the server issued one
        token_type: Token type (typically "bearer")
        expires_in: Token lifetime in seconds from issue time, if known
        scope: Granted OAuth scopes (space separated)
        issued_at: ISO timestamp of when tokens were issued
    """

    access_token: str = field(repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    scope: str = ""
    issued_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def expires_at(self) -> Optional[datetime]:
        """
        Calculate expiration datetime.

        Returns:
            Datetime when access token expires (UTC), or None if unknown
        """
        if self.expires_in is None:
            return None
        issued = datetime.fromisoformat(self.issued_at)
        if issued.tzinfo is None:
            issued = issued.replace(tzinfo=timezone.utc)
        return issued + timedelta(seconds=self.expires_in)

    @property
    def is_expired(self) -> bool:
        """True if the access token is known to be expired."""
        expires_at = self.expires_at
        return expires_at is not None and datetime.now(timezone.utc) >= expires_at

    @property
    def scopes(self) -> FrozenSet[str]:
        """Granted scopes as a set."""
        return frozenset(self.scope.split()) if self.scope else frozenset()

    @classmethod
    def from_token_response(cls, data: Dict[str, Any]) -> "TokenData":
        """
        Create TokenData from a token endpoint JSON response.

        Args:
            data: Decoded JSON body of the token response

        Returns:
            TokenData instance

        Raises:
            KeyError: If access_token is missing
        """
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or None,
            token_type=data.get("token_type", "bearer"),
            expires_in=data.get("expires_in"),
            scope=data.get("scope", ""),
        )


class TokenStore:
    """
    Holds the tokens obtained by one authorization.

    Single writer, many readers: the authorization flow calls `populate()`
    once before any reader gets hold of the store. Reading before that, or
    after revocation, raises TokenNotAvailableError.
    """

    def __init__(self) -> None:
        self._token: Optional[TokenData] = None
        self._revoked = False
        self._warned_expired = False

    @property
    def is_populated(self) -> bool:
        """Whether tokens have been stored."""
        return self._token is not None

    @property
    def is_revoked(self) -> bool:
        """Whether the stored tokens have been revoked."""
        return self._revoked

    @property
    def token_data(self) -> Optional[TokenData]:
        """Stored token data, or None before authorization."""
        return self._token

    @property
    def scopes(self) -> FrozenSet[str]:
        """Scopes granted by the authorization server."""
        return self._token.scopes if self._token else frozenset()

    def populate(self, token_data: TokenData) -> None:
        """
        Store tokens after a successful code exchange.

        Args:
            token_data: Tokens returned by the token endpoint

        Raises:
            RuntimeError: If the store was already populated
        """
        if self._token is not None:
            raise RuntimeError("TokenStore is already populated")
        self._token = token_data
        logger.debug("Token store populated")

    def access_token(self) -> str:
        """
        Get the current access token.

        Returns:
            Access token string

        Raises:
            TokenNotAvailableError: If not authorized yet or revoked
        """
        token = self._require_token()
        if token.is_expired and not self._warned_expired:
            self._warned_expired = True
            logger.warning("Access token has expired; API calls will be rejected")
        return token.access_token

    def refresh_token(self) -> Optional[str]:
        """Get the refresh token, if one was issued."""
        return self._require_token().refresh_token

    def token_to_revoke(self) -> Tuple[str, str]:
        """
        Select the token to revoke: the refresh token if present, else the access token.

        Returns:
            Tuple of (token, token_type_hint)
        """
        token = self._require_token()
        if token.refresh_token:
            return token.refresh_token, "refresh_token"
        return token.access_token, "access_token"

    def mark_revoked(self) -> None:
        """Mark the stored tokens as revoked; no further API calls are expected."""
        self._revoked = True

    def _require_token(self) -> TokenData:
        if self._token is None:
            raise TokenNotAvailableError("No tokens available. Run authorize_once() first.")
        if self._revoked:
            raise TokenNotAvailableError("Tokens have been revoked. Authorize again.")
        return self._token
