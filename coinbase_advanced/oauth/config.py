"""
OAuth configuration for Coinbase API integration.

This module provides the immutable credentials used by the authorization
flow. Configuration can be loaded from environment variables (or a `.env`
file) or provided programmatically.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from .exceptions import ConfigError

# Coinbase OAuth endpoints
AUTHORIZATION_URL = "https://www.coinbase.com/oauth/authorize"
TOKEN_URL = "https://www.coinbase.com/oauth/token"
REVOKE_URL = "https://api.coinbase.com/oauth/revoke"


@dataclass(frozen=True)
class OAuthConfig:
    """
    Credentials and endpoints for Coinbase OAuth 2.0.

    The callback listener binds to the host and port of `redirect_url`, so
    the redirect URL must carry an explicit port and be reachable from the
    browser used to authorize (typically http://localhost:<port>).

    Attributes:
        client_id: OAuth client ID from the Coinbase developer portal
        client_secret: OAuth client secret from the Coinbase developer portal
        redirect_url: Redirect URL registered for the application
        authorization_url: Coinbase OAuth authorization endpoint
        token_url: Coinbase OAuth token endpoint
        revoke_url: Coinbase OAuth revocation endpoint
        ssl_cert_path: Certificate for an HTTPS callback listener (optional)
        ssl_key_path: Private key for an HTTPS callback listener (optional)
        callback_timeout: Seconds to wait for the browser redirect
    """

    client_id: str
    client_secret: str
    redirect_url: str

    authorization_url: str = AUTHORIZATION_URL
    token_url: str = TOKEN_URL
    revoke_url: str = REVOKE_URL

    ssl_cert_path: Optional[str] = None
    ssl_key_path: Optional[str] = None

    callback_timeout: float = 300.0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigError("client_id cannot be empty")

        if not self.client_secret:
            raise ConfigError("client_secret cannot be empty")

        parts = urlsplit(self.redirect_url or "")
        if parts.scheme not in ("http", "https"):
            raise ConfigError(
                f"redirect_url must be an absolute http(s) URL, got {self.redirect_url!r}"
            )
        if not parts.hostname:
            raise ConfigError(f"redirect_url has no host: {self.redirect_url!r}")
        try:
            port = parts.port
        except ValueError as e:
            raise ConfigError(f"redirect_url has an invalid port: {self.redirect_url!r}") from e
        if port is None:
            raise ConfigError(
                f"redirect_url must include a port for the callback listener, "
                f"got {self.redirect_url!r}"
            )

        if bool(self.ssl_cert_path) != bool(self.ssl_key_path):
            raise ConfigError("ssl_cert_path and ssl_key_path must be set together")

        if self.callback_timeout <= 0:
            raise ConfigError("callback_timeout must be positive")

    @property
    def callback_scheme(self) -> str:
        """Scheme of the redirect URL (http or https)."""
        return urlsplit(self.redirect_url).scheme

    @property
    def callback_host(self) -> str:
        """Host the callback listener binds to."""
        return urlsplit(self.redirect_url).hostname

    @property
    def callback_port(self) -> int:
        """Port the callback listener binds to."""
        return urlsplit(self.redirect_url).port

    @classmethod
    def from_env(cls, settings=None) -> "OAuthConfig":
        """
        Load configuration from environment variables or a `.env` file.

        Required environment variables:
            CB_OAUTH_CLIENT_ID: OAuth client ID
            CB_OAUTH_CLIENT_SECRET: OAuth client secret
            CB_OAUTH_REDIRECT_URL: Redirect URL (e.g. http://localhost:3001)

        Optional environment variables:
            CB_OAUTH_SSL_CERT_PATH / CB_OAUTH_SSL_KEY_PATH: HTTPS callback listener
            CB_OAUTH_CALLBACK_TIMEOUT: Seconds to wait for the redirect (default: 300)

        Args:
            settings: Pre-loaded Settings (loads from environment if not provided)

        Returns:
            OAuthConfig instance

        Raises:
            ConfigError: If required variables are missing or invalid
        """
        if settings is None:
            from ..config import Settings

            settings = Settings()

        if not settings.has_credentials:
            raise ConfigError(
                "Missing Coinbase OAuth credentials. Set environment variables "
                "(or add them to .env):\n"
                "  CB_OAUTH_CLIENT_ID=your_client_id\n"
                "  CB_OAUTH_CLIENT_SECRET=your_client_secret\n"
                "  CB_OAUTH_REDIRECT_URL=http://localhost:3001\n"
            )

        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            redirect_url=settings.redirect_url,
            ssl_cert_path=settings.ssl_cert_path,
            ssl_key_path=settings.ssl_key_path,
            callback_timeout=settings.callback_timeout,
        )
