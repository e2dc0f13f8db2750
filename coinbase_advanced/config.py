"""Environment-backed settings for the Coinbase client.

Credentials are read from environment variables or from a `.env` file in
the working directory, so they never have to be hardcoded in scripts.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """OAuth settings loaded from the environment.

    Attributes:
        client_id: OAuth client ID from the Coinbase developer portal
        client_secret: OAuth client secret from the Coinbase developer portal
        redirect_url: Redirect URL registered for the OAuth application
            (must include host and port, e.g. http://localhost:3001)
        ssl_cert_path: Optional certificate for an HTTPS callback listener
        ssl_key_path: Optional private key for an HTTPS callback listener
        callback_timeout: Seconds to wait for the browser redirect
    """

    client_id: str = ""
    client_secret: str = ""
    redirect_url: str = ""
    ssl_cert_path: Optional[str] = None
    ssl_key_path: Optional[str] = None
    callback_timeout: float = 300.0

    model_config = SettingsConfigDict(
        env_prefix="CB_OAUTH_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def has_credentials(self) -> bool:
        """Whether client id, client secret and redirect URL are all set."""
        return bool(self.client_id and self.client_secret and self.redirect_url)
