"""Tests for environment-backed settings."""

from coinbase_advanced.config import Settings


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Settings default to empty credentials."""
        monkeypatch.chdir(tmp_path)
        for name in ("CLIENT_ID", "CLIENT_SECRET", "REDIRECT_URL"):
            monkeypatch.delenv(f"CB_OAUTH_{name}", raising=False)

        settings = Settings()

        assert settings.client_id == ""
        assert settings.ssl_cert_path is None
        assert settings.callback_timeout == 300.0
        assert settings.has_credentials is False

    def test_reads_environment(self, monkeypatch, tmp_path):
        """Settings read CB_OAUTH_* variables."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CB_OAUTH_CLIENT_ID", "abc")
        monkeypatch.setenv("CB_OAUTH_CLIENT_SECRET", "def")
        monkeypatch.setenv("CB_OAUTH_REDIRECT_URL", "http://localhost:3001")

        settings = Settings()

        assert settings.client_id == "abc"
        assert settings.has_credentials is True

    def test_reads_dotenv_file(self, monkeypatch, tmp_path):
        """Settings fall back to a .env file in the working directory."""
        monkeypatch.chdir(tmp_path)
        for name in ("CLIENT_ID", "CLIENT_SECRET", "REDIRECT_URL"):
            monkeypatch.delenv(f"CB_OAUTH_{name}", raising=False)
        (tmp_path / ".env").write_text(
            "CB_OAUTH_CLIENT_ID=file_id\n"
            "CB_OAUTH_CLIENT_SECRET=file_secret\n"
            "CB_OAUTH_REDIRECT_URL=http://localhost:3002\n"
        )

        settings = Settings()

        assert settings.client_id == "file_id"
        assert settings.redirect_url == "http://localhost:3002"
