"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    IAMSettings,
    IdentityProviderSettings,
)


class TestDatabaseSettings:
    """Tests for DatabaseSettings."""

    def test_defaults(self, monkeypatch):
        """Defaults target a local development database."""
        for var in ("HOST", "PORT", "DATABASE", "USERNAME", "PASSWORD"):
            monkeypatch.delenv(f"PULSE_DB_{var}", raising=False)

        settings = DatabaseSettings(_env_file=None)

        assert settings.host == "localhost"
        assert settings.database == "pulse"
        assert settings.password.get_secret_value() == ""

    def test_reads_prefixed_environment(self, monkeypatch):
        """Variables use the PULSE_DB_ prefix."""
        monkeypatch.setenv("PULSE_DB_HOST", "db.internal")
        monkeypatch.setenv("PULSE_DB_PORT", "6543")

        settings = DatabaseSettings(_env_file=None)

        assert settings.host == "db.internal"
        assert settings.port == 6543

    def test_pool_max_must_cover_min(self):
        """pool_max_connections below pool_min_connections is invalid."""
        with pytest.raises(ValidationError):
            DatabaseSettings(
                _env_file=None, pool_min_connections=5, pool_max_connections=2
            )

    def test_connection_string_hides_password(self, mock_db_settings):
        """The loggable connection string never contains the password."""
        assert "testpass" not in mock_db_settings.connection_string
        assert mock_db_settings.connection_string == (
            "postgresql://testuser@testhost:5432/testdb"
        )


class TestIAMSettings:
    """Tests for IAMSettings."""

    def test_reads_unprefixed_environment(self, monkeypatch):
        """IAM variables carry no prefix."""
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "client-123")
        monkeypatch.setenv("ADMIN_EMAILS", "a@voqa.com,b@voqa.com")
        monkeypatch.delenv("SUPER_ADMIN_EMAILS", raising=False)

        settings = IAMSettings(_env_file=None)

        assert settings.google_client_id == "client-123"
        assert settings.admin_emails == "a@voqa.com,b@voqa.com"
        assert settings.super_admin_emails is None

    def test_default_domains(self, monkeypatch):
        """The default domain allow-list is populated."""
        monkeypatch.delenv("ALLOWED_DOMAINS", raising=False)

        settings = IAMSettings(_env_file=None)

        assert settings.allowed_domains == "kubapay.com,vixtechnology.com,voqa.com"


class TestIdentityProviderSettings:
    """Tests for IdentityProviderSettings."""

    def test_defaults(self, monkeypatch):
        """Defaults point at Google's tokeninfo endpoint."""
        monkeypatch.delenv("PULSE_IDP_TOKENINFO_URL", raising=False)
        monkeypatch.delenv("PULSE_IDP_TIMEOUT_SECONDS", raising=False)

        settings = IdentityProviderSettings(_env_file=None)

        assert settings.tokeninfo_url == "https://oauth2.googleapis.com/tokeninfo"
        assert settings.timeout_seconds == 10.0

    def test_timeout_must_be_positive(self):
        """A zero timeout is rejected."""
        with pytest.raises(ValidationError):
            IdentityProviderSettings(_env_file=None, timeout_seconds=0)
