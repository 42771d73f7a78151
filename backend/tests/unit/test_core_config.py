"""Tests for application configuration.

Covers defaults, env var loading, and production security validation.
"""

from pathlib import Path

import pytest
from pydantic import SecretStr, ValidationError

from profile_wizard.core.config import _INSECURE_DEFAULT_PASSWORD, Settings

# Reusable test constants
_SECURE_DB_PASSWORD = "my-secure-production-password-123!"  # nosec B105
_RESEND_KEY = SecretStr("re_live_key")
_PRODUCTION = "production"


class TestDefaults:
    """Out-of-the-box settings."""

    def test_wizard_slot_defaults(self) -> None:
        """The slot key matches the browser storage key of the wizard."""
        s = Settings()

        assert s.wizard_storage_key == "multistep_form_data"
        assert s.wizard_storage_dir == Path(".wizard_state")

    def test_notification_failure_is_not_an_error_by_default(self) -> None:
        """A stored submission is a success even if its email fails."""
        assert Settings().notification_failure_is_error is False

    def test_database_urls(self) -> None:
        """Async and sync URLs target the same database."""
        s = Settings(database_host="db", database_name="wizard")

        assert s.database_url.startswith("postgresql+asyncpg://")
        assert s.database_url.endswith("@db:5432/wizard")
        assert s.database_url_sync.startswith("postgresql://")

    def test_env_vars_are_loaded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings read environment variables case-insensitively."""
        monkeypatch.setenv("NOTIFICATION_FAILURE_IS_ERROR", "true")
        monkeypatch.setenv("RATE_LIMIT_SUBMISSIONS", "2/minute")

        s = Settings()

        assert s.notification_failure_is_error is True
        assert s.rate_limit_submissions == "2/minute"


class TestProductionSecurityValidation:
    """Tests for production security requirements."""

    def test_allows_default_password_in_development(self) -> None:
        """Default password is allowed in development environment."""
        s = Settings(
            environment="development",
            database_password=_INSECURE_DEFAULT_PASSWORD,
        )
        assert s.database_password == _INSECURE_DEFAULT_PASSWORD

    def test_rejects_default_password_in_production(self) -> None:
        """Default password is rejected in production environment."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                environment=_PRODUCTION,
                database_password=_INSECURE_DEFAULT_PASSWORD,
                resend_api_key=_RESEND_KEY,
            )

        assert "Cannot use default database password in production" in str(
            exc_info.value
        )

    def test_rejects_missing_resend_key_in_production(self) -> None:
        """Production with notifications on needs a Resend key."""
        with pytest.raises(ValidationError, match="RESEND_API_KEY"):
            Settings(
                environment=_PRODUCTION,
                database_password=_SECURE_DB_PASSWORD,
                resend_api_key=SecretStr(""),
            )

    def test_allows_missing_resend_key_when_notifications_off(self) -> None:
        """No key is needed if nothing will be sent."""
        s = Settings(
            environment=_PRODUCTION,
            database_password=_SECURE_DB_PASSWORD,
            notifications_enabled=False,
            resend_api_key=SecretStr(""),
        )
        assert s.notifications_enabled is False

    def test_allows_secure_production_config(self) -> None:
        """A complete production configuration validates."""
        s = Settings(
            environment=_PRODUCTION,
            database_password=_SECURE_DB_PASSWORD,
            resend_api_key=_RESEND_KEY,
        )
        assert s.environment == _PRODUCTION

    def test_rejects_wildcard_cors(self) -> None:
        """Wildcard origins are rejected in every environment."""
        with pytest.raises(ValidationError, match="wildcard"):
            Settings(allowed_origins=["*"])

    @pytest.mark.parametrize("key", ["  ", "", "bad key", "a/b", "../escape"])
    def test_rejects_unsafe_storage_key(self, key: str) -> None:
        """The wizard slot key must be usable as a file name."""
        with pytest.raises(ValidationError, match="WIZARD_STORAGE_KEY"):
            Settings(wizard_storage_key=key)

    def test_accepts_dotted_storage_key(self) -> None:
        """Letters, digits, underscores, dots and dashes are allowed."""
        s = Settings(wizard_storage_key="profile-wizard.v2_draft")
        assert s.wizard_storage_key == "profile-wizard.v2_draft"
