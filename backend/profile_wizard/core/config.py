"""Application configuration loaded from environment variables.

Settings for the database, the HTTP API, confirmation email delivery and the
wizard persistence slot. Uses pydantic-settings for validation and .env file
support.
"""

import re
from pathlib import Path

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure default password that must not be used in production
# Security: Runtime check in check_production_security() prevents use in production
_INSECURE_DEFAULT_PASSWORD = "profile_wizard_dev_password"  # nosec B105

# Slot keys become file names, so restrict them to a portable charset.
SLOT_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "profile_wizard"
    database_user: str = "profile_wizard_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD

    # CORS (Security)
    # Default allows localhost:3000 for the wizard frontend in development
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Confirmation email (Resend)
    email_from: str = "onboarding@resend.dev"
    resend_api_key: SecretStr = SecretStr("")
    notifications_enabled: bool = True
    # When true, a stored submission whose confirmation email failed is
    # reported to the caller as a 500 instead of a 201.
    notification_failure_is_error: bool = False

    # Wizard persistence slot
    wizard_storage_dir: Path = Path(".wizard_state")
    wizard_storage_key: str = "multistep_form_data"

    # Rate Limiting (Security)
    # Format: "count/period" (e.g., "5/minute", "100/hour")
    rate_limit_submissions: str = "5/minute"
    rate_limit_enabled: bool = True  # Disable for testing

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        return (
            f"postgresql+asyncpg://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def database_url_sync(self) -> str:
        """Plain PostgreSQL URL for offline (SQL-only) Alembic runs."""
        return (
            f"postgresql://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate production security requirements.

        Checks:
        - CORS must not use wildcard origin (incompatible with credentials)
        - Wizard storage key must be a safe file name
        - Database password must not be the default in production
        - RESEND_API_KEY must be set in production when notifications are on
        """
        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "CORS is configured with credentials, which are "
                "incompatible with wildcard origins."
            )
            raise ValueError(msg)

        if not SLOT_KEY_RE.match(self.wizard_storage_key):
            msg = (
                "WIZARD_STORAGE_KEY may only contain letters, digits, "
                "'_', '.' and '-'."
            )
            raise ValueError(msg)

        if self.environment == "production":
            if self.database_password == _INSECURE_DEFAULT_PASSWORD:
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            if (
                self.notifications_enabled
                and not self.resend_api_key.get_secret_value()
            ):
                msg = (
                    "RESEND_API_KEY must be set in production while "
                    "NOTIFICATIONS_ENABLED=true."
                )
                raise ValueError(msg)

        return self


settings = Settings()
