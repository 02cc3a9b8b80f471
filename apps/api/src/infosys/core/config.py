"""
Application Configuration

All settings are loaded from environment variables (or a local .env file)
through pydantic-settings. Import the cached ``settings`` instance rather
than constructing ``Settings`` directly.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Registration number formats, keyed by version.
# v1: YY/dept/code/NNN(N), e.g. 24/is/co/346
REG_NUMBER_PATTERNS: dict[str, str] = {
    "v1": r"^[0-9]{2}/[a-zA-Z]{2,4}/[a-zA-Z]{2,4}/[0-9]{3,4}$",
}


class Settings(BaseSettings):
    """Runtime configuration for the InfoSys portal API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    python_env: str = "development"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./database/information_systems.db"
    database_echo: bool = False
    store_timeout_seconds: float = Field(default=5.0, gt=0)

    # Redis (rate limiting backend, optional)
    redis_url: str = "redis://localhost:6379/0"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5000"

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 7

    # Passcodes
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    passcode_length: int = 10
    min_passcode_length: int = 6

    # Registration rules
    reg_number_pattern_version: str = "v1"
    allowed_email_domain: str | None = None

    # Demo only: echo the one-time passcode in the approval response
    expose_passcode_in_response: bool = False

    # Bootstrap admin account
    admin_name: str = "System Administrator"
    admin_reg_number: str = "24/is/ad/001"
    admin_email: str = "admin@informationsystems.uniuyo.edu.ng"
    admin_passcode: str = "admin123"

    # Email
    resend_api_key: str | None = None
    email_from: str = "InfoSys UniUyo <noreply@informationsystems.edu.org>"
    frontend_url: str = "http://localhost:5000"
    admin_notification_email: str = "admin@informationsystems.edu.org"

    @field_validator("passcode_length")
    @classmethod
    def validate_passcode_length(cls, v: int) -> int:
        if not 8 <= v <= 10:
            raise ValueError("passcode_length must be between 8 and 10")
        return v

    @field_validator("reg_number_pattern_version")
    @classmethod
    def validate_pattern_version(cls, v: str) -> str:
        if v not in REG_NUMBER_PATTERNS:
            raise ValueError(
                f"Unknown reg_number_pattern_version '{v}'. "
                f"Known versions: {', '.join(REG_NUMBER_PATTERNS)}"
            )
        return v

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def reg_number_pattern(self) -> str:
        return REG_NUMBER_PATTERNS[self.reg_number_pattern_version]

    @property
    def passcode_visible_in_response(self) -> bool:
        """The plaintext passcode is never returned by a production deployment."""
        return self.expose_passcode_in_response and not self.is_production


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


settings = get_settings()
