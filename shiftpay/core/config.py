"""
Configuration management for ShiftPay Backend
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import Optional, List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Required settings
    DATABASE_URL: str = Field(..., description="PostgreSQL database URL")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    # CORS settings
    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. Use '*' for local only."
    )

    # Timezone used when serializing datetimes in API responses (storage is UTC)
    TZ: str = Field(default="UTC", description="Display timezone for API datetimes")

    # Time and pay rules
    DAILY_OVERTIME_THRESHOLD_HOURS: float = Field(
        default=8,
        gt=0,
        le=24,
        description="Hours per day paid at the regular rate before overtime starts",
    )
    OVERTIME_MULTIPLIER: float = Field(
        default=1.5,
        ge=1,
        description="Rate factor applied to hours beyond the daily threshold",
    )
    OVERNIGHT_POLICY: str = Field(
        default="wrap",
        description="End time before start time: 'wrap' = overnight shift (+24h), 'clamp' = 0 hours",
    )
    DEFAULT_DEDUCTION_PERCENT: float = Field(
        default=0.10,
        ge=0,
        le=1,
        description="Fraction of gross pay deducted when payroll is generated without an explicit policy",
    )

    # Version (can be git SHA or semver)
    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @field_validator("OVERNIGHT_POLICY")
    @classmethod
    def validate_overnight_policy(cls, v: str) -> str:
        allowed = ["wrap", "clamp"]
        if v.lower() not in allowed:
            raise ValueError(f"OVERNIGHT_POLICY must be one of {allowed}")
        return v.lower()

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            # ALLOWED_ORIGINS must not be wildcard in production
            if self.ALLOWED_ORIGINS == "*" or not self.ALLOWED_ORIGINS:
                raise ValueError(
                    "ALLOWED_ORIGINS must be explicitly set (not '*') in production environment"
                )

    def get_allowed_origins_list(self) -> List[str]:
        """
        Get list of allowed CORS origins

        Returns:
            List of allowed origins (or ['*'] for local)
        """
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Create settings instance
settings = Settings()

# Validate production settings if in prod
if settings.APP_ENV == "prod":
    settings.validate_production()
