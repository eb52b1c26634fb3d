from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./delivery_admin.db"
    service_name: str = "delivery-admin"
    log_level: str = "INFO"
    cors_origins: str = "*"
    business_timezone: str = "UTC"
    currency: str = "BRL"

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v.startswith(("postgresql", "sqlite")):
            raise ValueError("Only PostgreSQL and SQLite are supported")
        return v

    @field_validator("business_timezone")
    @classmethod
    def validate_business_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Zone in which "today" is evaluated for dashboard metrics."""
        return ZoneInfo(self.business_timezone)


settings = Settings()
