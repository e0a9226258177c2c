"""
EcoNews Configuration Management
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from pathlib import Path

# Compute a repo-relative absolute path for the SQLite DB so
# running scripts from different working directories still resolves.
_BASE_DIR = Path(__file__).resolve().parents[1]  # backend/
_DEFAULT_DB_PATH = _BASE_DIR / "econews.db"
_DEFAULT_DB_URI = f"sqlite+aiosqlite:///{_DEFAULT_DB_PATH.as_posix()}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_name: str = Field(default="EcoNews", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # Database (defaults to SQLite for local development without Docker)
    database_url: str = Field(default=_DEFAULT_DB_URI, alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # News queries
    default_page_size: int = Field(default=10, alias="DEFAULT_PAGE_SIZE")
    max_active_regions: int = Field(default=20, alias="MAX_ACTIVE_REGIONS")

    # Identity: the gateway forwards the authenticated caller id in this header
    user_id_header: str = Field(default="X-User-Id", alias="USER_ID_HEADER")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
