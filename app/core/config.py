"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "NutriSnap API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "nutrisnap"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "nutrisnap"
    database_ssl_mode: str = "prefer"
    # Full async DSN; when set it wins over the individual parts (e.g. sqlite+aiosqlite:///./dev.db)
    database_dsn: str = ""

    # Pool (ignored for SQLite)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # Fasting defaults
    default_fasting_target_hours: float = 16.0
    default_fasting_protocol: str = "16:8"
    fasting_history_default_limit: int = 20
    fasting_history_max_limit: int = 100

    # Food summary window when no "from" date is given
    food_summary_default_days: int = 30

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=require") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.database_dsn:
            return self.database_dsn.replace("+asyncpg", "").replace("+aiosqlite", "")
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        if self.database_dsn:
            return self.database_dsn
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={self.database_ssl_mode}")

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
