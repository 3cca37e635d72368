"""
Application settings.
Loaded from environment variables and .env.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from .env"""

    # App
    APP_NAME: str = "Audience Campaigns"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_KEY: str = ""

    # Dispatch
    DELIVERY_SUCCESS_PROBABILITY: float = 0.9
    DISPATCH_CONCURRENCY: int = 1
    DISPATCH_RANDOM_SEED: Optional[int] = None

    # Customer store paging (PostgREST caps responses at 1000 rows by default)
    CUSTOMER_PAGE_SIZE: int = 1000

    # CORS - allowed origins (comma separated)
    CORS_ORIGINS: str = "*"

    @property
    def log_level_upper(self) -> str:
        """Log level upper-cased for the logging module."""
        return self.LOG_LEVEL.upper()

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        """
        List of allowed CORS origins.

        Set explicitly in production.
        """
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
