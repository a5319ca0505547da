import os
from functools import lru_cache

from pydantic import BaseModel


class Settings(BaseModel):
    database_url: str = os.getenv(
        "DATABASE_URL",
        "postgresql+asyncpg://washx:washx@db:5432/washx",
    )
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    seed_on_startup: bool = os.getenv("SEED_ON_STARTUP", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    manifest_rows_per_page: int = int(os.getenv("MANIFEST_ROWS_PER_PAGE", "10"))
    dashboard_default_days: int = int(os.getenv("DASHBOARD_DEFAULT_DAYS", "7"))
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
