from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Crew Availability"
    BACKEND_CORS_ORIGINS: str = ""  # comma separated

    # Database
    DATABASE_URL: str = "sqlite:///./availability.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = None

    # Availability rules
    # "approved_only" or "any_status": which overrides take part in per-worker resolution
    AVAILABILITY_OVERRIDE_POLICY: str = "approved_only"
    DEFAULT_MAX_HOURS: int = 8

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.BACKEND_CORS_ORIGINS.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
