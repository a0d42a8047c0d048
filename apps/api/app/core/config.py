"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    jwt_cookie_expire_days: int = 30
    environment: Literal["development", "production"] = "development"

    model_config = SettingsConfigDict(env_prefix="DEVCAMPER_", env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
