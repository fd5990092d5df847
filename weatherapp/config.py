"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the weather repository."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", extra="ignore")

    staleness_minutes: int = 30
    api_key: str | None = None
    base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    location: str = "Berlin,de"
    units: str = "metric"  # options: standard, metric, imperial
    request_timeout_seconds: float = 10.0
    cache_backend: str = "memory"  # options: memory, file, redis
    cache_file_path: str = ".weather_cache.json"
    cache_redis_url: str | None = None
    cache_redis_key: str = "weather:current"
    log_level: str = "INFO"

    @field_validator("staleness_minutes", mode="after")
    @classmethod
    def require_positive_threshold(cls, v: int) -> int:
        """A zero or negative threshold would make every cached entry stale."""
        if v <= 0:
            raise ValueError("staleness_minutes must be greater than zero")
        return v

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("cache_backend", mode="after")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return v.strip().lower()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'api_key'})}")
