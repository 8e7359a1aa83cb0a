"""Pydantic Settings — loads configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    redis_url: str = "redis://localhost:6379"
    store_prefix: str = "seo"

    keyword_slots: int = 3
    page_size: int = 40
    max_page_size: int = 200
    title_max_length: int = 70
    description_max_length: int = 155
    save_retries: int = 3

    log_level: str = "INFO"

    @property
    def max_per_page_points(self) -> int:
        """Score ceiling per page: one point per keyword slot plus language."""
        return self.keyword_slots + 1


@lru_cache
def get_settings() -> Settings:
    return Settings()
