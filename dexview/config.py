import os
from functools import lru_cache

from pydantic import BaseModel, Field


class Settings(BaseModel):
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    pokeapi_timeout: float = 5.0
    # Divisors in the pagination math, so never below 1
    default_page_size: int = Field(default=20, ge=1)
    search_result_limit: int = Field(default=20, ge=1)
    # Upper bound for the full-catalog fetch used by substring search
    catalog_limit: int = Field(default=10000, ge=1)
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Builds the settings from environment variables, falling back to defaults."""
    defaults = Settings()
    return Settings(
        pokeapi_base_url=os.getenv("POKEAPI_BASE_URL", defaults.pokeapi_base_url),
        pokeapi_timeout=os.getenv("POKEAPI_TIMEOUT", defaults.pokeapi_timeout),
        default_page_size=os.getenv("DEFAULT_PAGE_SIZE", defaults.default_page_size),
        search_result_limit=os.getenv("SEARCH_RESULT_LIMIT", defaults.search_result_limit),
        catalog_limit=os.getenv("CATALOG_LIMIT", defaults.catalog_limit),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
    )
