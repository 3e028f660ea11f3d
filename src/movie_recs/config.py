"""Settings for the TMDb client and server, read from the environment."""

import os
from functools import lru_cache

from attrs import define


@define
class Settings:
    """Application settings."""

    tmdb_api_key: str
    language: str = "en-US"
    tmdb_base_url: str = "https://api.themoviedb.org/3/"
    image_base_url: str = "https://image.tmdb.org/t/p/w500"
    timeout: float = 30.0
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Read settings once per process from TMDB_* and LOG_LEVEL variables.

    A missing API key is not an error here; upstream rejects the requests
    and that surfaces as a fetch failure.
    """
    return Settings(
        tmdb_api_key=os.environ.get("TMDB_API", ""),
        language=os.environ.get("TMDB_LANGUAGE", "en-US"),
        tmdb_base_url=os.environ.get(
            "TMDB_BASE_URL", "https://api.themoviedb.org/3/"
        ),
        image_base_url=os.environ.get(
            "TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p/w500"
        ),
        timeout=float(os.environ.get("TMDB_TIMEOUT", "30")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )
