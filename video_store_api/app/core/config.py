"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API runs out of
the box against a local SQLite file; override them via environment
variables in any real deployment.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Video Store API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path for a log file in addition to the console handler.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "video_store.db")

    # Reject check-outs when every copy of a movie is already rented.
    # Off by default: historically the store let the shelf count go
    # stale and relied on staff to reconcile inventory.
    enforce_inventory: bool = _env_flag("ENFORCE_INVENTORY")

    # External movie catalog (The Movie Database).
    movie_db_url: str = os.getenv("MOVIE_DB_URL", "https://api.themoviedb.org/3")
    movie_db_key: str = os.getenv("MOVIE_DB_KEY", "")
    movie_db_image_url: str = os.getenv("MOVIE_DB_IMAGE_URL", "https://image.tmdb.org/t/p/")
    movie_db_image_size: str = os.getenv("MOVIE_DB_IMAGE_SIZE", "w185")
    movie_db_timeout: float = float(os.getenv("MOVIE_DB_TIMEOUT", "10"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before this module is imported.
settings = Settings()
