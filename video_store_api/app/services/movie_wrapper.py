"""
Client for the external movie catalog (The Movie Database).

``MovieWrapper.search`` queries the catalog's ``search/movie`` endpoint
and turns each hit into a ``MovieBase`` record that can be imported with
``POST /movies``.  The API key, base URLs, poster size and timeout come
from ``settings``.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from video_store_api.app.core.config import settings
from video_store_api.app.core.errors import CatalogError
from video_store_api.app.schemas.movie import MovieBase


logger = logging.getLogger(__name__)


class MovieWrapper:
    """Thin wrapper around the catalog's REST API."""

    @classmethod
    def search(cls, query: str) -> List[MovieBase]:
        """Return catalog movies matching ``query``.

        Raises ``CatalogError`` if the catalog cannot be reached or
        answers with anything other than HTTP 200.
        """
        url = f"{settings.movie_db_url.rstrip('/')}/search/movie"
        params = {"api_key": settings.movie_db_key, "query": query}
        try:
            response = requests.get(url, params=params, timeout=settings.movie_db_timeout)
        except requests.RequestException as exc:
            logger.warning("Movie catalog request failed for %r: %s", query, exc)
            raise CatalogError(f"Movie catalog unavailable: {exc}") from exc
        if response.status_code != 200:
            logger.warning(
                "Movie catalog returned HTTP %s for %r", response.status_code, query
            )
            raise CatalogError(f"Movie catalog returned HTTP {response.status_code}")

        results = response.json().get("results") or []
        logger.debug("Movie catalog returned %s results for %r", len(results), query)
        return [cls.construct_movie(item) for item in results]

    @classmethod
    def construct_movie(cls, api_result: Dict[str, Any]) -> MovieBase:
        return MovieBase(
            title=api_result["title"],
            overview=api_result.get("overview"),
            release_date=api_result.get("release_date") or None,
            image_url=cls.construct_image_url(api_result.get("poster_path")),
            external_id=api_result.get("id"),
        )

    @staticmethod
    def construct_image_url(image_name: Optional[str]) -> Optional[str]:
        # Poster paths come back as "/abc.jpg"; no poster means no URL.
        if not image_name:
            return None
        base = settings.movie_db_image_url.rstrip("/")
        return f"{base}/{settings.movie_db_image_size}/{image_name.lstrip('/')}"
