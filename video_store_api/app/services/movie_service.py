"""
Business logic for the movie catalog kept by the store.

Movies are created manually or imported from the external catalog,
listed, shown by title and have their shelf ``inventory`` adjusted by
staff.  ``available_inventory`` is never stored; it is computed from the
number of outstanding rentals each time a movie is shown.
"""

import logging
import sqlite3
from typing import List

from video_store_api.app.core.db import get_connection
from video_store_api.app.core.errors import NotFound, ValidationError
from video_store_api.app.schemas.movie import Movie, MovieCreate, MovieCreated, MovieDetail
from video_store_api.app.services.rental_service import available_inventory
from video_store_api.app.services.rental_store import MOVIE_COLUMNS


logger = logging.getLogger(__name__)


def _outstanding_count(cursor: sqlite3.Cursor, movie_id: int) -> int:
    row = cursor.execute(
        "SELECT COUNT(*) AS total FROM rentals WHERE movie_id = ? AND returned = 0",
        (movie_id,),
    ).fetchone()
    return row["total"] if row else 0


class MovieService:
    """Service for the store's own movie records."""

    @classmethod
    async def list_movies(cls) -> List[Movie]:
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {MOVIE_COLUMNS} FROM movies ORDER BY id ASC").fetchall()
            return [Movie(**dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_movie(cls, data: MovieCreate) -> MovieCreated:
        """Insert a movie and return its id, title and external id.

        The title is required and must be unique across the store.
        """
        title = (data.title or "").strip()
        if not title:
            raise ValidationError({"title": ["can't be blank"]})

        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO movies (title, external_id, overview, release_date, image_url, inventory)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        title,
                        data.external_id,
                        data.overview,
                        data.release_date,
                        data.image_url,
                        data.inventory,
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise ValidationError({"title": ["has already been taken"]}) from exc
            movie_id = cursor.lastrowid
            conn.commit()
            logger.info("Created movie %s '%s'", movie_id, title)
            return MovieCreated(id=movie_id, title=title, external_id=data.external_id)
        finally:
            conn.close()

    @classmethod
    async def get_movie_detail(cls, title: str) -> MovieDetail:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                f"SELECT {MOVIE_COLUMNS} FROM movies WHERE title = ?", (title,)
            ).fetchone()
            if not row:
                raise NotFound("title", title, f"No movie with title {title}")
            movie = Movie(**dict(row))
            return MovieDetail(
                title=movie.title,
                overview=movie.overview,
                release_date=movie.release_date,
                inventory=movie.inventory,
                available_inventory=available_inventory(
                    movie.inventory, _outstanding_count(cursor, movie.id)
                ),
            )
        finally:
            conn.close()

    @classmethod
    async def update_inventory(cls, title: str, inventory: int) -> MovieDetail:
        """Set the number of copies the store owns.

        Lowering inventory below the number of copies currently out is
        allowed; availability then reads zero until copies come back.
        """
        if inventory < 0:
            raise ValidationError({"inventory": ["must be greater than or equal to 0"]})
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE movies SET inventory = ?, updated_at = CURRENT_TIMESTAMP WHERE title = ?",
                (inventory, title),
            )
            if cursor.rowcount == 0:
                raise NotFound("title", title, f"No movie with title {title}")
            conn.commit()
            logger.info("Inventory of '%s' set to %s", title, inventory)
        finally:
            conn.close()
        return await cls.get_movie_detail(title)
