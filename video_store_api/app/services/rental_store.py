"""
Storage collaborator for the rental service.

``RentalStore`` is the minimal interface the rental logic needs: look up
a movie or customer, filter rentals, create a rental and save one back.
Filters are explicit keyword arguments rather than chained query state,
so each query can be read (and tested) on its own.

``SqliteRentalStore`` implements the interface on top of the application
database.  It owns one connection; callers close it when the request is
done.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Protocol, runtime_checkable

from video_store_api.app.core.errors import NotFound, ValidationError
from video_store_api.app.schemas.customer import Customer
from video_store_api.app.schemas.movie import Movie
from video_store_api.app.schemas.rental import Rental
from video_store_api.app.services.validation import rental_errors


logger = logging.getLogger(__name__)

MOVIE_COLUMNS = "id, title, external_id, overview, release_date, image_url, inventory"
CUSTOMER_COLUMNS = "id, name, postal_code, phone, registered_at"
RENTAL_COLUMNS = "id, movie_id, customer_id, checkout_date, due_date, returned"


@runtime_checkable
class RentalStore(Protocol):
    """Operations the rental service performs against storage."""

    def find_movie_by_title(self, title: str) -> Optional[Movie]:
        ...

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        ...

    def find_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        ...

    def find_rentals(
        self,
        movie_id: Optional[int] = None,
        customer_id: Optional[int] = None,
        returned: Optional[bool] = None,
    ) -> List[Rental]:
        """Rentals matching every given filter, in creation order."""
        ...

    def create_rental(self, fields: Mapping[str, Any], validate: bool = True) -> Rental:
        ...

    def save_rental(self, rental: Rental) -> None:
        ...

    def transaction(self) -> Any:
        """Context manager holding the write lock for a read-then-write."""
        ...


class SqliteRentalStore:
    """``RentalStore`` backed by the SQLite application database."""

    def __init__(self, conn: sqlite3.Connection, clock: Callable[[], date] = date.today) -> None:
        self.conn = conn
        self.clock = clock
        self._held = False

    def close(self) -> None:
        self.conn.close()

    def find_movie_by_title(self, title: str) -> Optional[Movie]:
        row = self.conn.execute(
            f"SELECT {MOVIE_COLUMNS} FROM movies WHERE title = ?", (title,)
        ).fetchone()
        return Movie(**dict(row)) if row else None

    def get_movie(self, movie_id: int) -> Optional[Movie]:
        row = self.conn.execute(
            f"SELECT {MOVIE_COLUMNS} FROM movies WHERE id = ?", (movie_id,)
        ).fetchone()
        return Movie(**dict(row)) if row else None

    def find_customer_by_id(self, customer_id: int) -> Optional[Customer]:
        row = self.conn.execute(
            f"SELECT {CUSTOMER_COLUMNS} FROM customers WHERE id = ?", (customer_id,)
        ).fetchone()
        return Customer(**dict(row)) if row else None

    def find_rentals(
        self,
        movie_id: Optional[int] = None,
        customer_id: Optional[int] = None,
        returned: Optional[bool] = None,
    ) -> List[Rental]:
        query = f"SELECT {RENTAL_COLUMNS} FROM rentals"
        params: list = []
        where_clauses: list[str] = []
        if movie_id is not None:
            where_clauses.append("movie_id = ?")
            params.append(movie_id)
        if customer_id is not None:
            where_clauses.append("customer_id = ?")
            params.append(customer_id)
        if returned is not None:
            where_clauses.append("returned = ?")
            params.append(1 if returned else 0)
        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY id ASC"
        rows = self.conn.execute(query, tuple(params)).fetchall()
        return [Rental(**dict(row)) for row in rows]

    def create_rental(self, fields: Mapping[str, Any], validate: bool = True) -> Rental:
        """Insert a rental and return it.

        ``checkout_date`` defaults to today and ``returned`` to false.
        With ``validate`` switched off the due date may lie in the past,
        which is how historical rentals (already overdue) are imported.
        """
        today = self.clock()
        values: Dict[str, Any] = dict(fields)
        values.setdefault("checkout_date", today)
        values.setdefault("returned", False)

        errors = rental_errors(values, today if validate else None)
        if values.get("movie_id") is not None and self.get_movie(values["movie_id"]) is None:
            errors.setdefault("movie", []).append("must exist")
        if values.get("customer_id") is not None and self.find_customer_by_id(values["customer_id"]) is None:
            errors.setdefault("customer", []).append("must exist")
        if errors:
            raise ValidationError(errors)

        cursor = self.conn.execute(
            """
            INSERT INTO rentals (movie_id, customer_id, checkout_date, due_date, returned)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                values["movie_id"],
                values["customer_id"],
                values["checkout_date"].isoformat(),
                values["due_date"].isoformat(),
                int(bool(values["returned"])),
            ),
        )
        rental_id = cursor.lastrowid
        if not self._held:
            self.conn.commit()
        logger.debug("Created rental %s (movie=%s customer=%s)", rental_id, values["movie_id"], values["customer_id"])
        return Rental(
            id=rental_id,
            movie_id=values["movie_id"],
            customer_id=values["customer_id"],
            checkout_date=values["checkout_date"],
            due_date=values["due_date"],
            returned=bool(values["returned"]),
        )

    def save_rental(self, rental: Rental) -> None:
        """Write ``rental`` back.

        The creation rules are not re-checked, so a rental whose due
        date has since passed can still be marked returned.  A returned
        rental cannot be reverted to outstanding.
        """
        row = self.conn.execute(
            "SELECT returned FROM rentals WHERE id = ?", (rental.id,)
        ).fetchone()
        if row is None:
            raise NotFound("rental", rental.id)
        if row["returned"] and not rental.returned:
            raise ValidationError({"returned": ["cannot be reverted once the movie is back"]})

        self.conn.execute(
            """
            UPDATE rentals
            SET checkout_date = ?, due_date = ?, returned = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (
                rental.checkout_date.isoformat(),
                rental.due_date.isoformat(),
                int(rental.returned),
                rental.id,
            ),
        )
        if not self._held:
            self.conn.commit()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Hold the database write lock until the block exits.

        ``BEGIN IMMEDIATE`` takes the reserved lock before the first
        read, so a second writer waits instead of selecting the same
        outstanding rental.  Writes inside the block commit together.
        Uncommitted writes already pending on the connection are refused
        rather than folded into the block.
        """
        if self.conn.in_transaction:
            raise RuntimeError("transaction() entered with uncommitted writes pending")
        self.conn.execute("BEGIN IMMEDIATE")
        self._held = True
        try:
            yield
        except Exception:
            self.conn.rollback()
            raise
        else:
            self.conn.commit()
        finally:
            self._held = False
