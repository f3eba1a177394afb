"""
Pytest configuration for the Video Store API.

Every test gets a fresh SQLite database in ``tmp_path`` with migrations
applied.  The ``records`` fixture loads two movies, three customers and
one overdue rental (movie one, customer one), which the rental tests
treat as their starting state.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, Iterator, Optional

import pytest
from fastapi.testclient import TestClient

from video_store_api.app.core.config import settings
from video_store_api.app.core.db import get_connection, get_cursor, init_db
from video_store_api.app.schemas.rental import Rental
from video_store_api.app.services.rental_service import RentalService
from video_store_api.app.services.rental_store import SqliteRentalStore


TODAY = date.today()


def days(n: int) -> date:
    return TODAY + timedelta(days=n)


@pytest.fixture
def database(tmp_path, monkeypatch) -> str:
    path = str(tmp_path / "video_store_test.db")
    monkeypatch.setattr(settings, "database_url", path)
    monkeypatch.setattr(settings, "enforce_inventory", False)
    init_db()
    return path


@pytest.fixture
def records(database) -> Dict[str, Any]:
    """Insert the baseline movies, customers and the overdue rental."""
    ids: Dict[str, Any] = {}
    with get_cursor() as cur:
        for key, title, inventory in (("movie_one", "Psycho", 10), ("movie_two", "Alien", 5)):
            cur.execute(
                "INSERT INTO movies (title, overview, release_date, inventory) VALUES (?, ?, ?, ?)",
                (title, f"{title} overview", "1979-05-25", inventory),
            )
            ids[key] = cur.lastrowid
        for key, name, postal_code in (
            ("customer_one", "Shelley Rocha", "24309"),
            ("customer_two", "Curran Stout", "94267"),
            ("customer_three", "Roanna Robinson", "15867"),
        ):
            cur.execute(
                "INSERT INTO customers (name, postal_code, phone) VALUES (?, ?, ?)",
                (name, postal_code, "(555) 555-0100"),
            )
            ids[key] = cur.lastrowid
        cur.execute(
            """
            INSERT INTO rentals (movie_id, customer_id, checkout_date, due_date, returned)
            VALUES (?, ?, ?, ?, 0)
            """,
            (ids["movie_one"], ids["customer_one"], days(-10).isoformat(), days(-3).isoformat()),
        )
        ids["overdue_rental"] = cur.lastrowid
    return ids


@pytest.fixture
def store(records) -> Iterator[SqliteRentalStore]:
    rental_store = SqliteRentalStore(get_connection())
    try:
        yield rental_store
    finally:
        rental_store.close()


@pytest.fixture
def service(store) -> RentalService:
    return RentalService(store, enforce_inventory=False)


@pytest.fixture
def client(records) -> Iterator[TestClient]:
    from video_store_api.app.main import app

    with TestClient(app) as test_client:
        yield test_client


def clear_rentals(store: SqliteRentalStore) -> None:
    store.conn.execute("DELETE FROM rentals")
    store.conn.commit()


def add_rental(
    store: SqliteRentalStore,
    movie_id: int,
    customer_id: int,
    due_date: date,
    returned: bool = False,
    checkout_date: Optional[date] = None,
    validate: bool = True,
) -> Rental:
    fields: Dict[str, Any] = {
        "movie_id": movie_id,
        "customer_id": customer_id,
        "due_date": due_date,
        "returned": returned,
    }
    if checkout_date is not None:
        fields["checkout_date"] = checkout_date
    return store.create_rental(fields, validate=validate)


def get_rental(store: SqliteRentalStore, rental_id: int) -> Rental:
    return next(r for r in store.find_rentals() if r.id == rental_id)
