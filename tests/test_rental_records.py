"""Rental record rules, outstanding selection and the three listings."""

from __future__ import annotations

import pytest

from conftest import TODAY, add_rental, clear_rentals, days, get_rental
from video_store_api.app.core.errors import NotFound, ValidationError
from video_store_api.app.schemas.movie import Movie
from video_store_api.app.schemas.rental import RentalStatus


def _movie(store, records, key="movie_one") -> Movie:
    return store.get_movie(records[key])


# Creation rules


def test_create_rental_defaults(store, records):
    rental = add_rental(store, records["movie_one"], records["customer_one"], days(1))
    assert rental.checkout_date == TODAY
    assert rental.returned is False
    assert get_rental(store, rental.id) == rental


def test_create_rental_requires_customer(store, records):
    with pytest.raises(ValidationError) as exc:
        store.create_rental({"movie_id": records["movie_one"], "due_date": days(1)})
    assert "customer" in exc.value.errors


def test_create_rental_requires_movie(store, records):
    with pytest.raises(ValidationError) as exc:
        store.create_rental({"customer_id": records["customer_one"], "due_date": days(1)})
    assert "movie" in exc.value.errors


def test_create_rental_requires_due_date(store, records):
    with pytest.raises(ValidationError) as exc:
        store.create_rental({"movie_id": records["movie_one"], "customer_id": records["customer_one"]})
    assert "due_date" in exc.value.errors


def test_create_rental_reports_every_missing_field(store, records):
    with pytest.raises(ValidationError) as exc:
        store.create_rental({})
    assert set(exc.value.errors) == {"movie", "customer", "due_date"}
    assert len(store.find_rentals()) == 1


def test_create_rental_rejects_unknown_references(store, records):
    with pytest.raises(ValidationError) as exc:
        store.create_rental({"movie_id": 9999, "customer_id": 9999, "due_date": days(1)})
    assert exc.value.errors == {"movie": ["must exist"], "customer": ["must exist"]}


@pytest.mark.parametrize("offset", [-1, 0])
def test_due_date_must_be_in_the_future(store, records, offset):
    with pytest.raises(ValidationError) as exc:
        add_rental(store, records["movie_one"], records["customer_one"], days(offset))
    assert "due_date" in exc.value.errors


def test_due_date_tomorrow_is_accepted(store, records):
    rental = add_rental(store, records["movie_one"], records["customer_one"], days(1))
    assert rental.due_date == days(1)


def test_rental_with_old_due_date_can_be_updated(store, records):
    rental = get_rental(store, records["overdue_rental"])
    store.save_rental(rental.model_copy(update={"returned": True}))
    assert get_rental(store, rental.id).returned is True


def test_returned_rental_cannot_be_reverted(store, records):
    rental = add_rental(store, records["movie_one"], records["customer_two"], days(5), returned=True)
    with pytest.raises(ValidationError) as exc:
        store.save_rental(rental.model_copy(update={"returned": False}))
    assert "returned" in exc.value.errors
    assert get_rental(store, rental.id).returned is True


def test_save_unknown_rental(store, records):
    rental = get_rental(store, records["overdue_rental"]).model_copy(update={"id": 4242})
    with pytest.raises(NotFound):
        store.save_rental(rental)


# Transactions


def test_transaction_commits_writes_together(store, records):
    with store.transaction():
        rental = add_rental(store, records["movie_two"], records["customer_two"], days(3))
        store.save_rental(rental.model_copy(update={"returned": True}))
    store.conn.rollback()
    assert get_rental(store, rental.id).returned is True


def test_transaction_refuses_pending_writes(store, records):
    store.conn.execute("UPDATE movies SET inventory = 0 WHERE id = ?", (records["movie_two"],))
    assert store.conn.in_transaction
    with pytest.raises(RuntimeError):
        with store.transaction():
            pass
    store.conn.rollback()
    assert store.get_movie(records["movie_two"]).inventory == 5


# find_rentals filters


def test_find_rentals_filters_combine(store, records):
    returned = add_rental(store, records["movie_one"], records["customer_one"], days(4), returned=True)
    other_customer = add_rental(store, records["movie_one"], records["customer_two"], days(4))
    other_movie = add_rental(store, records["movie_two"], records["customer_one"], days(4))

    pair = store.find_rentals(movie_id=records["movie_one"], customer_id=records["customer_one"])
    assert [r.id for r in pair] == [records["overdue_rental"], returned.id]

    outstanding = store.find_rentals(returned=False)
    assert [r.id for r in outstanding] == [records["overdue_rental"], other_customer.id, other_movie.id]

    assert store.find_rentals(movie_id=records["movie_two"], returned=True) == []


# first_outstanding


def test_first_outstanding_returns_the_only_unreturned_rental(service, store, records):
    movie = _movie(store, records)
    customer = store.find_customer_by_id(records["customer_one"])
    assert service.first_outstanding(movie, customer).id == records["overdue_rental"]


def test_first_outstanding_none_when_all_returned(service, store, records):
    rental = get_rental(store, records["overdue_rental"])
    store.save_rental(rental.model_copy(update={"returned": True}))
    movie = _movie(store, records)
    customer = store.find_customer_by_id(records["customer_one"])
    assert service.first_outstanding(movie, customer) is None


def test_first_outstanding_prefers_earlier_due_dates(service, store, records):
    clear_rentals(store)
    add_rental(store, records["movie_one"], records["customer_one"], days(30))
    first = add_rental(store, records["movie_one"], records["customer_one"], days(10))
    add_rental(store, records["movie_one"], records["customer_one"], days(20))

    movie = _movie(store, records)
    customer = store.find_customer_by_id(records["customer_one"])
    assert service.first_outstanding(movie, customer) == first


def test_first_outstanding_ignores_returned_rentals(service, store, records):
    clear_rentals(store)
    add_rental(store, records["movie_one"], records["customer_one"], days(10), returned=True)
    outstanding = add_rental(store, records["movie_one"], records["customer_one"], days(30))

    movie = _movie(store, records)
    customer = store.find_customer_by_id(records["customer_one"])
    assert service.first_outstanding(movie, customer) == outstanding


def test_first_outstanding_tie_breaks_on_checkout_then_id(service, store, records):
    clear_rentals(store)
    later_checkout = add_rental(
        store, records["movie_one"], records["customer_one"], days(7), checkout_date=days(-1)
    )
    earlier_checkout = add_rental(
        store, records["movie_one"], records["customer_one"], days(7), checkout_date=days(-4)
    )
    movie = _movie(store, records)
    customer = store.find_customer_by_id(records["customer_one"])
    assert service.first_outstanding(movie, customer) == earlier_checkout

    store.save_rental(earlier_checkout.model_copy(update={"returned": True}))
    same_day = add_rental(
        store, records["movie_one"], records["customer_one"], days(7), checkout_date=days(-1)
    )
    assert service.first_outstanding(movie, customer) == later_checkout
    assert later_checkout.id < same_day.id


# Listings


def test_overdue_returns_all_overdue_rentals(service, store, records):
    overdue = service.rentals_with_status(RentalStatus.OVERDUE)
    assert [r.id for r in overdue] == [records["overdue_rental"]]


def test_overdue_ignores_rentals_not_yet_due(service, store, records):
    add_rental(store, records["movie_two"], records["customer_one"], days(10))
    overdue = service.rentals_with_status(RentalStatus.OVERDUE)
    assert [r.id for r in overdue] == [records["overdue_rental"]]


def test_overdue_ignores_returned_rentals(service, store, records):
    add_rental(store, records["movie_two"], records["customer_one"], days(-3), returned=True, validate=False)
    overdue = service.rentals_with_status(RentalStatus.OVERDUE)
    assert [r.id for r in overdue] == [records["overdue_rental"]]


def test_overdue_empty_when_nothing_overdue(service, store, records):
    rental = get_rental(store, records["overdue_rental"])
    store.save_rental(rental.model_copy(update={"returned": True}))
    assert service.overdue() == []


def test_returned_lists_returned_rentals_in_creation_order(service, store, records):
    clear_rentals(store)
    add_rental(store, records["movie_one"], records["customer_one"], days(30))
    add_rental(store, records["movie_one"], records["customer_one"], days(-10), returned=True, validate=False)
    second = add_rental(store, records["movie_one"], records["customer_two"], days(10), returned=True)

    returned = service.rentals_with_status(RentalStatus.RETURNED)
    assert len(returned) == 2
    assert returned[-1] == second
    assert len(store.find_rentals()) == 3


def test_out_ok_lists_outstanding_rentals_not_yet_due(service, store, records):
    clear_rentals(store)
    first = add_rental(store, records["movie_one"], records["customer_one"], days(10))
    add_rental(store, records["movie_one"], records["customer_two"], days(20))
    add_rental(store, records["movie_two"], records["customer_two"], days(10), returned=True)
    add_rental(store, records["movie_two"], records["customer_one"], days(-30), validate=False)

    out_ok = service.rentals_with_status(RentalStatus.OUT_OK)
    assert len(out_ok) == 2
    assert out_ok[0] == first
    assert len(store.find_rentals()) == 4


def test_due_today_is_out_ok_not_overdue(service, store, records):
    clear_rentals(store)
    add_rental(store, records["movie_one"], records["customer_one"], TODAY, validate=False)
    assert len(service.out_ok()) == 1
    assert service.overdue() == []


def test_listings_partition_all_rentals(service, store, records):
    clear_rentals(store)
    add_rental(store, records["movie_one"], records["customer_one"], days(10), returned=True)
    add_rental(store, records["movie_one"], records["customer_two"], days(-10), validate=False)
    add_rental(store, records["movie_two"], records["customer_two"], days(10), returned=True)
    add_rental(store, records["movie_two"], records["customer_one"], days(-10), returned=True, validate=False)
    add_rental(store, records["movie_two"], records["customer_three"], TODAY, validate=False)
    add_rental(store, records["movie_one"], records["customer_three"], days(3))

    groups = [service.rentals_with_status(status) for status in RentalStatus]
    ids = [r.id for group in groups for r in group]
    assert len(ids) == len(set(ids))
    assert sorted(ids) == sorted(r.id for r in store.find_rentals())
    assert [len(group) for group in groups] == [1, 3, 2]
