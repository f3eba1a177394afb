"""
Business logic for rentals.

The ``RentalService`` checks movies out to customers, checks them back
in and answers the three listing questions a store clerk asks: what is
overdue, what has come back, and what is out but still in good standing.

Every rental falls into exactly one of those three groups.  The listings
are all derived from ``classify`` so the groups cannot overlap or leave
a rental out.  The service does not log and does not retry; every
failure is raised to the caller as a ``VideoStoreError``.
"""

from datetime import date
from typing import Callable, Dict, List, Optional, Tuple, Union

from video_store_api.app.core.config import settings
from video_store_api.app.core.errors import InvalidInput, NotFound
from video_store_api.app.schemas.customer import Customer
from video_store_api.app.schemas.movie import Movie
from video_store_api.app.schemas.rental import Rental, RentalStatus, RentalSummary
from video_store_api.app.services.rental_store import RentalStore


def available_inventory(inventory: int, outstanding: int) -> int:
    """Copies left on the shelf; never below zero."""
    return max(inventory - outstanding, 0)


def classify(rental: Rental, today: date) -> RentalStatus:
    """Place a rental in exactly one listing.

    A rental due today is still in good standing; it only becomes
    overdue the day after.
    """
    if rental.returned:
        return RentalStatus.RETURNED
    if rental.due_date < today:
        return RentalStatus.OVERDUE
    return RentalStatus.OUT_OK


def outstanding_order(rental: Rental) -> Tuple[date, date, int]:
    """Sort key deciding which outstanding rental a check-in closes.

    Earliest due date first; on equal due dates the copy that left the
    store first, then the lowest id.
    """
    return (rental.due_date, rental.checkout_date, rental.id)


class RentalService:
    """Check-out, check-in and rental listings over a ``RentalStore``."""

    def __init__(
        self,
        store: RentalStore,
        clock: Callable[[], date] = date.today,
        enforce_inventory: Optional[bool] = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.enforce_inventory = (
            settings.enforce_inventory if enforce_inventory is None else enforce_inventory
        )

    def _require_movie(self, title: str) -> Movie:
        movie = self.store.find_movie_by_title(title)
        if movie is None:
            raise NotFound("title", title, f"No movie with title {title}")
        return movie

    def _require_customer(self, customer_id: Optional[int]) -> Customer:
        customer = None
        if customer_id is not None:
            customer = self.store.find_customer_by_id(customer_id)
        if customer is None:
            raise NotFound("customer_id", customer_id, f"No customer with ID {customer_id}")
        return customer

    def available_inventory(self, movie: Movie) -> int:
        outstanding = self.store.find_rentals(movie_id=movie.id, returned=False)
        return available_inventory(movie.inventory, len(outstanding))

    def check_out(
        self,
        movie_title: str,
        customer_id: Optional[int],
        due_date: Union[date, str, None],
    ) -> Rental:
        """Rent a copy of ``movie_title`` to a customer until ``due_date``.

        The due date must be strictly after today, where today is read
        once from ``self.clock``; the store is told not to check it
        again.  When inventory is enforced, a movie with no copy left on
        the shelf is refused.  The new rental starts today and is not
        returned.  A string ``due_date`` must be an ISO date.
        """
        movie = self._require_movie(movie_title)
        customer = self._require_customer(customer_id)

        today = self.clock()
        if due_date is None:
            raise InvalidInput("due_date", "can't be blank")
        if isinstance(due_date, str):
            try:
                due_date = date.fromisoformat(due_date)
            except ValueError:
                raise InvalidInput("due_date", "is not a date") from None
        if due_date <= today:
            raise InvalidInput("due_date", "must be in the future")

        with self.store.transaction():
            if self.enforce_inventory and self.available_inventory(movie) == 0:
                raise InvalidInput("inventory", f"No copies of {movie.title} available")
            return self.store.create_rental(
                {
                    "movie_id": movie.id,
                    "customer_id": customer.id,
                    "checkout_date": today,
                    "due_date": due_date,
                    "returned": False,
                },
                validate=False,
            )

    def first_outstanding(self, movie: Movie, customer: Customer) -> Optional[Rental]:
        """The rental a check-in of ``movie`` by ``customer`` would close, if any."""
        candidates = self.store.find_rentals(
            movie_id=movie.id, customer_id=customer.id, returned=False
        )
        if not candidates:
            return None
        return min(candidates, key=outstanding_order)

    def check_in(self, movie_title: str, customer_id: Optional[int]) -> Rental:
        """Mark the customer's earliest-due outstanding copy of the movie returned."""
        movie = self._require_movie(movie_title)
        customer = self._require_customer(customer_id)

        with self.store.transaction():
            rental = self.first_outstanding(movie, customer)
            if rental is None:
                raise NotFound(
                    "rental",
                    (movie.title, customer.id),
                    f"Customer {customer.id} has no outstanding rental of {movie.title}",
                )
            rental = rental.model_copy(update={"returned": True})
            self.store.save_rental(rental)
        return rental

    def rentals_with_status(self, status: RentalStatus) -> List[Rental]:
        """All rentals currently in ``status``, in creation order."""
        today = self.clock()
        return [rental for rental in self.store.find_rentals() if classify(rental, today) is status]

    def _listing(self, status: RentalStatus) -> List[RentalSummary]:
        movies: Dict[int, Optional[Movie]] = {}
        customers: Dict[int, Optional[Customer]] = {}
        summaries: List[RentalSummary] = []
        for rental in self.rentals_with_status(status):
            if rental.movie_id not in movies:
                movies[rental.movie_id] = self.store.get_movie(rental.movie_id)
            if rental.customer_id not in customers:
                customers[rental.customer_id] = self.store.find_customer_by_id(rental.customer_id)
            movie = movies[rental.movie_id]
            customer = customers[rental.customer_id]
            summaries.append(
                RentalSummary(
                    title=movie.title if movie else "",
                    customer_id=rental.customer_id,
                    name=customer.name if customer else "",
                    postal_code=customer.postal_code if customer else None,
                    checkout_date=rental.checkout_date,
                    due_date=rental.due_date,
                )
            )
        return summaries

    def overdue(self) -> List[RentalSummary]:
        """Outstanding rentals whose due date has passed."""
        return self._listing(RentalStatus.OVERDUE)

    def returned(self) -> List[RentalSummary]:
        return self._listing(RentalStatus.RETURNED)

    def out_ok(self) -> List[RentalSummary]:
        """Outstanding rentals due today or later."""
        return self._listing(RentalStatus.OUT_OK)
