"""
Rental endpoints for API v1.

Check-out and check-in are addressed by movie title with the customer
in the request body.  The three listings return flattened summaries
(title, customer id, name, postal code, checkout and due dates).
Failures raised by ``RentalService`` are rendered by the application's
exception handlers.
"""

from typing import AsyncIterator, List, Optional

from fastapi import APIRouter, Depends, Path

from video_store_api.app.core.db import get_connection
from video_store_api.app.schemas.rental import (
    CheckInRequest,
    CheckOutRequest,
    Rental,
    RentalSummary,
)
from video_store_api.app.services.rental_service import RentalService
from video_store_api.app.services.rental_store import SqliteRentalStore


router = APIRouter()


async def get_rental_service() -> AsyncIterator[RentalService]:
    """Provide a ``RentalService`` with its own connection for one request."""
    store = SqliteRentalStore(get_connection())
    try:
        yield RentalService(store)
    finally:
        store.close()


@router.post("/{title}/check-out", response_model=Rental)
async def check_out(
    title: str = Path(..., description="Title of the movie to rent"),
    request: Optional[CheckOutRequest] = None,
    service: RentalService = Depends(get_rental_service),
) -> Rental:
    request = request or CheckOutRequest()
    return service.check_out(title, request.customer_id, request.due_date)


@router.post("/{title}/check-in", response_model=Rental)
async def check_in(
    title: str = Path(..., description="Title of the movie being returned"),
    request: Optional[CheckInRequest] = None,
    service: RentalService = Depends(get_rental_service),
) -> Rental:
    request = request or CheckInRequest()
    return service.check_in(title, request.customer_id)


@router.get("/overdue", response_model=List[RentalSummary])
async def list_overdue(service: RentalService = Depends(get_rental_service)) -> List[RentalSummary]:
    return service.overdue()


@router.get("/returned", response_model=List[RentalSummary])
async def list_returned(service: RentalService = Depends(get_rental_service)) -> List[RentalSummary]:
    return service.returned()


@router.get("/out-ok", response_model=List[RentalSummary])
async def list_out_ok(service: RentalService = Depends(get_rental_service)) -> List[RentalSummary]:
    return service.out_ok()
