"""
Pydantic models for rentals.

``Rental`` is the record passed between the rental service and the
storage layer.  ``RentalSummary`` is the flattened row returned by the
overdue, returned and out_ok listings.  The request models accept
missing fields and unparsed dates so that the service, not the
request parser, reports which field is wrong.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RentalStatus(str, Enum):
    OVERDUE = "overdue"
    RETURNED = "returned"
    OUT_OK = "out_ok"


class Rental(BaseModel):
    id: int
    movie_id: int
    customer_id: int
    checkout_date: date
    due_date: date
    returned: bool = False

    model_config = {
        "from_attributes": True,
    }


class RentalSummary(BaseModel):
    title: str
    customer_id: int
    name: str
    postal_code: Optional[str] = None
    checkout_date: date
    due_date: date


class CheckOutRequest(BaseModel):
    customer_id: Optional[int] = Field(None, examples=[1])
    # ISO date string; RentalService.check_out parses it and reports a bad one.
    due_date: Optional[str] = Field(None, examples=["2030-01-15"])


class CheckInRequest(BaseModel):
    customer_id: Optional[int] = Field(None, examples=[1])
