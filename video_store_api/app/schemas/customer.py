"""
Pydantic models for customers.

Customers are opaque references for the rental logic; only the listing
endpoint looks at more than the identifier.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Customer(BaseModel):
    id: int
    name: str
    postal_code: Optional[str] = None
    phone: Optional[str] = None
    registered_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }


class CustomerRead(Customer):
    """Customer as listed by the API, with the number of movies at home."""

    movies_checked_out_count: int = 0
