"""Customer endpoints for API v1."""

from typing import List

from fastapi import APIRouter

from video_store_api.app.schemas.customer import CustomerRead
from video_store_api.app.services.customer_service import CustomerService


router = APIRouter()


@router.get("/", response_model=List[CustomerRead])
async def list_customers() -> List[CustomerRead]:
    """List customers with the number of movies each has checked out."""
    return await CustomerService.list_customers()
