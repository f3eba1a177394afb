"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.  When a new
domain is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import customers, movies, rentals

router = APIRouter()

router.include_router(movies.router, prefix="/movies", tags=["movies"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(rentals.router, prefix="/rentals", tags=["rentals"])
