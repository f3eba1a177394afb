"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one domain (movies, customers,
rentals).  The routers are aggregated in ``router.py``.
"""
