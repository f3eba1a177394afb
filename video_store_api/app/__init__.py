"""
Application package initializer.

The project is split into ``core`` (settings, logging, database and the
error taxonomy), ``schemas`` (pydantic payloads), ``services`` (business
logic) and ``api`` (versioned FastAPI routers).  The rental rules live in
``services.rental_service``; everything else is glue around them.
"""

from .main import app  # noqa: F401
