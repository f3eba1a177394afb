"""Creation-time rules for rental records."""

from datetime import date
from typing import Any, Dict, List, Mapping, Optional


def rental_errors(fields: Mapping[str, Any], today: Optional[date]) -> Dict[str, List[str]]:
    """Collect every field error for a rental about to be created.

    A rental needs a movie, a customer and a due date strictly after
    ``today``; a due date of today is already too late.  All failures
    are reported together so callers can show them at once.  With
    ``today`` set to ``None`` only presence is checked.
    """
    errors: Dict[str, List[str]] = {}

    if fields.get("movie_id") is None:
        errors.setdefault("movie", []).append("must exist")
    if fields.get("customer_id") is None:
        errors.setdefault("customer", []).append("must exist")

    due_date = fields.get("due_date")
    if due_date is None:
        errors.setdefault("due_date", []).append("can't be blank")
    elif not isinstance(due_date, date):
        errors.setdefault("due_date", []).append("is not a date")
    elif today is not None and due_date <= today:
        errors.setdefault("due_date", []).append("must be in the future")

    return errors
