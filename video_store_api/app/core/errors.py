"""
Error taxonomy for the video store.

Every failure the rental core can produce is an expected business
condition, so each error carries enough information for the HTTP layer
to render ``{"errors": {field: [message, ...]}}`` without inspecting the
message text.  ``NotFound`` maps to 404; ``InvalidInput`` and
``ValidationError`` map to 400.  ``CatalogError`` is raised by the
external movie search and maps to 502.
"""

from typing import Dict, List


class VideoStoreError(Exception):
    """Base class for all domain errors."""

    def as_errors(self) -> Dict[str, List[str]]:
        raise NotImplementedError


class NotFound(VideoStoreError):
    """A movie, customer or eligible rental does not exist.

    ``entity`` is the request field that failed to resolve (``title``,
    ``customer_id`` or ``rental``) and ``key`` the value that was looked
    up.
    """

    def __init__(self, entity: str, key: object = None, message: str | None = None) -> None:
        self.entity = entity
        self.key = key
        self.message = message or f"No {entity} found for {key!r}"
        super().__init__(self.message)

    def as_errors(self) -> Dict[str, List[str]]:
        return {self.entity: [self.message]}


class InvalidInput(VideoStoreError):
    """A single request field failed a business rule."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")

    def as_errors(self) -> Dict[str, List[str]]:
        return {self.field: [self.reason]}


class ValidationError(VideoStoreError):
    """One or more field-level failures collected together.

    Raised by the storage layer when a record cannot be persisted, for
    example a rental with no movie, no customer and no due date reports
    all three fields at once.
    """

    def __init__(self, errors: Dict[str, List[str]]) -> None:
        self.errors = {field: list(messages) for field, messages in errors.items()}
        summary = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in self.errors.items()
        )
        super().__init__(summary or "validation failed")

    def as_errors(self) -> Dict[str, List[str]]:
        return {field: list(messages) for field, messages in self.errors.items()}


class CatalogError(Exception):
    """The external movie catalog could not be queried."""
