"""Error types for the catalog console.

Everything raised by the console derives from ``CatalogError`` so page
controllers can catch one type at their boundary.
"""
from typing import Optional


class CatalogError(Exception):
    """Base exception for all catalog console errors."""

    pass


class ValidationError(CatalogError):
    """A required draft field is missing. Raised before any network call."""

    pass


class TransportError(CatalogError):
    """The store could not be reached."""

    pass


class DecodeError(TransportError):
    """The store answered with a body that is not the expected JSON.

    Displayed the same way as a transport failure.
    """

    pass


class ServerRejection(CatalogError):
    """The store answered a request with a non-success status."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConflictError(ServerRejection):
    """409 from the store, e.g. a duplicate key."""

    pass


class PayloadRejected(ServerRejection):
    """400/422 from the store: the payload failed server-side validation."""

    pass


class SessionStateError(CatalogError):
    """An edit session was driven through an illegal transition."""

    pass


def rejection_for(status_code: int, message: str, body: str = "") -> ServerRejection:
    """
    Build the rejection matching an HTTP status.

    Args:
        status_code: HTTP status returned by the store
        message: Message to surface to the user
        body: Raw response body, kept for logging

    Returns:
        ServerRejection (or a status-specific subclass)
    """
    if status_code == 409:
        return ConflictError(message, status_code, body)
    if status_code in (400, 422):
        return PayloadRejected(message, status_code, body)
    return ServerRejection(message, status_code, body)


def create_rejection(status_code: int, body: Optional[str], fallback: str) -> ServerRejection:
    """Rejection for a failed create: the body text wins over the fallback."""
    text = (body or "").strip()
    return rejection_for(status_code, text or fallback, body or "")


def update_rejection(status_code: int, body: Optional[str], fallback: str) -> ServerRejection:
    """Rejection for a failed update: always the fixed message, body ignored."""
    return rejection_for(status_code, fallback, body or "")
