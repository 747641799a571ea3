"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, we store message as an attribute so code can inspect it without parsing
    # str(exception). Don't raise this directly - use a subclass so callers can catch precisely.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class AuthRequiredException(DomainException):
    """Raised when a mutation is attempted without an authenticated viewer.

    Components normally turn this into warning feedback before any network
    call is made, so you will rarely see it escape.
    """

    def __init__(self, message: str = "Sign in required") -> None:
        super().__init__(message)


class RemoteServiceException(DomainException):
    """Raised when the catalog API fails (transport error, 5xx, bad payload).

    Transient by nature - callers keep their previous state and offer a retry.
    """

    # server_message is the "message" field the API puts in error bodies, if any.
    # Views prefer it over our generic text when rendering an error panel.
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message

    @property
    def display_message(self) -> str:
        """Best message to show the viewer."""
        return self.server_message or self.message


class EntityNotFoundException(DomainException):
    """Raised when the requested entity or release does not exist (HTTP 404)."""

    # Not an error toast! Views render an empty "not found" state for this one.
    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(f"{entity_type} with id {entity_id} not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class ValidationException(DomainException):
    """Raised when a client-side invariant is violated.

    Example: a rating outside 1..5, or an odd page window size.
    """

    pass


__all__ = [
    "AuthRequiredException",
    "DomainException",
    "EntityNotFoundException",
    "RemoteServiceException",
    "ValidationException",
]
