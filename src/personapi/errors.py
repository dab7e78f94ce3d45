"""Domain errors raised by the Person store and query service."""

from __future__ import annotations


class PersonApiError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PersonApiError):
    status_code = 404

    @classmethod
    def for_id(cls, person_id: int) -> "NotFound":
        return cls(f"Person not found with id: {person_id}")


class InvalidPageRequest(PersonApiError):
    status_code = 400


class StoreUnavailable(PersonApiError):
    status_code = 503


__all__ = ["PersonApiError", "NotFound", "InvalidPageRequest", "StoreUnavailable"]
