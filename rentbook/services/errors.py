"""Exception classes shared by services and the API layer.

Each error carries the HTTP status it is surfaced with.
"""


class RentbookError(Exception):
    """Base application error."""

    http_status = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(RentbookError):
    """Input the caller can fix: malformed month key, negative amount, blank field."""

    http_status = 400


class NotFoundError(RentbookError):
    """Unknown tenant or notice id."""

    http_status = 404


class PersistenceError(RentbookError):
    """Storage layer failure. Never retried."""

    http_status = 500


__all__ = ["RentbookError", "ValidationError", "NotFoundError", "PersistenceError"]
