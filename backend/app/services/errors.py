"""
News service error taxonomy.

Services raise these; the API layer maps each class to its HTTP status.
Store failures are not wrapped and propagate as SQLAlchemy errors.
"""


class NewsServiceError(Exception):
    """Base class for errors surfaced to the caller as-is."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFilter(NewsServiceError):
    """Malformed date range or inconsistent paging/ranking parameters."""

    status_code = 400


class NotFound(NewsServiceError):
    """Unknown news item or region."""

    status_code = 404


class Unauthorized(NewsServiceError):
    """Caller id does not match the target user. Raised by the transport only."""

    status_code = 401
