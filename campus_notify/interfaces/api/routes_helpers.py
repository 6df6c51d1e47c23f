"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from campus_notify.domain.exceptions import InvalidTargeting, NotFound, Unauthorized

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int], ...] = (
    (Unauthorized, status.HTTP_403_FORBIDDEN),
    (InvalidTargeting, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFound, status.HTTP_404_NOT_FOUND),
)


def http_error_from(exc: Exception) -> HTTPException:
    """Translate a use-case error into the matching HTTP error.

    Errors outside the notification taxonomy (``ValueError`` raised for bad
    input) become ``400 Bad Request``.
    """

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


__all__ = ["http_error_from"]
