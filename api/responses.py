"""Map result envelopes onto HTTP errors for the controllers."""

from fastapi import HTTPException

from errors import ErrorKind

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE: 500,
    ErrorKind.UNEXPECTED: 500,
}


def _content(result) -> dict:
    # Field values as-is: ``data`` still holds ORM rows, which the route's
    # response_model reads through the read schemas.
    return dict(result)


def raise_for_failure(result) -> dict:
    """Raise if the envelope reports an error, otherwise hand back its content."""
    if not result.success:
        raise HTTPException(status_code=STATUS_BY_KIND.get(result.error_kind, 500), detail=result.message)
    return _content(result)


def require_data(result) -> dict:
    """Like raise_for_failure, but a missing record is a 404 too."""
    content = raise_for_failure(result)
    if result.data is None:
        raise HTTPException(status_code=404, detail=result.message)
    return content
