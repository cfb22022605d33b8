import logging

from fastapi import HTTPException, status

from igra_store.domain.errors import (
    ConflictError,
    InsufficientFundsError,
    InvalidInputError,
    NotFoundError,
    NotInCartError,
    StoreError,
)

# Checked in order, so subclasses (OutOfStockError) resolve through their parent.
STATUS_CODES = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (InsufficientFundsError, status.HTTP_400_BAD_REQUEST),
    (NotInCartError, status.HTTP_400_BAD_REQUEST),
]


def to_http_exception(error: StoreError) -> HTTPException:
    """Convert a store error into the HTTPException returned to the client

    Args:
        error (StoreError): Error raised by the store service

    Returns:
        HTTPException: Exception carrying the status code and the error message
    """
    for error_class, status_code in STATUS_CODES:
        if isinstance(error, error_class):
            return HTTPException(status_code=status_code, detail=str(error))
    logging.error(f"Unmapped store error: {error!r}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
