from fastapi import HTTPException, status

from shopledger.core.errors import (
    EntityNotFound,
    IntegrityMismatch,
    InvalidAmount,
    LedgerError,
    NoOutstandingBalance,
    NotRunningAccount,
    StoreUnavailable,
)

_STATUS_CODES = (
    (InvalidAmount, status.HTTP_400_BAD_REQUEST),
    (NoOutstandingBalance, status.HTTP_400_BAD_REQUEST),
    (NotRunningAccount, status.HTTP_400_BAD_REQUEST),
    (EntityNotFound, status.HTTP_404_NOT_FOUND),
    (IntegrityMismatch, status.HTTP_409_CONFLICT),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def http_error(exc: LedgerError) -> HTTPException:
    """Map a domain error to the HTTPException the endpoint should raise."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
