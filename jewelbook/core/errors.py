# jewelbook/core/errors.py

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status


class LedgerError(Exception):
    """Base class for every error the ledger core surfaces to callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = "ledger_error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.__class__.__name__


class Unauthenticated(LedgerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthenticated"


class AccessDenied(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN
    kind = "access_denied"


class NotFound(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class ValidationFailure(LedgerError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation_failure"


class ConflictError(LedgerError):
    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


class PartialMutationFailure(LedgerError):
    """
    The balance half of a ledger mutation could not be applied.
    The record half is rolled back with it, so the ledger itself stays
    consistent, but the caller must know the mutation did not happen.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = "partial_mutation_failure"
    rolled_back = True


class StorageUnavailable(LedgerError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    kind = "storage_unavailable"


def ledger_error_handler(request: Request, exc: LedgerError):
    body = {"detail": exc.detail, "error": exc.kind}
    if isinstance(exc, PartialMutationFailure):
        body["rolled_back"] = exc.rolled_back
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)
