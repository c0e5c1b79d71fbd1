"""
Mapping from ledger errors to HTTP responses.

Routers let LedgerError propagate after rolling back; the
handler registered in main turns it into a JSON body of the
form {"detail": message, "code": code}.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from general_ledger.exceptions import (
    LedgerError,
    EntryValidationError,
    PostingPolicyError,
    AccountNotFoundError,
    EntryNotFoundError,
    EntryStateError,
    AccountStateError,
    PeriodDefinitionError,
    TransientStorageError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (EntryValidationError, 400),
    (PeriodDefinitionError, 400),
    (PostingPolicyError, 403),
    (AccountNotFoundError, 404),
    (EntryNotFoundError, 404),
    (EntryStateError, 409),
    (AccountStateError, 409),
    (TransientStorageError, 503),
)


def status_for(exc: LedgerError) -> int:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "%s %s failed [%s]: %s",
            request.method, request.url.path, exc.code, exc.message,
        )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )
