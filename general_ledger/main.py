"""
General Ledger Core: FastAPI application.

This is the entry point for the application.
All routers and the ledger error handler are registered here.
"""

from fastapi import FastAPI

from general_ledger.config import get_settings
from general_ledger.exceptions import LedgerError
from general_ledger.logging_config import setup_logging
from general_ledger.api.errors import ledger_error_handler
from general_ledger.api.health import router as health_router
from general_ledger.api.accounts import router as accounts_router
from general_ledger.api.periods import router as periods_router
from general_ledger.api.journal import router as journal_router
from general_ledger.api.ledger import router as ledger_router

settings = get_settings()
setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry general ledger: posting, reversal and ledger reads",
)

app.add_exception_handler(LedgerError, ledger_error_handler)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(periods_router)
app.include_router(journal_router)
app.include_router(ledger_router)
