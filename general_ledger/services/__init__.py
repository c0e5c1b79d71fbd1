"""Ledger core services."""

from general_ledger.services.chart_of_accounts import ChartOfAccounts
from general_ledger.services.fiscal_periods import FiscalPeriodManager
from general_ledger.services.posting_engine import PostingEngine
from general_ledger.services.reversal_engine import ReversalEngine
from general_ledger.services.ledger_query import LedgerQuery

__all__ = [
    "ChartOfAccounts",
    "FiscalPeriodManager",
    "PostingEngine",
    "ReversalEngine",
    "LedgerQuery",
]
