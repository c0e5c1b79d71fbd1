"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from general_ledger.models.base import Base
from general_ledger.models.enums import (
    AccountType,
    NormalBalance,
    SourceType,
    EntryStatus,
    PeriodStatus,
)
from general_ledger.models.audit_log import AuditLog
from general_ledger.models.gl_account import GLAccount
from general_ledger.models.fiscal_period import FiscalPeriod
from general_ledger.models.document_sequence import DocumentSequence
from general_ledger.models.journal_entry import JournalEntry
from general_ledger.models.journal_line import JournalLine

__all__ = [
    "Base",
    "AccountType",
    "NormalBalance",
    "SourceType",
    "EntryStatus",
    "PeriodStatus",
    "AuditLog",
    "GLAccount",
    "FiscalPeriod",
    "DocumentSequence",
    "JournalEntry",
    "JournalLine",
]
