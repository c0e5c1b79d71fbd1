"""
Pydantic schemas for ledger read projections.

These are derived views; nothing here is ever written back.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from general_ledger.models.enums import (
    AccountType,
    NormalBalance,
    SourceType,
    EntryStatus,
)


class AccountSummary(BaseModel):
    """Totals and signed balance for one GL account."""
    account_id: int
    code: str
    name: str
    account_type: AccountType
    normal_balance: NormalBalance
    is_control_account: bool
    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal
    line_count: int


class LedgerRow(BaseModel):
    """One entry's effect on one account, with the running balance."""
    entry_id: int
    sequence_number: int
    entry_date: date
    memo: str
    source_type: SourceType
    status: EntryStatus
    description: str
    debit: Decimal
    credit: Decimal
    running_balance: Decimal


class AccountBalanceResponse(BaseModel):
    """Response for an account balance query."""
    account_id: int
    account_code: str
    account_type: AccountType
    normal_balance: NormalBalance
    balance: Decimal


class IntegrityReport(BaseModel):
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal
    is_balanced: bool
