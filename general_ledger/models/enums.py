"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"


class NormalBalance(str, enum.Enum):
    """The side on which an account's balance increases."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class SourceType(str, enum.Enum):
    """Where a journal entry came from."""
    MANUAL = "MANUAL"
    SYSTEM = "SYSTEM"
    DISPOSAL = "DISPOSAL"
    DEPRECIATION = "DEPRECIATION"
    REVERSAL = "REVERSAL"
    INVOICE = "INVOICE"
    BILL = "BILL"
    PAYMENT = "PAYMENT"
    ADJUSTMENT = "ADJUSTMENT"


class EntryStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    POSTED = "POSTED"
    REVERSED = "REVERSED"
    LOCKED = "LOCKED"


class PeriodStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    LOCKED = "LOCKED"


# Sources trusted to write to control accounts
SYSTEM_SOURCES = frozenset({
    SourceType.SYSTEM,
    SourceType.DISPOSAL,
    SourceType.DEPRECIATION,
    SourceType.REVERSAL,
})

# Statuses whose lines make up the ledger. Drafts are never stored.
COMMITTED_STATUSES = (
    EntryStatus.POSTED,
    EntryStatus.REVERSED,
    EntryStatus.LOCKED,
)


def default_normal_balance(account_type: AccountType) -> NormalBalance:
    """ASSET and EXPENSE are debit-normal; everything else is credit-normal."""
    if account_type in (AccountType.ASSET, AccountType.EXPENSE):
        return NormalBalance.DEBIT
    return NormalBalance.CREDIT
