"""
Ledger error taxonomy.

Every failure the ledger core reports is one of these classes,
so callers can branch on the kind of failure rather than on
message text:

- EntryValidationError: the caller's input is wrong. Fix and resubmit.
- PostingPolicyError: the input is well formed but not allowed
  (control account, closed period, missing capability).
- AccountNotFoundError / EntryNotFoundError: the target does not exist.
- EntryStateError / AccountStateError: the target exists but is in
  the wrong state for the operation.
- PeriodDefinitionError: an administrative period definition is invalid.
- TransientStorageError: the commit could not complete after retries.
  Nothing was written.
"""


class LedgerError(Exception):
    """Base class for all ledger failures."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class EntryValidationError(LedgerError):
    code = "INVALID_ENTRY"


class PostingPolicyError(LedgerError):
    code = "POLICY_VIOLATION"


class AccountNotFoundError(LedgerError):
    code = "ACCOUNT_NOT_FOUND"


class EntryNotFoundError(LedgerError):
    code = "ENTRY_NOT_FOUND"


class EntryStateError(LedgerError):
    code = "NOT_REVERSIBLE"


class AccountStateError(LedgerError):
    code = "ACCOUNT_CONFLICT"


class PeriodDefinitionError(LedgerError):
    code = "INVALID_PERIOD"


class TransientStorageError(LedgerError):
    code = "STORAGE_UNAVAILABLE"


# Validation codes
TOO_FEW_LINES = "TOO_FEW_LINES"
NEGATIVE_AMOUNT = "NEGATIVE_AMOUNT"
BOTH_SIDES = "BOTH_SIDES"
ZERO_LINE = "ZERO_LINE"
UNKNOWN_ACCOUNT = "UNKNOWN_ACCOUNT"
INACTIVE_ACCOUNT = "INACTIVE_ACCOUNT"
UNBALANCED = "UNBALANCED"
ZERO_TOTAL = "ZERO_TOTAL"

# Policy codes
CONTROL_ACCOUNT = "CONTROL_ACCOUNT"
PERIOD_NOT_OPEN = "PERIOD_NOT_OPEN"
NO_PERIOD = "NO_PERIOD"
NOT_AUTHORIZED = "NOT_AUTHORIZED"
RESERVED_SOURCE = "RESERVED_SOURCE"

# State codes
NOT_REVERSIBLE = "NOT_REVERSIBLE"
REVERSAL_OF_REVERSAL = "REVERSAL_OF_REVERSAL"
DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
ACCOUNT_HAS_POSTINGS = "ACCOUNT_HAS_POSTINGS"
ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
OVERLAPPING_PERIOD = "OVERLAPPING_PERIOD"
