"""
Pydantic schemas for journal posting and reversal.

A JournalEntryDraft is what every caller submits: the manual
entry form, the depreciation run, the disposal routine. The
PostingEngine validates it; these schemas only describe its
shape, so that every rule violation comes back as the same
typed ledger error regardless of entry point.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from general_ledger.models.enums import SourceType, EntryStatus


# --- Request Schemas ---

class JournalLineDraft(BaseModel):
    """A single debit or credit row."""
    account_code: str = Field(min_length=1, max_length=20)
    debit: Decimal = Field(default=Decimal("0"), decimal_places=4)
    credit: Decimal = Field(default=Decimal("0"), decimal_places=4)
    description: str | None = Field(default=None, max_length=255)
    cost_center: str | None = Field(default=None, max_length=50)
    department: str | None = Field(default=None, max_length=50)


class JournalEntryDraft(BaseModel):
    """
    An unposted journal entry.

    source_id is the caller's document reference. Resubmitting
    the same (source_type, source_id) returns the entry that was
    already posted instead of posting it twice.
    """
    entry_date: date
    memo: str = Field(min_length=1)
    source_type: SourceType = SourceType.MANUAL
    source_id: str | None = Field(default=None, max_length=100)
    lines: list[JournalLineDraft]


class ReversalRequest(BaseModel):
    """Optional overrides when reversing an entry."""
    reversal_date: date | None = None


class PostingActor(BaseModel):
    """
    The caller, as resolved by the surrounding authorization layer.

    The ledger never looks up roles itself; it only reads the
    yes/no capability.
    """
    actor_id: str | None = None
    can_post_financial_entries: bool = False


# --- Response Schemas ---

class JournalLineResponse(BaseModel):
    id: int
    line_number: int
    gl_account_id: int
    debit: Decimal
    credit: Decimal
    description: str | None
    cost_center: str | None
    department: str | None

    model_config = {"from_attributes": True}


class JournalEntryResponse(BaseModel):
    id: int
    external_id: uuid.UUID
    sequence_number: int
    document_number: str
    entry_date: date
    memo: str
    source_type: SourceType
    source_id: str | None
    status: EntryStatus
    is_reversal: bool
    reverses_entry_id: int | None
    reversed_by_entry_id: int | None
    fiscal_period_id: int | None
    posted_by: str | None
    posted_at: datetime | None
    lines: list[JournalLineResponse]

    model_config = {"from_attributes": True}
