"""
Journal endpoints.

Posting and reversal commit inside the engines, so these
handlers only translate HTTP to engine calls. Every rule
lives in the PostingEngine; a rejected draft comes back as
a typed error with its code.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from general_ledger.api.deps import get_actor
from general_ledger.exceptions import LedgerError, EntryNotFoundError
from general_ledger.models.base import get_db
from general_ledger.models.journal_entry import JournalEntry
from general_ledger.services.posting_engine import PostingEngine
from general_ledger.services.reversal_engine import ReversalEngine
from general_ledger.schemas.journal import (
    JournalEntryDraft,
    JournalEntryResponse,
    PostingActor,
    ReversalRequest,
)

router = APIRouter(prefix="/journal", tags=["Journal"])


@router.post("/entries", response_model=JournalEntryResponse, status_code=201)
def post_entry(
    draft: JournalEntryDraft,
    db: Session = Depends(get_db),
    actor: PostingActor = Depends(get_actor),
):
    """
    Post a journal entry.

    Resubmitting a (source_type, source_id) pair that was
    already posted returns the original entry.
    """
    try:
        return PostingEngine(db).post(draft, actor)
    except LedgerError:
        db.rollback()
        raise


@router.get("/entries/{entry_id}", response_model=JournalEntryResponse)
def get_entry(
    entry_id: int,
    db: Session = Depends(get_db),
):
    entry = db.get(JournalEntry, entry_id)
    if not entry:
        raise EntryNotFoundError(f"Journal entry {entry_id} not found")
    return entry


@router.post(
    "/entries/{entry_id}/reverse",
    response_model=JournalEntryResponse,
    status_code=201,
)
def reverse_entry(
    entry_id: int,
    request: ReversalRequest | None = None,
    db: Session = Depends(get_db),
    actor: PostingActor = Depends(get_actor),
):
    """
    Reverse a posted entry.

    Returns the new reversal entry. The original is flagged
    REVERSED and keeps its place in the ledger.
    """
    reversal_date = request.reversal_date if request else None
    try:
        return ReversalEngine(db).reverse(entry_id, actor, reversal_date)
    except LedgerError:
        db.rollback()
        raise
