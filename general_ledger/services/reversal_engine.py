"""
Reversal engine.

A posted entry is never edited. To undo it, a mirror entry
with every debit and credit swapped is posted through the
PostingEngine, and the original is flagged REVERSED in the
same transaction. Both entries stay in the ledger, so the
history shows what happened and when it was undone.
"""

import json
import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from general_ledger.exceptions import (
    EntryNotFoundError,
    EntryStateError,
    NOT_REVERSIBLE,
    REVERSAL_OF_REVERSAL,
)
from general_ledger.models.audit_log import AuditLog, JOURNAL_REVERSED
from general_ledger.models.enums import EntryStatus, SourceType
from general_ledger.models.journal_entry import JournalEntry
from general_ledger.schemas.journal import (
    JournalEntryDraft,
    JournalLineDraft,
    PostingActor,
)
from general_ledger.services.posting_engine import PostingEngine

logger = logging.getLogger(__name__)

REVERSAL_PREFIX = "REVERSAL: "


class ReversalEngine:

    def __init__(self, db: Session):
        self.db = db
        self.posting_engine = PostingEngine(db)

    def reverse(
        self,
        entry_id: int,
        actor: PostingActor,
        reversal_date: date | None = None,
    ) -> JournalEntry:
        """
        Reverse a posted entry and return the new reversal entry.

        The reversal is dated reversal_date, or today when omitted,
        so an entry from a since-closed period can still be undone
        in the current one. It passes through the posting pipeline,
        so the period and capability guards apply. Control accounts
        are allowed because REVERSAL is a system source, and
        accounts deactivated since the original posted are accepted.
        """
        original = self.db.get(JournalEntry, entry_id)
        if not original:
            raise EntryNotFoundError(f"Journal entry {entry_id} not found")
        self._check_reversible(original)

        draft = self.build_mirror(original, reversal_date)
        validated = self.posting_engine.validate(draft, actor, for_reversal=True)

        def flag_original(reversal: JournalEntry) -> None:
            # Re-read under lock: a concurrent reversal may have won
            locked = self.db.execute(
                select(JournalEntry)
                .where(JournalEntry.id == entry_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            ).scalar_one()
            self._check_reversible(locked)

            locked.status = EntryStatus.REVERSED
            locked.reversed_by_entry_id = reversal.id
            self.db.add(AuditLog(
                event_type=JOURNAL_REVERSED,
                entity_type="journal_entry",
                entity_id=locked.id,
                actor_id=actor.actor_id,
                details=json.dumps({
                    "original_sequence_number": locked.sequence_number,
                    "reversal_entry_id": reversal.id,
                    "reversal_sequence_number": reversal.sequence_number,
                }),
            ))
            self.db.flush()

        reversal = self.posting_engine.commit(
            validated,
            on_commit=flag_original,
            reverses_entry_id=entry_id,
        )
        logger.info(
            "Reversed entry %s with entry #%s", entry_id, reversal.sequence_number
        )
        return reversal

    def build_mirror(
        self, original: JournalEntry, reversal_date: date | None = None
    ) -> JournalEntryDraft:
        """Same lines as the original with debit and credit swapped."""
        lines = [
            JournalLineDraft(
                account_code=line.account.code,
                debit=line.credit,
                credit=line.debit,
                description=_annotate(line.description, limit=255),
                cost_center=line.cost_center,
                department=line.department,
            )
            for line in original.lines
        ]
        return JournalEntryDraft(
            entry_date=reversal_date or date.today(),
            memo=_annotate(original.memo),
            source_type=SourceType.REVERSAL,
            lines=lines,
        )

    @staticmethod
    def _check_reversible(entry: JournalEntry) -> None:
        if entry.status != EntryStatus.POSTED:
            raise EntryStateError(
                f"Only posted entries can be reversed "
                f"(entry {entry.id} is {entry.status.value})",
                NOT_REVERSIBLE,
            )
        if entry.is_reversal:
            raise EntryStateError(
                f"Entry {entry.id} is itself a reversal and cannot be reversed",
                REVERSAL_OF_REVERSAL,
            )


def _annotate(text: str | None, limit: int | None = None) -> str:
    annotated = f"{REVERSAL_PREFIX}{text}" if text else REVERSAL_PREFIX.rstrip(": ")
    return annotated[:limit] if limit else annotated
