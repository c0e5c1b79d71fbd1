"""
Posting engine: the only writer of journal entries.

Every entry, whether typed into the manual journal form or
generated by a depreciation run, goes through post(). It
enforces, in order:

1. At least two well-formed lines (one side each, non-negative)
2. Every account exists and is active
3. Debits equal credits exactly (Decimal, never float)
4. Control accounts only accept system sources
5. The entry date is in an open fiscal period
6. The caller may post financial entries

Checks run before anything is written. The commit step then
draws the next sequence number and writes the entry, its lines
and an audit record in one transaction.
"""

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from general_ledger.config import get_settings
from general_ledger.exceptions import (
    LedgerError,
    EntryValidationError,
    PostingPolicyError,
    TransientStorageError,
    TOO_FEW_LINES,
    NEGATIVE_AMOUNT,
    BOTH_SIDES,
    ZERO_LINE,
    UNKNOWN_ACCOUNT,
    INACTIVE_ACCOUNT,
    UNBALANCED,
    ZERO_TOTAL,
    CONTROL_ACCOUNT,
    NOT_AUTHORIZED,
    RESERVED_SOURCE,
)
from general_ledger.models.audit_log import AuditLog, JOURNAL_POSTED
from general_ledger.models.document_sequence import (
    DocumentSequence,
    JOURNAL_ENTRY_SEQUENCE,
)
from general_ledger.models.enums import EntryStatus, SourceType, SYSTEM_SOURCES
from general_ledger.models.fiscal_period import FiscalPeriod
from general_ledger.models.gl_account import GLAccount
from general_ledger.models.journal_entry import JournalEntry
from general_ledger.models.journal_line import JournalLine
from general_ledger.schemas.journal import JournalEntryDraft, PostingActor
from general_ledger.services.chart_of_accounts import ChartOfAccounts
from general_ledger.services.fiscal_periods import FiscalPeriodManager

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class ValidatedEntry:
    """A draft that has passed every precondition and may be committed."""
    draft: JournalEntryDraft
    actor: PostingActor
    accounts: dict[str, GLAccount]
    period: FiscalPeriod | None
    total: Decimal


class PostingEngine:
    """
    Validates and commits journal entries.

    Unlike the read services, the engine owns its transaction:
    commit() either makes the whole entry visible or rolls
    everything back. A failed precondition writes nothing.
    """

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.chart = ChartOfAccounts(db)
        self.periods = FiscalPeriodManager(db)

    def post(self, draft: JournalEntryDraft, actor: PostingActor) -> JournalEntry:
        """
        Validate and commit a draft.

        If the draft carries a source_id that was already posted
        for the same source_type, the existing entry is returned
        and no sequence number is consumed.

        REVERSAL drafts are refused here; they are only produced
        by the ReversalEngine, which calls validate and commit.
        """
        if draft.source_type == SourceType.REVERSAL:
            raise PostingPolicyError(
                "Reversal entries can only be created by reversing a "
                "posted entry",
                RESERVED_SOURCE,
            )

        existing = self._find_existing(draft)
        if existing:
            self._check_capability(actor)
            logger.info(
                "Idempotent replay of %s/%s returned entry #%s",
                draft.source_type.value, draft.source_id,
                existing.sequence_number,
            )
            return existing

        validated = self.validate(draft, actor)
        return self.commit(validated)

    def validate(
        self,
        draft: JournalEntryDraft,
        actor: PostingActor,
        for_reversal: bool = False,
    ) -> ValidatedEntry:
        """
        Run every precondition in order. Raises on the first failure.

        for_reversal skips the active-account check: a mirror must
        still post after one of the original's accounts has been
        deactivated.
        """
        try:
            self._check_lines(draft)
            accounts = self._resolve_accounts(
                draft, allow_inactive=for_reversal
            )
            total = self._check_balance(draft)
            self._check_control_accounts(draft, accounts)
            period = self.periods.assert_postable(draft.entry_date)
            self._check_capability(actor)
        except LedgerError as e:
            logger.warning(
                "Posting rejected [%s] for %s entry dated %s: %s",
                e.code, draft.source_type.value, draft.entry_date, e.message,
            )
            raise

        return ValidatedEntry(
            draft=draft,
            actor=actor,
            accounts=accounts,
            period=period,
            total=total,
        )

    def commit(
        self,
        validated: ValidatedEntry,
        on_commit: Callable[[JournalEntry], None] | None = None,
        reverses_entry_id: int | None = None,
    ) -> JournalEntry:
        """
        Write a validated entry atomically.

        on_commit runs inside the same transaction after the entry
        is flushed; if it raises, the entry is rolled back too.
        Storage conflicts retry the whole step, up to
        POSTING_MAX_RETRIES attempts.
        """
        max_attempts = max(1, self.settings.POSTING_MAX_RETRIES)

        for attempt in range(1, max_attempts + 1):
            try:
                entry = self._write(validated, reverses_entry_id)
                if on_commit is not None:
                    on_commit(entry)
                self.db.commit()
            except OperationalError as e:
                self.db.rollback()
                if attempt == max_attempts:
                    logger.error(
                        "Posting failed after %d attempts: %s", attempt, e
                    )
                    raise TransientStorageError(
                        f"Could not commit journal entry after "
                        f"{attempt} attempts"
                    ) from e
                logger.warning(
                    "Storage conflict on attempt %d/%d, retrying: %s",
                    attempt, max_attempts, e,
                )
                time.sleep(self.settings.POSTING_RETRY_BACKOFF_SECONDS * attempt)
                continue
            except IntegrityError:
                self.db.rollback()
                # A concurrent caller posted the same source document first
                existing = self._find_existing(validated.draft)
                if existing:
                    return existing
                raise
            except Exception:
                self.db.rollback()
                raise

            logger.info(
                "Posted %s entry #%s dated %s, total %s, %d lines",
                entry.source_type.value, entry.sequence_number,
                entry.entry_date, validated.total, len(entry.lines),
            )
            return entry

    # --- Preconditions ---

    def _check_lines(self, draft: JournalEntryDraft) -> None:
        if len(draft.lines) < 2:
            raise EntryValidationError(
                "A journal entry needs at least two lines", TOO_FEW_LINES
            )

        for number, line in enumerate(draft.lines, start=1):
            if line.debit < 0 or line.credit < 0:
                raise EntryValidationError(
                    f"Line {number}: amounts cannot be negative",
                    NEGATIVE_AMOUNT,
                )
            if line.debit > 0 and line.credit > 0:
                raise EntryValidationError(
                    f"Line {number}: a line cannot carry both a debit "
                    f"and a credit",
                    BOTH_SIDES,
                )
            if line.debit == 0 and line.credit == 0:
                raise EntryValidationError(
                    f"Line {number}: debit or credit is required",
                    ZERO_LINE,
                )

    def _resolve_accounts(
        self, draft: JournalEntryDraft, allow_inactive: bool = False
    ) -> dict[str, GLAccount]:
        codes = [line.account_code for line in draft.lines]
        accounts = self.chart.accounts_by_code(codes)

        missing = sorted(set(codes) - set(accounts))
        if missing:
            raise EntryValidationError(
                f"Accounts not found: {', '.join(missing)}", UNKNOWN_ACCOUNT
            )

        inactive = sorted(code for code, a in accounts.items() if not a.is_active)
        if inactive and not allow_inactive:
            raise EntryValidationError(
                f"Accounts not active: {', '.join(inactive)}", INACTIVE_ACCOUNT
            )

        return accounts

    def _check_balance(self, draft: JournalEntryDraft) -> Decimal:
        total_debits = sum((line.debit for line in draft.lines), ZERO)
        total_credits = sum((line.credit for line in draft.lines), ZERO)

        if total_debits != total_credits:
            raise EntryValidationError(
                f"Entry does not balance: "
                f"debits={total_debits}, credits={total_credits}",
                UNBALANCED,
            )
        if total_debits == 0:
            raise EntryValidationError("Entry total is zero", ZERO_TOTAL)

        return total_debits

    def _check_control_accounts(
        self, draft: JournalEntryDraft, accounts: dict[str, GLAccount]
    ) -> None:
        if draft.source_type in SYSTEM_SOURCES:
            return

        controlled = sorted(
            code for code, a in accounts.items() if a.is_control_account
        )
        if controlled:
            raise PostingPolicyError(
                f"{draft.source_type.value.lower()} entries cannot post to "
                f"control accounts: {', '.join(controlled)}",
                CONTROL_ACCOUNT,
            )

    def _check_capability(self, actor: PostingActor) -> None:
        if not actor.can_post_financial_entries:
            raise PostingPolicyError(
                "Caller is not permitted to post financial entries",
                NOT_AUTHORIZED,
            )

    # --- Commit step ---

    def _find_existing(self, draft: JournalEntryDraft) -> JournalEntry | None:
        if not draft.source_id:
            return None
        return self.db.execute(
            select(JournalEntry).where(
                JournalEntry.source_type == draft.source_type,
                JournalEntry.source_id == draft.source_id,
            )
        ).scalar_one_or_none()

    def _next_sequence_number(self) -> int:
        """
        Draw the next document number under a row lock.

        The lock is held until the surrounding transaction ends,
        so concurrent posts serialize here.
        """
        sequence = self.db.execute(
            select(DocumentSequence)
            .where(DocumentSequence.name == JOURNAL_ENTRY_SEQUENCE)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if sequence is None:
            sequence = DocumentSequence(name=JOURNAL_ENTRY_SEQUENCE, next_value=1)
            self.db.add(sequence)

        value = sequence.next_value
        sequence.next_value = value + 1
        self.db.flush()
        return value

    def _write(
        self, validated: ValidatedEntry, reverses_entry_id: int | None
    ) -> JournalEntry:
        draft = validated.draft
        sequence_number = self._next_sequence_number()

        entry = JournalEntry(
            sequence_number=sequence_number,
            entry_date=draft.entry_date,
            memo=draft.memo,
            source_type=draft.source_type,
            source_id=draft.source_id,
            status=EntryStatus.POSTED,
            is_reversal=reverses_entry_id is not None,
            reverses_entry_id=reverses_entry_id,
            fiscal_period_id=validated.period.id if validated.period else None,
            posted_by=validated.actor.actor_id,
            posted_at=datetime.utcnow(),
        )
        for number, line in enumerate(draft.lines, start=1):
            entry.lines.append(JournalLine(
                line_number=number,
                gl_account_id=validated.accounts[line.account_code].id,
                debit=line.debit,
                credit=line.credit,
                description=line.description,
                cost_center=line.cost_center,
                department=line.department,
            ))
        self.db.add(entry)
        self.db.flush()

        self.db.add(AuditLog(
            event_type=JOURNAL_POSTED,
            entity_type="journal_entry",
            entity_id=entry.id,
            actor_id=validated.actor.actor_id,
            details=json.dumps({
                "sequence_number": sequence_number,
                "source_type": draft.source_type.value,
                "source_id": draft.source_id,
                "total": str(validated.total),
                "lines": len(draft.lines),
                "fiscal_period_id": entry.fiscal_period_id,
            }),
        ))
        self.db.flush()
        return entry
