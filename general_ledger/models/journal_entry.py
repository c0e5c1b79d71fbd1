"""
Journal entry model.

A journal entry is one double-entry transaction: a header
(date, memo, source, status) plus two or more lines. Entries
are only ever written by the PostingEngine, and once posted
their lines never change. Corrections are made by reversing
the entry and posting a new one.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Date, DateTime, Integer, Boolean, Text, ForeignKey,
    UniqueConstraint, Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from general_ledger.config import get_settings
from general_ledger.models.base import Base
from general_ledger.models.enums import SourceType, EntryStatus


class JournalEntry(Base):
    __tablename__ = "journal_entries"
    __table_args__ = (
        UniqueConstraint(
            "source_type", "source_id", name="uq_journal_entries_source"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    sequence_number: Mapped[int] = mapped_column(
        Integer, unique=True, nullable=False, index=True
    )
    entry_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True
    )
    memo: Mapped[str] = mapped_column(Text, nullable=False)
    source_type: Mapped[SourceType] = mapped_column(
        SAEnum(SourceType, name="source_type_enum", create_constraint=True),
        nullable=False,
    )
    source_id: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    status: Mapped[EntryStatus] = mapped_column(
        SAEnum(EntryStatus, name="entry_status_enum", create_constraint=True),
        nullable=False,
        default=EntryStatus.POSTED,
    )
    is_reversal: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    # Links are plain ids: the reversal is inserted first, then the
    # original is updated to point at it.
    reverses_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=True
    )
    reversed_by_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=True
    )
    fiscal_period_id: Mapped[int | None] = mapped_column(
        ForeignKey("fiscal_periods.id"), nullable=True, index=True
    )
    posted_by: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    posted_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    lines: Mapped[list["JournalLine"]] = relationship(
        back_populates="entry",
        order_by="JournalLine.line_number",
        cascade="all, delete-orphan",
    )

    @property
    def document_number(self) -> str:
        """Display form of the sequence number, e.g. JE-000042."""
        prefix = get_settings().DOCUMENT_NUMBER_PREFIX
        return f"{prefix}{self.sequence_number:06d}"

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))

    def __repr__(self) -> str:
        return (
            f"<JournalEntry #{self.sequence_number} "
            f"{self.source_type.value} ({self.status.value})>"
        )
