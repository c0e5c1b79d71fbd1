"""
Journal line model.

Each line is one debit or one credit against a GL account.
A line never carries both sides; the database enforces this
alongside the PostingEngine.
"""

from decimal import Decimal

from sqlalchemy import (
    String, Integer, Numeric, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from general_ledger.models.base import Base


class JournalLine(Base):
    __tablename__ = "journal_lines"
    __table_args__ = (
        CheckConstraint("debit >= 0", name="ck_journal_lines_debit_non_negative"),
        CheckConstraint("credit >= 0", name="ck_journal_lines_credit_non_negative"),
        CheckConstraint(
            "NOT (debit > 0 AND credit > 0)",
            name="ck_journal_lines_single_side",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_id: Mapped[int] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=False, index=True
    )
    line_number: Mapped[int] = mapped_column(Integer, nullable=False)
    gl_account_id: Mapped[int] = mapped_column(
        ForeignKey("gl_accounts.id"), nullable=False, index=True
    )
    debit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    credit: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    description: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    cost_center: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    department: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )

    entry: Mapped["JournalEntry"] = relationship(back_populates="lines")
    account: Mapped["GLAccount"] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        side = "DR" if self.debit else "CR"
        amount = self.debit or self.credit
        return f"<JournalLine {side} {amount} -> account {self.gl_account_id}>"
