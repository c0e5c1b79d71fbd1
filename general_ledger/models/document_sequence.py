"""
Document sequence model.

Holds the global journal-entry counter. The row is read and
incremented under a row lock inside the posting transaction, so
two concurrent commits can never draw the same number.
"""

from datetime import datetime

from sqlalchemy import String, BigInteger, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from general_ledger.models.base import Base

JOURNAL_ENTRY_SEQUENCE = "journal_entry"


class DocumentSequence(Base):
    __tablename__ = "document_sequences"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    next_value: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=1
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<DocumentSequence {self.name} next={self.next_value}>"
