"""
Audit log model.

Records ledger events (postings, reversals) for compliance
and debugging. Written in the same transaction as the event,
so an entry never exists without its audit record.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from general_ledger.models.base import Base

JOURNAL_POSTED = "JOURNAL_POSTED"
JOURNAL_REVERSED = "JOURNAL_REVERSED"


class AuditLog(Base):
    """
    Immutable record of a ledger event.

    Like journal entries, audit logs are append-only.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[int] = mapped_column(nullable=False, index=True)
    actor_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
