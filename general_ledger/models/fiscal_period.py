"""
Fiscal period model.

A named, inclusive date range with a posting-eligibility status.
Periods are administered outside the ledger core; the core only
reads them to decide whether a date is postable.
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Date, DateTime, CheckConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from general_ledger.models.base import Base
from general_ledger.models.enums import PeriodStatus


class FiscalPeriod(Base):
    __tablename__ = "fiscal_periods"
    __table_args__ = (
        CheckConstraint(
            "start_date <= end_date", name="ck_fiscal_periods_date_order"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[PeriodStatus] = mapped_column(
        SAEnum(PeriodStatus, name="period_status_enum", create_constraint=True),
        nullable=False,
        default=PeriodStatus.OPEN,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def contains(self, on: date) -> bool:
        return self.start_date <= on <= self.end_date

    @property
    def is_open(self) -> bool:
        return self.status == PeriodStatus.OPEN

    def __repr__(self) -> str:
        return f"<FiscalPeriod {self.name} ({self.status.value})>"
