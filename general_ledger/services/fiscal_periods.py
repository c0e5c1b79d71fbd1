"""
Fiscal period manager.

Answers one question for the posting engine: is this date
postable? Period close and reopen are administered elsewhere;
this module only reads their outcome. The seeding helpers exist
so a fresh ledger can be given a calendar.
"""

import calendar
import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from general_ledger.config import get_settings
from general_ledger.exceptions import (
    PostingPolicyError,
    PeriodDefinitionError,
    PERIOD_NOT_OPEN,
    NO_PERIOD,
    OVERLAPPING_PERIOD,
)
from general_ledger.models.enums import PeriodStatus
from general_ledger.models.fiscal_period import FiscalPeriod
from general_ledger.schemas.period import FiscalPeriodCreate

logger = logging.getLogger(__name__)


class FiscalPeriodManager:

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def period_for(self, on: date) -> FiscalPeriod | None:
        """Return the period whose inclusive range contains the date."""
        return self.db.execute(
            select(FiscalPeriod)
            .where(
                FiscalPeriod.start_date <= on,
                FiscalPeriod.end_date >= on,
            )
            .order_by(FiscalPeriod.start_date)
            .limit(1)
        ).scalar_one_or_none()

    def assert_postable(self, on: date) -> FiscalPeriod | None:
        """
        Raise PostingPolicyError unless the date is in an open period.

        A date outside every defined period is rejected unless
        ALLOW_POSTING_OUTSIDE_PERIODS is set, in which case None
        is returned and the entry is posted without a period.
        """
        period = self.period_for(on)

        if period is None:
            if self.settings.ALLOW_POSTING_OUTSIDE_PERIODS:
                return None
            raise PostingPolicyError(
                f"No fiscal period defined for {on.isoformat()}",
                NO_PERIOD,
            )

        if period.status != PeriodStatus.OPEN:
            raise PostingPolicyError(
                f"Fiscal period {period.name} is {period.status.value.lower()}; "
                f"cannot post on {on.isoformat()}",
                PERIOD_NOT_OPEN,
            )

        return period

    def list_periods(self) -> list[FiscalPeriod]:
        periods = self.db.execute(
            select(FiscalPeriod).order_by(FiscalPeriod.start_date)
        ).scalars().all()
        return list(periods)

    def create_period(self, request: FiscalPeriodCreate) -> FiscalPeriod:
        """
        Define a new period.

        Periods must not overlap, so every date maps to at most
        one period.
        """
        if request.start_date > request.end_date:
            raise PeriodDefinitionError(
                f"Period {request.name} starts after it ends"
            )

        existing = self.db.execute(
            select(FiscalPeriod).where(FiscalPeriod.name == request.name)
        ).scalar_one_or_none()
        if existing:
            raise PeriodDefinitionError(
                f"Period '{request.name}' already exists"
            )

        overlap = self.db.execute(
            select(FiscalPeriod).where(
                FiscalPeriod.start_date <= request.end_date,
                FiscalPeriod.end_date >= request.start_date,
            ).limit(1)
        ).scalar_one_or_none()
        if overlap:
            raise PeriodDefinitionError(
                f"Period {request.name} overlaps {overlap.name}",
                OVERLAPPING_PERIOD,
            )

        period = FiscalPeriod(
            name=request.name,
            start_date=request.start_date,
            end_date=request.end_date,
            status=request.status,
        )
        self.db.add(period)
        self.db.flush()
        return period

    def initialize_fiscal_year(self, year: int) -> list[FiscalPeriod]:
        """
        Create twelve monthly OPEN periods named YYYY-MM.

        Months that already have a period are skipped, so the
        call can be repeated safely.
        """
        created = []
        for month in range(1, 13):
            start = date(year, month, 1)
            end = date(year, month, calendar.monthrange(year, month)[1])
            if self.period_for(start) or self.period_for(end):
                continue
            created.append(self.create_period(FiscalPeriodCreate(
                name=f"{year}-{month:02d}",
                start_date=start,
                end_date=end,
            )))

        logger.info("Initialized fiscal year %s (%d periods created)", year, len(created))
        return created
