"""
Pydantic schemas for fiscal periods.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from general_ledger.models.enums import PeriodStatus


class FiscalPeriodCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    start_date: date
    end_date: date
    status: PeriodStatus = PeriodStatus.OPEN


class FiscalPeriodResponse(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    status: PeriodStatus
    created_at: datetime

    model_config = {"from_attributes": True}
