"""
Fiscal period endpoints.

Close and reopen are administered outside the ledger core;
these endpoints only define periods and answer lookups.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from general_ledger.exceptions import LedgerError
from general_ledger.models.base import get_db
from general_ledger.services.fiscal_periods import FiscalPeriodManager
from general_ledger.schemas.period import FiscalPeriodCreate, FiscalPeriodResponse

router = APIRouter(prefix="/periods", tags=["Fiscal Periods"])


@router.post("", response_model=FiscalPeriodResponse, status_code=201)
def create_period(
    request: FiscalPeriodCreate,
    db: Session = Depends(get_db),
):
    manager = FiscalPeriodManager(db)
    try:
        period = manager.create_period(request)
        db.commit()
        return period
    except LedgerError:
        db.rollback()
        raise


@router.post(
    "/initialize/{year}",
    response_model=list[FiscalPeriodResponse],
    status_code=201,
)
def initialize_fiscal_year(
    year: int,
    db: Session = Depends(get_db),
):
    """Create the twelve monthly periods of a year. Existing months are kept."""
    manager = FiscalPeriodManager(db)
    try:
        periods = manager.initialize_fiscal_year(year)
        db.commit()
        return periods
    except LedgerError:
        db.rollback()
        raise


@router.get("", response_model=list[FiscalPeriodResponse])
def list_periods(db: Session = Depends(get_db)):
    return FiscalPeriodManager(db).list_periods()


@router.get("/lookup", response_model=FiscalPeriodResponse)
def lookup_period(
    on: date = Query(...),
    db: Session = Depends(get_db),
):
    """Return the period containing the given date."""
    period = FiscalPeriodManager(db).period_for(on)
    if not period:
        raise HTTPException(
            status_code=404, detail=f"No fiscal period contains {on.isoformat()}"
        )
    return period
