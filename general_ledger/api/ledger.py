"""
Ledger read endpoints.

Balances are calculated from journal lines on every request,
never stored.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from general_ledger.models.base import get_db
from general_ledger.services.ledger_query import LedgerQuery
from general_ledger.schemas.ledger import (
    AccountSummary,
    LedgerRow,
    AccountBalanceResponse,
    IntegrityReport,
)

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.get("/summary", response_model=list[AccountSummary])
def account_summary(db: Session = Depends(get_db)):
    """Debit and credit totals with the signed balance for every account."""
    return LedgerQuery(db).account_summary()


@router.get("/accounts/{account_id}/ledger", response_model=list[LedgerRow])
def account_ledger(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Entries touching the account in date order, with a running balance."""
    return LedgerQuery(db).account_ledger(account_id)


@router.get(
    "/accounts/{account_id}/balance",
    response_model=AccountBalanceResponse,
)
def account_balance(
    account_id: int,
    db: Session = Depends(get_db),
):
    query = LedgerQuery(db)
    balance = query.account_balance(account_id)
    account = query.chart.get_account(account_id)

    return AccountBalanceResponse(
        account_id=account.id,
        account_code=account.code,
        account_type=account.account_type,
        normal_balance=account.normal_balance,
        balance=balance,
    )


@router.get("/integrity", response_model=IntegrityReport)
def check_integrity(db: Session = Depends(get_db)):
    """Total debits must equal total credits across the whole ledger."""
    return LedgerQuery(db).check_integrity()
