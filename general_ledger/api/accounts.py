"""
Chart of accounts endpoints.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from general_ledger.exceptions import LedgerError
from general_ledger.models.base import get_db
from general_ledger.services.chart_of_accounts import ChartOfAccounts
from general_ledger.schemas.account import (
    GLAccountCreate,
    GLAccountUpdate,
    GLAccountResponse,
)

router = APIRouter(prefix="/ledger", tags=["Chart of Accounts"])


@router.post("/accounts", response_model=GLAccountResponse, status_code=201)
def create_account(
    request: GLAccountCreate,
    db: Session = Depends(get_db),
):
    """
    Create a GL account.

    normal_balance defaults from account_type when omitted.
    """
    chart = ChartOfAccounts(db)
    try:
        account = chart.create_account(request)
        db.commit()
        return account
    except LedgerError:
        db.rollback()
        raise


@router.get("/accounts", response_model=list[GLAccountResponse])
def list_accounts(db: Session = Depends(get_db)):
    """All accounts, ordered by code."""
    return ChartOfAccounts(db).list_accounts()


@router.get("/accounts/{account_id}", response_model=GLAccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    return ChartOfAccounts(db).get_account(account_id)


@router.patch("/accounts/{account_id}", response_model=GLAccountResponse)
def update_account(
    account_id: int,
    request: GLAccountUpdate,
    db: Session = Depends(get_db),
):
    """
    Edit an account.

    Code, type and control flag are frozen once the account is
    locked or has postings.
    """
    chart = ChartOfAccounts(db)
    try:
        account = chart.update_account(account_id, request)
        db.commit()
        return account
    except LedgerError:
        db.rollback()
        raise


@router.post(
    "/accounts/{account_id}/deactivate",
    response_model=GLAccountResponse,
)
def deactivate_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    chart = ChartOfAccounts(db)
    try:
        account = chart.deactivate_account(account_id)
        db.commit()
        return account
    except LedgerError:
        db.rollback()
        raise


@router.delete("/accounts/{account_id}", status_code=204)
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Delete an unused account. Used accounts must be deactivated."""
    chart = ChartOfAccounts(db)
    try:
        chart.delete_account(account_id)
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    return Response(status_code=204)
