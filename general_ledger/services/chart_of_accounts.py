"""
Chart of accounts registry.

Holds the GL accounts every other component posts to or reads
from. Accounts are administered here but never removed once
they carry journal lines; they are deactivated instead.
"""

import logging

from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from general_ledger.exceptions import (
    AccountNotFoundError,
    AccountStateError,
    DUPLICATE_ACCOUNT,
    ACCOUNT_HAS_POSTINGS,
    ACCOUNT_LOCKED,
)
from general_ledger.models.enums import default_normal_balance
from general_ledger.models.gl_account import GLAccount
from general_ledger.models.journal_line import JournalLine
from general_ledger.schemas.account import GLAccountCreate, GLAccountUpdate

logger = logging.getLogger(__name__)

# Fields that cannot change once an account is locked or has lines
STRUCTURAL_FIELDS = ("code", "account_type", "is_control_account")


class ChartOfAccounts:
    """
    The service takes a database session as a constructor
    argument. The caller controls the transaction boundary.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: GLAccountCreate) -> GLAccount:
        """
        Create a new GL account.

        Raises AccountStateError if the code already exists.
        """
        existing = self.db.execute(
            select(GLAccount).where(GLAccount.code == request.code)
        ).scalar_one_or_none()

        if existing:
            raise AccountStateError(
                f"Account with code '{request.code}' already exists",
                DUPLICATE_ACCOUNT,
            )

        account = GLAccount(
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            normal_balance=(
                request.normal_balance
                or default_normal_balance(request.account_type)
            ),
            is_control_account=request.is_control_account,
            control_module=request.control_module,
            is_locked=request.is_locked,
            description=request.description,
        )
        self.db.add(account)
        self.db.flush()
        logger.info("Created GL account %s (%s)", account.code, account.account_type.value)
        return account

    def get_account(self, account_id: int) -> GLAccount:
        account = self.db.get(GLAccount, account_id)
        if not account:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def get_account_by_code(self, code: str) -> GLAccount:
        account = self.db.execute(
            select(GLAccount).where(GLAccount.code == code)
        ).scalar_one_or_none()
        if not account:
            raise AccountNotFoundError(f"Account '{code}' not found")
        return account

    def accounts_by_code(self, codes) -> dict[str, GLAccount]:
        """Bulk lookup. Unknown codes are simply absent from the result."""
        codes = set(codes)
        if not codes:
            return {}
        accounts = self.db.execute(
            select(GLAccount).where(GLAccount.code.in_(codes))
        ).scalars().all()
        return {a.code: a for a in accounts}

    def list_accounts(self) -> list[GLAccount]:
        accounts = self.db.execute(
            select(GLAccount).order_by(GLAccount.code)
        ).scalars().all()
        return list(accounts)

    def has_postings(self, account_id: int) -> bool:
        return self.db.execute(
            select(exists().where(JournalLine.gl_account_id == account_id))
        ).scalar()

    def update_account(
        self, account_id: int, request: GLAccountUpdate
    ) -> GLAccount:
        """
        Edit an account.

        Name and description are always editable. Code, type and
        the control flag are frozen once the account is locked or
        has postings, since existing lines were validated against
        them.
        """
        account = self.get_account(account_id)
        changes = request.model_dump(exclude_unset=True)

        structural = [
            field for field in STRUCTURAL_FIELDS
            if field in changes and changes[field] != getattr(account, field)
        ]
        if structural:
            if account.is_locked:
                raise AccountStateError(
                    f"Cannot change {', '.join(structural)} of locked "
                    f"account {account.code}",
                    ACCOUNT_LOCKED,
                )
            if self.has_postings(account.id):
                raise AccountStateError(
                    f"Cannot change {', '.join(structural)} of account "
                    f"{account.code}: it has journal lines",
                    ACCOUNT_HAS_POSTINGS,
                )

        if "code" in changes and changes["code"] != account.code:
            clash = self.db.execute(
                select(GLAccount).where(GLAccount.code == changes["code"])
            ).scalar_one_or_none()
            if clash:
                raise AccountStateError(
                    f"Account with code '{changes['code']}' already exists",
                    DUPLICATE_ACCOUNT,
                )

        for field, value in changes.items():
            setattr(account, field, value)

        self.db.flush()
        return account

    def deactivate_account(self, account_id: int) -> GLAccount:
        """Deactivate an account. Existing lines are untouched."""
        account = self.get_account(account_id)
        account.is_active = False
        self.db.flush()
        logger.info("Deactivated GL account %s", account.code)
        return account

    def delete_account(self, account_id: int) -> None:
        """
        Delete an account that was never used.

        Accounts with postings, or locked accounts, can only be
        deactivated.
        """
        account = self.get_account(account_id)
        if account.is_locked:
            raise AccountStateError(
                f"Cannot delete locked account {account.code}",
                ACCOUNT_LOCKED,
            )
        if self.has_postings(account.id):
            raise AccountStateError(
                f"Cannot delete account {account.code}: it has journal "
                f"lines. Deactivate it instead.",
                ACCOUNT_HAS_POSTINGS,
            )
        self.db.delete(account)
        self.db.flush()
