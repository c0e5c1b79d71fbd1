"""
General-ledger account model (chart of accounts).

Every account in the system (cash, receivables, revenue,
accumulated depreciation, ...) is a GL account. Journal lines
are posted against these accounts.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Text, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from general_ledger.models.base import Base
from general_ledger.models.enums import AccountType, NormalBalance


class GLAccount(Base):
    """
    A single account in the chart of accounts.

    Once an account has journal lines it is never deleted,
    only deactivated via is_active=False. Control accounts
    (receivables, payables, fixed assets) only accept lines
    from system sources.
    """

    __tablename__ = "gl_accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum"),
        nullable=False,
    )
    normal_balance: Mapped[NormalBalance] = mapped_column(
        SAEnum(NormalBalance, name="normal_balance_enum"),
        nullable=False,
    )
    is_control_account: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    control_module: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    is_locked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    lines: Mapped[list["JournalLine"]] = relationship(
        back_populates="account"
    )

    @validates("normal_balance")
    def _freeze_normal_balance(self, key, value):
        current = self.normal_balance
        if current is not None and value != current:
            raise ValueError(
                f"Normal balance of account {self.code} is fixed "
                f"at {current.value}"
            )
        return value

    def __repr__(self) -> str:
        return f"<GLAccount {self.code} ({self.account_type.value})>"
