"""
Pydantic schemas for chart-of-accounts operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from general_ledger.models.enums import AccountType, NormalBalance


class GLAccountCreate(BaseModel):
    """Request to create a new GL account."""
    code: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType
    # Defaults from account_type when omitted
    normal_balance: NormalBalance | None = None
    is_control_account: bool = False
    control_module: str | None = Field(default=None, max_length=50)
    is_locked: bool = False
    description: str | None = None


class GLAccountUpdate(BaseModel):
    """
    Request to edit a GL account.

    normal_balance is deliberately absent: it is fixed at creation.
    """
    code: str | None = Field(default=None, min_length=1, max_length=20)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    account_type: AccountType | None = None
    is_control_account: bool | None = None
    control_module: str | None = Field(default=None, max_length=50)
    description: str | None = None

    @field_validator("code", "name", "account_type", "is_control_account")
    @classmethod
    def required_fields_not_null(cls, v, info):
        """These may be omitted, but not cleared."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class GLAccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    normal_balance: NormalBalance
    is_control_account: bool
    control_module: str | None
    is_locked: bool
    is_active: bool
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
