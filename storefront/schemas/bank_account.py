"""Bank account schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BankAccountCreate(BaseModel):
    bank_name: str = Field(min_length=1, max_length=255)
    account_number: str = Field(min_length=1, max_length=64)
    account_holder: str = Field(min_length=1, max_length=255)
    description: str | None = None
    is_default: bool = False
    is_active: bool = True


class BankAccountUpdate(BaseModel):
    bank_name: str | None = Field(default=None, min_length=1, max_length=255)
    account_number: str | None = Field(default=None, min_length=1, max_length=64)
    account_holder: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    is_default: bool | None = None
    is_active: bool | None = None


class BankAccountResponse(BankAccountCreate):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
