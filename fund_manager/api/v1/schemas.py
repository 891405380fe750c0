"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fund_manager.domain.models import EntryKind
from fund_manager.domain.transactions import TransactionType
from fund_manager.domain.validation import MAX_AMOUNT


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(ApiModel):
    message: str
    id: Optional[str] = None


# Groups and members


class MemberIn(ApiModel):
    name: str = Field(..., min_length=1)
    user_id: Optional[str] = None


class GroupCreateRequest(ApiModel):
    """Request body for POST /v1/groups"""

    group_name: str = Field(..., min_length=1)
    monthly_contribution: Optional[int] = Field(None, ge=0, le=MAX_AMOUNT)
    members: List[MemberIn] = []
    owner_name: Optional[str] = Field(None, description="Display name used when the owner is auto-added")


class GroupUpdateRequest(ApiModel):
    """Request body for PUT /v1/groups/{group_id}"""

    group_name: Optional[str] = Field(None, min_length=1)
    monthly_contribution: Optional[int] = Field(None, ge=0, le=MAX_AMOUNT)


class MemberRenameRequest(ApiModel):
    name: str = Field(..., min_length=1)


class RentStatusRequest(ApiModel):
    rent_paid: bool


class MemberSchema(ApiModel):
    member_id: str
    name: str
    user_id: Optional[str] = None
    rent_paid: bool = False
    rent_paid_date: Optional[str] = None


class GroupResponse(ApiModel):
    group_id: str
    group_name: str
    owner_id: str
    monthly_contribution: int
    current_month: Optional[str] = None
    members: List[MemberSchema]
    created_at: Optional[str] = None


# Ledger


class ExpenseCreateRequest(ApiModel):
    """Request body for POST /v1/groups/{group_id}/expenses; split defaults to every member"""

    title: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, le=MAX_AMOUNT, description="Amount in whole currency units")
    paid_by: str = Field(..., min_length=1, description="Member id of the payer")
    split_between: Optional[List[str]] = Field(None, min_length=1)
    type: EntryKind = EntryKind.EXPENSE

    @field_validator("type", mode="before")
    @classmethod
    def normalize_legacy_type(cls, value):
        # Goes through EntryKind._missing_ so "Common" is accepted
        return EntryKind(value) if isinstance(value, str) else value


class PaymentRequest(ApiModel):
    """Request body for POST /v1/groups/{group_id}/pay"""

    from_member: str = Field(..., alias="from", min_length=1)
    to_member: str = Field(..., alias="to", min_length=1)
    amount: int = Field(..., gt=0, le=MAX_AMOUNT)
    note: Optional[str] = None


class AddMoneyRequest(ApiModel):
    """Request body for POST /v1/groups/{group_id}/add-money"""

    member_id: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, le=MAX_AMOUNT)
    note: Optional[str] = None


class LedgerEntrySchema(ApiModel):
    entry_id: str
    title: str
    amount: int
    paid_by: str
    split_between: List[str]
    type: EntryKind
    entry_date: date = Field(..., alias="date")


class BalanceRow(ApiModel):
    member_id: str
    name: str
    total_paid: int
    balance: float


class TransferSchema(ApiModel):
    """Suggested transfer; from/to are display names"""

    from_member: str = Field(..., alias="from")
    to_member: str = Field(..., alias="to")
    from_id: str
    to_id: str
    amount: int


class BalanceReportResponse(ApiModel):
    """Response for GET /v1/groups/{group_id}/balance"""

    balances: List[BalanceRow]
    settlements: List[TransferSchema]
    total_expenses: int
    total_members: int
    monthly_contribution: int


# Personal transactions


class TransactionRequest(ApiModel):
    """Request body for creating or updating a personal transaction"""

    title: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, le=MAX_AMOUNT)
    type: TransactionType


class TransactionSchema(ApiModel):
    transaction_id: str
    title: str
    amount: int
    type: TransactionType
    transaction_date: date = Field(..., alias="date")


class TransactionSummaryResponse(ApiModel):
    total_income: int
    total_expenses: int
    remaining: int
    count: int
