"""
Pydantic schemas for account operations.

These define the API contract: what data comes in,
what data goes out. They are separate from the database
models because the API shape and the storage shape
are often different.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.models.enums import AccountType


# --- Request Schemas ---

class AccountCreate(BaseModel):
    """Request to add an account to the chart of accounts."""
    code: str = Field(min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountType
    parent_id: int | None = None


class AccountUpdate(BaseModel):
    """Only name and parent can change; code and type are fixed."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    parent_id: int | None = None


# --- Response Schemas ---

class AccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    parent_id: int | None
    balance: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AccountBalanceResponse(BaseModel):
    """An account's balance together with the totals behind it."""
    account_id: int
    account_code: str
    account_name: str
    account_type: AccountType
    balance: Decimal
    debit_total: Decimal
    credit_total: Decimal


class StatementLine(BaseModel):
    """A journal entry as it appears on an account statement."""
    id: int
    transaction_id: int
    transaction_description: str
    transaction_date: date
    account_id: int
    account_code: str
    account_name: str
    debit_amount: Decimal
    credit_amount: Decimal
    description: str | None
    created_at: datetime


class AccountStatement(BaseModel):
    """
    Every entry posted to one account within a date window.

    opening_balance is the net (debit minus credit) of all
    entries dated before the window; closing_balance adds the
    window's entries to it.
    """
    account_id: int
    account_code: str
    account_name: str
    account_type: AccountType
    opening_balance: Decimal
    closing_balance: Decimal
    entries: list[StatementLine] = Field(default_factory=list)
    total_debits: Decimal = Decimal("0")
    total_credits: Decimal = Decimal("0")

    def add_entry(self, line: StatementLine) -> None:
        self.total_debits += line.debit_amount
        self.total_credits += line.credit_amount
        self.closing_balance += line.debit_amount - line.credit_amount
        self.entries.append(line)

    def sort_by_date(self) -> None:
        self.entries.sort(key=lambda e: (e.transaction_date, e.id))
