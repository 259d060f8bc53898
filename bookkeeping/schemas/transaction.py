"""
Pydantic schemas for transaction operations.

Entry amounts are deliberately loose here (optional, any sign).
The journal entry validator owns those rules so that every
caller, HTTP or not, gets the same errors.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.config import get_settings
from bookkeeping.money import ZERO


# --- Request Schemas ---

class JournalEntryCreate(BaseModel):
    """One leg of a transaction: a debit or a credit, not both."""
    account_id: int
    debit_amount: Decimal | None = None
    credit_amount: Decimal | None = None
    description: str | None = Field(default=None, max_length=255)


class TransactionCreate(BaseModel):
    """A transaction together with all of its journal entries."""
    description: str = Field(min_length=1, max_length=255)
    reference: str | None = Field(default=None, max_length=100)
    transaction_date: date
    journal_entries: list[JournalEntryCreate] = Field(default_factory=list)

    def total_debits(self) -> Decimal:
        return sum(
            (e.debit_amount for e in self.journal_entries
             if e.debit_amount is not None),
            ZERO,
        )

    def total_credits(self) -> Decimal:
        return sum(
            (e.credit_amount for e in self.journal_entries
             if e.credit_amount is not None),
            ZERO,
        )


class TransactionUpdate(BaseModel):
    description: str | None = Field(default=None, max_length=255)
    reference: str | None = Field(default=None, max_length=100)
    transaction_date: date | None = None


class TransactionFilter(BaseModel):
    """
    Criteria for listing transactions.

    Dates are inclusive. Amount bounds apply to the
    transaction's total debits. offset and limit apply
    after filtering.
    """
    start_date: date | None = None
    end_date: date | None = None
    account_id: int | None = None
    description_contains: str | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    limit: int = Field(
        default_factory=lambda: get_settings().DEFAULT_PAGE_SIZE, ge=0
    )
    offset: int = Field(default=0, ge=0)


# --- Response Schemas ---

class TransactionResponse(BaseModel):
    id: int
    description: str
    reference: str | None
    transaction_date: date
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JournalEntryWithAccount(BaseModel):
    """A journal entry with its account's code and name."""
    id: int
    transaction_id: int
    account_id: int
    account_code: str
    account_name: str
    debit_amount: Decimal
    credit_amount: Decimal
    description: str | None
    created_at: datetime


class TransactionWithEntries(BaseModel):
    """
    A transaction and its entries, with totals computed from
    the entries that were actually read back.
    """
    transaction: TransactionResponse
    journal_entries: list[JournalEntryWithAccount]
    total_debits: Decimal
    total_credits: Decimal

    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    def net_amount(self) -> Decimal:
        return max(self.total_debits, self.total_credits)


class ValidationResult(BaseModel):
    """Outcome of a dry-run validation. Nothing is persisted."""
    valid: bool
    errors: list[str] = Field(default_factory=list)
    total_amount: Decimal | None = None


class TransactionSummary(BaseModel):
    total_transactions: int
    total_amount: Decimal
    date_range: tuple[date, date] | None = None
