"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations, and so
that Account.balance is attached before any query runs.
"""

from bookkeeping.models.base import Base
from bookkeeping.models.enums import AccountType
from bookkeeping.models.account import Account
from bookkeeping.models.transaction import Transaction
from bookkeeping.models.journal_entry import JournalEntry

__all__ = [
    "Base",
    "AccountType",
    "Account",
    "Transaction",
    "JournalEntry",
]
