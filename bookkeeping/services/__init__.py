"""Business logic services."""

from bookkeeping.services.ledger_store import LedgerStore
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.transaction_service import TransactionService
from bookkeeping.services.report_service import ReportService

__all__ = [
    "LedgerStore",
    "AccountService",
    "TransactionService",
    "ReportService",
]
