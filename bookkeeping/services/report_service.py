"""
Report service: trial balance, account summary, balance sheet,
income statement and transaction summary.

All reports are read-only and computed from journal entries
at the moment they are requested. Nothing is cached, so two
reports over an unchanged ledger are identical. A failed read
surfaces as StoreError.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookkeeping.models.account import Account
from bookkeeping.models.base import store_read
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.transaction import Transaction
from bookkeeping.money import sum_of
from bookkeeping.schemas.report import (
    AccountSummary,
    BalanceSheet,
    IncomeStatement,
    TrialBalance,
    TrialBalanceEntry,
)
from bookkeeping.schemas.transaction import TransactionSummary


class ReportService:

    def __init__(self, db: Session):
        self.db = db

    def _accounts(self) -> list[Account]:
        with store_read(self.db):
            return list(self.db.execute(
                select(Account).order_by(Account.code)
            ).scalars().all())

    def get_trial_balance(self) -> TrialBalance:
        """
        One line per account, including accounts with no entries.

        Ordered by account type (asset, liability, equity,
        revenue, expense), then code.
        """
        query = (
            select(
                Account.id,
                Account.code,
                Account.name,
                Account.account_type,
                sum_of(JournalEntry.debit_amount),
                sum_of(JournalEntry.credit_amount),
            )
            .outerjoin(JournalEntry, JournalEntry.account_id == Account.id)
            .group_by(
                Account.id, Account.code, Account.name, Account.account_type
            )
        )
        with store_read(self.db):
            rows = self.db.execute(query).all()

        trial_balance = TrialBalance()
        for account_id, code, name, account_type, debits, credits in rows:
            trial_balance.add_entry(TrialBalanceEntry.from_totals(
                account_id=account_id,
                account_code=code,
                account_name=name,
                account_type=account_type,
                total_debits=debits,
                total_credits=credits,
            ))
        trial_balance.sort_by_type_and_code()
        return trial_balance

    def get_account_summary(self) -> AccountSummary:
        summary = AccountSummary()
        for account in self._accounts():
            summary.add_account(account)
        return summary

    def get_balance_sheet(self) -> BalanceSheet:
        sheet = BalanceSheet()
        for account in self._accounts():
            sheet.add_account(account)
        return sheet

    def get_income_statement(self) -> IncomeStatement:
        statement = IncomeStatement()
        for account in self._accounts():
            statement.add_account(account)
        return statement

    def get_transaction_summary(self) -> TransactionSummary:
        """Transaction count, total amount moved, and date range."""
        with store_read(self.db):
            count, first, last = self.db.execute(
                select(
                    func.count(Transaction.id),
                    func.min(Transaction.transaction_date),
                    func.max(Transaction.transaction_date),
                )
            ).one()
            total = self.db.execute(
                select(sum_of(JournalEntry.debit_amount))
            ).scalar_one()

        return TransactionSummary(
            total_transactions=count,
            total_amount=total,
            date_range=(first, last) if count else None,
        )
