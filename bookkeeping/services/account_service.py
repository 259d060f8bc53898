"""
Account service: the chart of accounts.

Creates, reads, renames, re-parents and deletes accounts,
and answers per-account balance and statement queries.
Balances always come from the journal entries.
"""

import logging
from datetime import date

from sqlalchemy import select, exists
from sqlalchemy.orm import Session

from bookkeeping.exceptions import (
    AccountInUseError,
    DuplicateCodeError,
    InvalidParentError,
    NotFoundError,
    ParentCycleError,
    SelfParentError,
)
from bookkeeping.models.account import Account
from bookkeeping.models.base import store_read, unit_of_work
from bookkeeping.models.enums import AccountType
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.transaction import Transaction
from bookkeeping.money import ZERO, sum_of
from bookkeeping.schemas.account import (
    AccountBalanceResponse,
    AccountCreate,
    AccountStatement,
    AccountUpdate,
    StatementLine,
)

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> Account:
        """
        Add an account to the chart of accounts.

        Raises DuplicateCodeError if the code is taken and
        InvalidParentError if the parent does not exist.
        """
        if self.get_account_by_code(request.code) is not None:
            raise DuplicateCodeError(request.code)

        if request.parent_id is not None:
            if not self._exists(request.parent_id):
                raise InvalidParentError(request.parent_id)

        with unit_of_work(self.db):
            account = Account(
                code=request.code,
                name=request.name,
                account_type=request.account_type,
                parent_id=request.parent_id,
            )
            self.db.add(account)
            self.db.flush()

        # Reload now so the live balance is read under the guard
        with store_read(self.db):
            self.db.refresh(account)

        logger.info(
            "Created account %s %s (%s)",
            account.code, account.name, account.account_type.value,
        )
        return account

    def get_account(self, account_id: int) -> Account:
        """Get an account by ID."""
        with store_read(self.db):
            account = self.db.get(Account, account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def get_account_by_code(self, code: str) -> Account | None:
        with store_read(self.db):
            return self.db.execute(
                select(Account).where(Account.code == code)
            ).scalar_one_or_none()

    def list_accounts(
        self, account_type: AccountType | None = None
    ) -> list[Account]:
        """All accounts ordered by code, optionally of one type."""
        query = select(Account).order_by(Account.code)
        if account_type is not None:
            query = query.where(Account.account_type == account_type)
        with store_read(self.db):
            return list(self.db.execute(query).scalars().all())

    def update_account(
        self, account_id: int, request: AccountUpdate
    ) -> Account:
        """
        Rename an account or move it under another parent.

        Code and type never change: entries already posted
        rely on them.
        """
        account = self.get_account(account_id)

        if request.parent_id is not None:
            if not self._exists(request.parent_id):
                raise InvalidParentError(request.parent_id)
            if request.parent_id == account_id:
                raise SelfParentError()
            if self._is_ancestor(account_id, request.parent_id):
                raise ParentCycleError(account_id, request.parent_id)

        with unit_of_work(self.db):
            if request.name is not None:
                account.name = request.name
            if request.parent_id is not None:
                account.parent_id = request.parent_id
            self.db.flush()

        # Reload now so the live balance is read under the guard
        with store_read(self.db):
            self.db.refresh(account)

        return account

    def delete_account(self, account_id: int) -> bool:
        """
        Delete an account. Returns False if it does not exist.

        An account with posted entries or child accounts cannot
        be deleted; the entries would lose their account.
        """
        with store_read(self.db):
            account = self.db.get(Account, account_id)
        if account is None:
            return False

        has_entries = self.db.execute(
            select(exists().where(JournalEntry.account_id == account_id))
        ).scalar()
        if has_entries:
            raise AccountInUseError(
                f"Account {account.code} has journal entries and "
                f"cannot be deleted"
            )

        has_children = self.db.execute(
            select(exists().where(Account.parent_id == account_id))
        ).scalar()
        if has_children:
            raise AccountInUseError(
                f"Account {account.code} has child accounts and "
                f"cannot be deleted"
            )

        with unit_of_work(self.db):
            self.db.delete(account)

        logger.info("Deleted account %s", account_id)
        return True

    def get_account_balance(self, account_id: int) -> AccountBalanceResponse:
        """Balance plus the debit and credit totals behind it."""
        account = self.get_account(account_id)

        with store_read(self.db):
            debit_total, credit_total = self.db.execute(
                select(
                    sum_of(JournalEntry.debit_amount),
                    sum_of(JournalEntry.credit_amount),
                ).where(JournalEntry.account_id == account_id)
            ).one()

        return AccountBalanceResponse(
            account_id=account.id,
            account_code=account.code,
            account_name=account.name,
            account_type=account.account_type,
            balance=debit_total - credit_total,
            debit_total=debit_total,
            credit_total=credit_total,
        )

    def get_account_statement(
        self,
        account_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> AccountStatement:
        """
        Entries posted to an account, oldest first.

        Entries dated before start_date are not listed; their
        net is carried in as the opening balance.
        """
        account = self.get_account(account_id)

        opening = ZERO
        if start_date is not None:
            with store_read(self.db):
                debits, credits = self.db.execute(
                    select(
                        sum_of(JournalEntry.debit_amount),
                        sum_of(JournalEntry.credit_amount),
                    )
                    .join(Transaction, JournalEntry.transaction_id == Transaction.id)
                    .where(
                        JournalEntry.account_id == account_id,
                        Transaction.transaction_date < start_date,
                    )
                ).one()
            opening = debits - credits

        query = (
            select(JournalEntry, Transaction.description, Transaction.transaction_date)
            .join(Transaction, JournalEntry.transaction_id == Transaction.id)
            .where(JournalEntry.account_id == account_id)
        )
        if start_date is not None:
            query = query.where(Transaction.transaction_date >= start_date)
        if end_date is not None:
            query = query.where(Transaction.transaction_date <= end_date)

        statement = AccountStatement(
            account_id=account.id,
            account_code=account.code,
            account_name=account.name,
            account_type=account.account_type,
            opening_balance=opening,
            closing_balance=opening,
        )
        with store_read(self.db):
            rows = self.db.execute(query).all()
        for entry, txn_description, txn_date in rows:
            statement.add_entry(StatementLine(
                id=entry.id,
                transaction_id=entry.transaction_id,
                transaction_description=txn_description,
                transaction_date=txn_date,
                account_id=account.id,
                account_code=account.code,
                account_name=account.name,
                debit_amount=entry.debit_amount,
                credit_amount=entry.credit_amount,
                description=entry.description,
                created_at=entry.created_at,
            ))
        statement.sort_by_date()
        return statement

    def _exists(self, account_id: int) -> bool:
        return self.db.execute(
            select(exists().where(Account.id == account_id))
        ).scalar()

    def _is_ancestor(self, account_id: int, candidate_parent_id: int) -> bool:
        """True if account_id appears in candidate_parent_id's parent chain."""
        seen: set[int] = set()
        current = candidate_parent_id
        while current is not None and current not in seen:
            if current == account_id:
                return True
            seen.add(current)
            current = self.db.execute(
                select(Account.parent_id).where(Account.id == current)
            ).scalar_one_or_none()
        return False
