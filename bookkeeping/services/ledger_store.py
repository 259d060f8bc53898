"""
Ledger store: the only code that writes journal entries.

This store enforces the fundamental rules:
1. Every transaction must balance (debits = credits, exactly)
2. A transaction and all of its entries are written in one
   unit of work; nothing is ever partially committed
3. Entries are immutable; transactions cannot be edited or
   deleted once posted

Account existence is the caller's job (TransactionService).
If a caller skips it, the foreign key on journal_entries
rejects the insert and the whole unit of work rolls back.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.exceptions import (
    UnbalancedTransactionError,
    UnsupportedOperationError,
)
from bookkeeping.models.account import Account
from bookkeeping.models.base import unit_of_work
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.transaction import Transaction
from bookkeeping.money import ZERO
from bookkeeping.schemas.transaction import (
    JournalEntryWithAccount,
    TransactionCreate,
    TransactionFilter,
    TransactionResponse,
    TransactionUpdate,
    TransactionWithEntries,
)
from bookkeeping.services.validator import validate_transaction

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Atomic creation and retrieval of transactions.

    The store takes a database session as a constructor
    argument. Writes open and commit their own unit of work;
    reads use whatever the session currently sees.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(
        self, request: TransactionCreate
    ) -> TransactionWithEntries:
        """
        Post a balanced transaction with all of its entries.

        The balance rules are checked again here even if the
        caller already did, because this is the last point
        before anything is written. Entries are inserted in
        request order and read back, joined with their
        accounts, before the commit. If anything fails,
        nothing is written.
        """
        validate_transaction(request)

        with unit_of_work(self.db):
            txn = Transaction(
                description=request.description,
                reference=request.reference,
                transaction_date=request.transaction_date,
            )
            self.db.add(txn)
            self.db.flush()

            # One flush per entry: ids follow request order
            for entry_data in request.journal_entries:
                self.db.add(JournalEntry(
                    transaction_id=txn.id,
                    account_id=entry_data.account_id,
                    debit_amount=entry_data.debit_amount or ZERO,
                    credit_amount=entry_data.credit_amount or ZERO,
                    description=entry_data.description,
                ))
                self.db.flush()

            result = self._assemble(txn)
            if not result.is_balanced():
                raise UnbalancedTransactionError(
                    result.total_debits, result.total_credits
                )

        logger.info(
            "Posted transaction %s (%s) with %d entries totalling %s",
            result.transaction.id,
            result.transaction.description,
            len(result.journal_entries),
            result.total_debits,
        )
        return result

    def get_transaction(self, transaction_id: int) -> TransactionWithEntries | None:
        """
        Load a transaction with its entries, ordered by entry id.

        Totals are summed from the entries read, never stored.
        """
        txn = self.db.get(Transaction, transaction_id)
        if txn is None:
            return None
        return self._assemble(txn)

    def list_transactions(
        self, criteria: TransactionFilter
    ) -> list[TransactionWithEntries]:
        """
        Newest transactions first (date, then id, descending).

        Each transaction is loaded in full and then checked
        against the filter; offset and limit count matching
        transactions only.
        """
        results: list[TransactionWithEntries] = []
        if criteria.limit == 0:
            return results

        transactions = self.db.execute(
            select(Transaction).order_by(
                Transaction.transaction_date.desc(),
                Transaction.id.desc(),
            )
        ).scalars().all()

        skipped = 0
        for txn in transactions:
            candidate = self._assemble(txn)
            if not self._matches(candidate, criteria):
                continue
            if skipped < criteria.offset:
                skipped += 1
                continue
            results.append(candidate)
            if len(results) >= criteria.limit:
                break
        return results

    def update_transaction(
        self, transaction_id: int, request: TransactionUpdate
    ) -> TransactionWithEntries:
        # Editing a posted transaction means re-validating every
        # entry it touches; until that exists, refuse outright.
        raise UnsupportedOperationError(
            "Transaction updates are not yet implemented"
        )

    def delete_transaction(self, transaction_id: int) -> bool:
        raise UnsupportedOperationError(
            "Transaction deletion is not yet implemented"
        )

    # --- Internals ---

    def _fetch_entries(self, transaction_id: int) -> list[JournalEntryWithAccount]:
        rows = self.db.execute(
            select(JournalEntry, Account.code, Account.name)
            .join(Account, JournalEntry.account_id == Account.id)
            .where(JournalEntry.transaction_id == transaction_id)
            .order_by(JournalEntry.id)
        ).all()

        return [
            JournalEntryWithAccount(
                id=entry.id,
                transaction_id=entry.transaction_id,
                account_id=entry.account_id,
                account_code=code,
                account_name=name,
                debit_amount=entry.debit_amount,
                credit_amount=entry.credit_amount,
                description=entry.description,
                created_at=entry.created_at,
            )
            for entry, code, name in rows
        ]

    def _assemble(self, txn: Transaction) -> TransactionWithEntries:
        entries = self._fetch_entries(txn.id)
        return TransactionWithEntries(
            transaction=TransactionResponse.model_validate(txn),
            journal_entries=entries,
            total_debits=sum((e.debit_amount for e in entries), ZERO),
            total_credits=sum((e.credit_amount for e in entries), ZERO),
        )

    @staticmethod
    def _matches(
        candidate: TransactionWithEntries, criteria: TransactionFilter
    ) -> bool:
        txn = candidate.transaction
        if criteria.start_date and txn.transaction_date < criteria.start_date:
            return False
        if criteria.end_date and txn.transaction_date > criteria.end_date:
            return False
        if criteria.description_contains:
            needle = criteria.description_contains.lower()
            if needle not in txn.description.lower():
                return False
        if criteria.account_id is not None:
            if not any(
                e.account_id == criteria.account_id
                for e in candidate.journal_entries
            ):
                return False
        if criteria.min_amount is not None:
            if candidate.total_debits < criteria.min_amount:
                return False
        if criteria.max_amount is not None:
            if candidate.total_debits > criteria.max_amount:
                return False
        return True
