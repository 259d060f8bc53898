"""
Transaction service: posting and reading transactions.

Each post:
1. Checks the balance rules (validator)
2. Checks that every referenced account exists
3. Hands the request to the LedgerStore, which writes the
   transaction and its entries in one unit of work

If any step fails, nothing is written and the error is
raised to the caller unchanged.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.exceptions import (
    NotFoundError,
    UnknownAccountError,
    ValidationError,
)
from bookkeeping.models.account import Account
from bookkeeping.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionUpdate,
    TransactionWithEntries,
    ValidationResult,
)
from bookkeeping.services.ledger_store import LedgerStore
from bookkeeping.services.validator import collect_errors, validate_transaction

logger = logging.getLogger(__name__)


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.store = LedgerStore(db)

    def _missing_accounts(self, request: TransactionCreate) -> list[int]:
        """Referenced account ids that do not exist, in request order."""
        wanted = [e.account_id for e in request.journal_entries]
        if not wanted:
            return []
        found = set(self.db.execute(
            select(Account.id)
            .where(Account.id.in_(set(wanted)))
            .with_for_update()
        ).scalars().all())

        missing = []
        for account_id in wanted:
            if account_id not in found and account_id not in missing:
                missing.append(account_id)
        return missing

    def create_transaction(
        self, request: TransactionCreate
    ) -> TransactionWithEntries:
        """
        Post a transaction with all of its journal entries.

        Balance rules are checked before any account lookup so
        that a malformed request never touches the database.
        """
        try:
            validate_transaction(request)
            missing = self._missing_accounts(request)
            if missing:
                raise UnknownAccountError(missing[0])
        except ValidationError as e:
            # Release the read started by the account lookup
            self.db.rollback()
            logger.warning("Rejected transaction %r: %s",
                           request.description, e.message)
            raise

        return self.store.create_transaction(request)

    def validate_transaction(self, request: TransactionCreate) -> ValidationResult:
        """
        Dry run: every reason the request would be rejected.

        Nothing is written. total_amount is the amount that
        would move, reported only when the request is valid.
        """
        errors = collect_errors(request)
        for account_id in self._missing_accounts(request):
            errors.append(UnknownAccountError(account_id).message)
        self.db.rollback()

        valid = not errors
        return ValidationResult(
            valid=valid,
            errors=errors,
            total_amount=request.total_debits() if valid else None,
        )

    def get_transaction(self, transaction_id: int) -> TransactionWithEntries:
        result = self.store.get_transaction(transaction_id)
        if result is None:
            raise NotFoundError("Transaction", transaction_id)
        return result

    def list_transactions(
        self, criteria: TransactionFilter | None = None
    ) -> list[TransactionWithEntries]:
        return self.store.list_transactions(criteria or TransactionFilter())

    def update_transaction(
        self, transaction_id: int, request: TransactionUpdate
    ) -> TransactionWithEntries:
        self.get_transaction(transaction_id)
        if request.description is not None and not request.description.strip():
            raise ValidationError("Transaction description cannot be empty")
        return self.store.update_transaction(transaction_id, request)

    def delete_transaction(self, transaction_id: int) -> bool:
        self.get_transaction(transaction_id)
        return self.store.delete_transaction(transaction_id)
