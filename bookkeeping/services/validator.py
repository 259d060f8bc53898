"""
Journal entry validator.

Pure balance rules for journal entries and whole transactions.
Nothing here touches the database; these checks run before
any account lookup and before any write.

An amount counts as present when it is set, whatever its value.
"""

from decimal import Decimal

from bookkeeping.exceptions import (
    ConflictingAmountsError,
    EmptyTransactionError,
    EntryValidationError,
    InvalidAmountError,
    MissingAmountError,
    UnbalancedTransactionError,
    ValidationError,
)
from bookkeeping.money import ZERO, to_minor_units
from bookkeeping.schemas.transaction import JournalEntryCreate, TransactionCreate


def _check_storable(label: str, amount: Decimal | None, index: int | None) -> None:
    if amount is None:
        return
    try:
        to_minor_units(amount)
    except ValueError as e:
        raise InvalidAmountError(f"{label} amount is invalid: {e}", index) from e


def validate_entry(entry: JournalEntryCreate, index: int | None = None) -> None:
    """
    Check that an entry carries exactly one positive amount.

    Raises ConflictingAmountsError when both debit and credit are
    set (even if one is zero), MissingAmountError when neither is
    set or no amount that is set is positive, InvalidAmountError
    when an amount cannot be stored exactly.
    """
    _check_storable("Debit", entry.debit_amount, index)
    _check_storable("Credit", entry.credit_amount, index)

    has_debit = entry.debit_amount is not None
    has_credit = entry.credit_amount is not None

    if has_debit and has_credit:
        if entry.debit_amount <= ZERO and entry.credit_amount <= ZERO:
            raise MissingAmountError(
                "Journal entry has no positive debit or credit amount", index
            )
        raise ConflictingAmountsError(
            "Journal entry cannot have both debit and credit amounts", index
        )
    if not has_debit and not has_credit:
        raise MissingAmountError(
            "Journal entry must have either debit or credit amount", index
        )

    label, amount = (
        ("Debit", entry.debit_amount) if has_debit
        else ("Credit", entry.credit_amount)
    )
    if amount <= ZERO:
        raise MissingAmountError(f"{label} amount must be positive", index)


def validate_transaction(request: TransactionCreate) -> None:
    """
    Check a whole transaction before it is stored.

    1. It has at least one entry.
    2. Every entry passes validate_entry (errors carry the
       entry's 1-based position).
    3. Total debits equal total credits, exactly.
    """
    if not request.journal_entries:
        raise EmptyTransactionError()

    for position, entry in enumerate(request.journal_entries, start=1):
        validate_entry(entry, index=position)

    total_debits = request.total_debits()
    total_credits = request.total_credits()
    if total_debits != total_credits:
        raise UnbalancedTransactionError(total_debits, total_credits)


def collect_errors(request: TransactionCreate) -> list[str]:
    """
    Every balance-rule problem in a transaction, as messages.

    Unlike validate_transaction this does not stop at the first
    failure. The balance check is only reported when every
    entry is individually valid, since the totals of malformed
    entries mean nothing.
    """
    if not request.journal_entries:
        return [EmptyTransactionError().message]

    errors = []
    for position, entry in enumerate(request.journal_entries, start=1):
        try:
            validate_entry(entry, index=position)
        except EntryValidationError as e:
            errors.append(e.message)

    if not errors:
        try:
            validate_transaction(request)
        except ValidationError as e:
            errors.append(e.message)
    return errors
