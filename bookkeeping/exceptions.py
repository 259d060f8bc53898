"""
Ledger error taxonomy.

ValidationError      malformed or unbalanced input, user-correctable
NotFoundError        referenced entity absent
ConflictError        request clashes with existing ledger state
UnsupportedOperationError
                     operation deliberately not implemented
StoreError           persistence failure; message is kept generic
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every error the ledger raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# --- Validation ---

class ValidationError(LedgerError):
    pass


class EntryValidationError(ValidationError):
    """A single journal entry is malformed.

    index is the entry's 1-based position in its transaction,
    or None when the entry was validated on its own.
    """

    def __init__(self, reason: str, index: int | None = None):
        self.reason = reason
        self.index = index
        if index is not None:
            message = f"Journal entry {index}: {reason}"
        else:
            message = reason
        super().__init__(message)


class ConflictingAmountsError(EntryValidationError):
    pass


class MissingAmountError(EntryValidationError):
    pass


class InvalidAmountError(EntryValidationError):
    """Amount is not finite or is finer than the storage scale."""


class EmptyTransactionError(ValidationError):
    def __init__(self):
        super().__init__("Transaction must have at least one journal entry")


class UnbalancedTransactionError(ValidationError):
    def __init__(self, debits: Decimal, credits: Decimal):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Transaction does not balance: "
            f"debits ({debits}) != credits ({credits})"
        )


class UnknownAccountError(ValidationError):
    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account with ID {account_id} does not exist")


class InvalidParentError(ValidationError):
    def __init__(self, parent_id: int):
        self.parent_id = parent_id
        super().__init__(f"Parent account {parent_id} does not exist")


# --- Lookup ---

class NotFoundError(LedgerError):
    def __init__(self, resource: str, identifier=None):
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} {identifier} not found")


# --- Conflicts ---

class ConflictError(LedgerError):
    pass


class DuplicateCodeError(ConflictError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Account with code '{code}' already exists")


class SelfParentError(ConflictError):
    def __init__(self):
        super().__init__("Account cannot be its own parent")


class ParentCycleError(ConflictError):
    def __init__(self, account_id: int, parent_id: int):
        super().__init__(
            f"Setting parent {parent_id} on account {account_id} "
            f"would create a cycle"
        )


class AccountInUseError(ConflictError):
    pass


# --- Boundaries ---

class UnsupportedOperationError(LedgerError):
    pass


class StoreError(LedgerError):
    def __init__(self, message: str = "Internal ledger store error"):
        super().__init__(message)
