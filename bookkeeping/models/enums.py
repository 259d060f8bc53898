"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum
from decimal import Decimal


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    @property
    def is_debit_normal(self) -> bool:
        """Increases are recorded as debits (assets, expenses)."""
        return self in (AccountType.ASSET, AccountType.EXPENSE)

    @property
    def is_credit_normal(self) -> bool:
        return not self.is_debit_normal

    @property
    def sort_order(self) -> int:
        """Position in report order: assets first, expenses last."""
        return _REPORT_ORDER[self]

    def normal_balance_of(self, balance: Decimal) -> Decimal:
        """
        Express a raw debit-minus-credit balance in this type's
        natural sign. Credit-normal types are negated.
        """
        return balance if self.is_debit_normal else -balance

    def is_normal_balance(self, balance: Decimal) -> bool:
        if self.is_debit_normal:
            return balance >= 0
        return balance <= 0


_REPORT_ORDER = {
    AccountType.ASSET: 1,
    AccountType.LIABILITY: 2,
    AccountType.EQUITY: 3,
    AccountType.REVENUE: 4,
    AccountType.EXPENSE: 5,
}
