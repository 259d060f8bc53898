"""
Journal entry model.

Each entry is one leg of a double-entry transaction: a debit
or a credit against exactly one account. Entries are immutable.
Once posted, they are never modified or deleted on their own,
because changing one leg would unbalance the transaction.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, func, select, type_coerce
from sqlalchemy.orm import Mapped, mapped_column, relationship, column_property

from bookkeeping.models.account import Account
from bookkeeping.models.base import Base, utcnow
from bookkeeping.money import MoneyType, ZERO


class JournalEntry(Base):
    """
    A debit or credit posted to an account.

    Exactly one of debit_amount and credit_amount is positive;
    the other is zero. Within a transaction the sum of debits
    equals the sum of credits. That invariant is enforced by the
    validator and the LedgerStore, not by the model.
    """

    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_id: Mapped[int] = mapped_column(
        ForeignKey("transactions.id"), nullable=False, index=True
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    debit_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=ZERO
    )
    credit_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=ZERO
    )
    description: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    transaction: Mapped["Transaction"] = relationship(
        back_populates="entries"
    )
    account: Mapped["Account"] = relationship(back_populates="entries")

    @property
    def net_amount(self) -> Decimal:
        """Positive for debits, negative for credits."""
        return self.debit_amount - self.credit_amount

    @property
    def is_debit(self) -> bool:
        return self.debit_amount > ZERO

    @property
    def is_credit(self) -> bool:
        return self.credit_amount > ZERO

    @property
    def amount(self) -> Decimal:
        return self.debit_amount if self.is_debit else self.credit_amount

    def __repr__(self) -> str:
        side = "DEBIT" if self.is_debit else "CREDIT"
        return f"<JournalEntry {side} {self.amount} account={self.account_id}>"


# Live balance: net debits minus credits over every entry on the
# account, recomputed by the database whenever an Account is loaded.
Account.balance = column_property(
    select(
        type_coerce(
            func.coalesce(
                func.sum(JournalEntry.debit_amount)
                - func.sum(JournalEntry.credit_amount),
                0,
            ),
            MoneyType,
        )
    )
    .where(JournalEntry.account_id == Account.id)
    .correlate_except(JournalEntry)
    .scalar_subquery()
)
