"""
Account model (chart of accounts).

Every journal entry is posted against an account. Accounts
can be grouped under a parent account to form a hierarchy.

An account's balance is never stored. It is computed from its
journal entries each time the account is loaded (see the
column_property attached in journal_entry.py), so it cannot
drift from the entries that make it up.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base, utcnow
from bookkeeping.models.enums import AccountType


class Account(Base):
    """
    A single account in the chart of accounts.

    balance is the raw net position: total debits minus total
    credits. Use normal_balance() to read it in the account
    type's natural sign.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum", create_constraint=True),
        nullable=False,
    )
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    parent: Mapped["Account | None"] = relationship(
        remote_side=[id], back_populates="children"
    )
    children: Mapped[list["Account"]] = relationship(back_populates="parent")
    entries: Mapped[list["JournalEntry"]] = relationship(
        back_populates="account"
    )

    def normal_balance(self) -> Decimal:
        """Balance in the sign convention of the account type."""
        return self.account_type.normal_balance_of(self.balance)

    def has_normal_balance(self) -> bool:
        """
        True when the balance sits on the account type's natural
        side: non-negative for debit-normal types, non-positive
        for credit-normal types.
        """
        return self.account_type.is_normal_balance(self.balance)

    def __repr__(self) -> str:
        return f"<Account {self.code} ({self.account_type.value})>"
