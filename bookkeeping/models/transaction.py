"""
Transaction model.

A transaction is the business event (a sale, a payment, a
purchase). It owns the journal entries that record it. The
entries are always written together with the transaction,
inside one unit of work, and never changed afterwards.
"""

from datetime import date, datetime

from sqlalchemy import String, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base, utcnow


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    description: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    reference: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    transaction_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    # Entries come back in insertion order
    entries: Mapped[list["JournalEntry"]] = relationship(
        back_populates="transaction",
        order_by="JournalEntry.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.id} {self.transaction_date} "
            f"{self.description!r}>"
        )
