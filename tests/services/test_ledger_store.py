"""
Tests for the LedgerStore.

Tests cover:
- Atomic posting of a transaction with its entries
- Rejection without partial writes
- Foreign key protection when accounts are not checked first
- Retrieval, ordering and filtering
- Immutability of posted transactions
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from bookkeeping.exceptions import (
    StoreError,
    UnbalancedTransactionError,
    UnsupportedOperationError,
)
from bookkeeping.models.journal_entry import JournalEntry
from bookkeeping.models.transaction import Transaction
from bookkeeping.schemas.transaction import TransactionFilter, TransactionUpdate
from bookkeeping.services.ledger_store import LedgerStore


def count(db_session, model):
    return db_session.execute(select(func.count(model.id))).scalar_one()


def post_sample(store, chart, txn):
    """Three transactions on three dates, posted out of order."""
    store.create_transaction(txn("Owner investment", [
        (chart["1110"], "1000.00", None),
        (chart["3100"], None, "1000.00"),
    ], when=date(2024, 1, 1)))
    store.create_transaction(txn("Rent for March", [
        (chart["5100"], "300.00", None),
        (chart["1110"], None, "300.00"),
    ], when=date(2024, 3, 1)))
    store.create_transaction(txn("Cash sale", [
        (chart["1110"], "100.00", None),
        (chart["4100"], None, "100.00"),
    ], when=date(2024, 2, 1)))


# --- Posting ---

class TestCreateTransaction:

    def test_sale_is_posted_with_entries(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        result = store.create_transaction(txn("Cash sale", [
            (chart["1110"], "100.00", None),
            (chart["4100"], None, "100.00"),
        ], reference="INV-001"))

        assert result.transaction.id is not None
        assert result.transaction.reference == "INV-001"
        assert result.total_debits == Decimal("100.00")
        assert result.total_credits == Decimal("100.00")
        assert result.is_balanced()
        assert [e.account_code for e in result.journal_entries] == [
            "1110", "4100",
        ]
        assert result.journal_entries[0].account_name == "Cash"

    def test_entries_keep_request_order(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        result = store.create_transaction(txn("Split", [
            (chart["4100"], None, "60.00"),
            (chart["1110"], "100.00", None),
            (chart["2100"], None, "40.00"),
        ]))

        ids = [e.id for e in result.journal_entries]
        assert ids == sorted(ids)
        assert [e.account_code for e in result.journal_entries] == [
            "4100", "1110", "2100",
        ]

    def test_unbalanced_rejected_and_nothing_written(self, db_session, chart, txn):
        store = LedgerStore(db_session)

        with pytest.raises(UnbalancedTransactionError):
            store.create_transaction(txn("Bad", [
                (chart["1110"], "100.00", None),
                (chart["4100"], None, "50.00"),
            ]))

        assert count(db_session, Transaction) == 0
        assert count(db_session, JournalEntry) == 0

    def test_missing_account_rolls_back_everything(self, db_session, chart, txn):
        store = LedgerStore(db_session)

        with pytest.raises(StoreError):
            store.create_transaction(txn("Orphan", [
                (chart["1110"], "10.00", None),
                (999, None, "10.00"),
            ]))

        assert count(db_session, Transaction) == 0
        assert count(db_session, JournalEntry) == 0


# --- Retrieval ---

class TestGetTransaction:

    def test_missing_returns_none(self, db_session):
        assert LedgerStore(db_session).get_transaction(42) is None

    def test_read_back_matches_posted(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        posted = store.create_transaction(txn("Cash sale", [
            (chart["1110"], "100.00", None),
            (chart["4100"], None, "100.00"),
        ]))

        loaded = store.get_transaction(posted.transaction.id)
        assert loaded == posted


class TestListTransactions:

    def test_newest_first(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        results = store.list_transactions(TransactionFilter())
        assert [r.transaction.description for r in results] == [
            "Rent for March", "Cash sale", "Owner investment",
        ]

    def test_same_date_ordered_by_id_descending(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        for description in ("First", "Second"):
            store.create_transaction(txn(description, [
                (chart["1110"], "1.00", None),
                (chart["4100"], None, "1.00"),
            ]))

        results = store.list_transactions(TransactionFilter())
        assert [r.transaction.description for r in results] == [
            "Second", "First",
        ]

    def test_date_range_is_inclusive(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        results = store.list_transactions(TransactionFilter(
            start_date=date(2024, 2, 1), end_date=date(2024, 3, 1),
        ))
        assert len(results) == 2

    def test_description_filter_ignores_case(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        results = store.list_transactions(
            TransactionFilter(description_contains="RENT")
        )
        assert [r.transaction.description for r in results] == [
            "Rent for March",
        ]

    def test_account_filter(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        results = store.list_transactions(
            TransactionFilter(account_id=chart["4100"])
        )
        assert [r.transaction.description for r in results] == ["Cash sale"]

    def test_amount_filters(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        results = store.list_transactions(TransactionFilter(
            min_amount=Decimal("200"), max_amount=Decimal("500"),
        ))
        assert [r.transaction.description for r in results] == [
            "Rent for March",
        ]

    def test_offset_and_limit(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        results = store.list_transactions(TransactionFilter(offset=1, limit=1))
        assert [r.transaction.description for r in results] == ["Cash sale"]

    def test_zero_limit_returns_nothing(self, db_session, chart, txn):
        store = LedgerStore(db_session)
        post_sample(store, chart, txn)

        assert store.list_transactions(TransactionFilter(limit=0)) == []


# --- Immutability ---

class TestPostedTransactionsAreImmutable:

    def test_update_not_supported(self, db_session):
        with pytest.raises(UnsupportedOperationError, match="updates"):
            LedgerStore(db_session).update_transaction(
                1, TransactionUpdate(description="Changed")
            )

    def test_delete_not_supported(self, db_session):
        with pytest.raises(UnsupportedOperationError, match="deletion"):
            LedgerStore(db_session).delete_transaction(1)
