"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test
and dropped after, so no test data persists.
"""

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from bookkeeping.main import app
from bookkeeping.models.base import Base, build_engine, get_db
from bookkeeping.models.enums import AccountType
from bookkeeping.schemas.account import AccountCreate
from bookkeeping.schemas.transaction import JournalEntryCreate, TransactionCreate
from bookkeeping.services.account_service import AccountService


# SQLite with foreign keys switched on, same as the application
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(TEST_DATABASE_URL)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses
    the test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Ledger helpers ---

@pytest.fixture
def chart(db_session):
    """
    A small chart of accounts, keyed by code.

    1110 Cash, 2100 Accounts Payable, 3100 Owner's Equity,
    4100 Sales Revenue, 5100 Rent Expense.
    """
    service = AccountService(db_session)
    accounts = {}
    for code, name, account_type in [
        ("1110", "Cash", AccountType.ASSET),
        ("2100", "Accounts Payable", AccountType.LIABILITY),
        ("3100", "Owner's Equity", AccountType.EQUITY),
        ("4100", "Sales Revenue", AccountType.REVENUE),
        ("5100", "Rent Expense", AccountType.EXPENSE),
    ]:
        account = service.create_account(AccountCreate(
            code=code, name=name, account_type=account_type,
        ))
        accounts[code] = account.id
    return accounts


def make_transaction(description, legs, when=date(2024, 1, 15), reference=None):
    """
    Build a TransactionCreate from (account_id, debit, credit) legs.

    Amounts are strings or Decimals; None leaves a side unset.
    """
    entries = []
    for account_id, debit, credit in legs:
        entries.append(JournalEntryCreate(
            account_id=account_id,
            debit_amount=Decimal(debit) if debit is not None else None,
            credit_amount=Decimal(credit) if credit is not None else None,
        ))
    return TransactionCreate(
        description=description,
        reference=reference,
        transaction_date=when,
        journal_entries=entries,
    )


@pytest.fixture
def txn():
    """The make_transaction builder, for tests that post entries."""
    return make_transaction
