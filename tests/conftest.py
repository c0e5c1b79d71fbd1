"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real ledger. Tables are created before each test and dropped
after, so every test starts from an empty ledger with the
journal counter at 1.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from general_ledger.main import app
from general_ledger.models.base import Base, get_db
from general_ledger.models.enums import AccountType
from general_ledger.schemas.account import GLAccountCreate
from general_ledger.schemas.journal import PostingActor
from general_ledger.services.chart_of_accounts import ChartOfAccounts
from general_ledger.services.fiscal_periods import FiscalPeriodManager


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
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
    Provide a test client bound to the test session.

    get_db is overridden so the app and the test share one
    session.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def actor():
    """A caller allowed to post financial entries."""
    return PostingActor(actor_id="accountant-1", can_post_financial_entries=True)


@pytest.fixture
def open_year(db_session):
    """
    Twelve open monthly periods for 2025, returned in order.

    The current year is opened too, since reversals are dated
    today unless told otherwise.
    """
    manager = FiscalPeriodManager(db_session)
    periods = manager.initialize_fiscal_year(2025)
    manager.initialize_fiscal_year(date.today().year)
    db_session.commit()
    return periods


@pytest.fixture
def chart(db_session):
    """
    A small chart of accounts, keyed by code:

    1000 Cash (debit-normal), 1200 Receivables (control),
    4000 Revenue (credit-normal), 6000 Expenses (debit-normal).
    """
    service = ChartOfAccounts(db_session)
    accounts = {
        "1000": service.create_account(GLAccountCreate(
            code="1000", name="Cash", account_type=AccountType.ASSET,
        )),
        "1200": service.create_account(GLAccountCreate(
            code="1200",
            name="Accounts Receivable",
            account_type=AccountType.ASSET,
            is_control_account=True,
            control_module="receivables",
        )),
        "4000": service.create_account(GLAccountCreate(
            code="4000", name="Revenue", account_type=AccountType.REVENUE,
        )),
        "6000": service.create_account(GLAccountCreate(
            code="6000", name="Expenses", account_type=AccountType.EXPENSE,
        )),
    }
    db_session.commit()
    return accounts
