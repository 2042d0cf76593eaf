"""
Shared test fixtures.

Sets up an isolated SQLite test database so tests never touch
the real database. Tables are created before and dropped after
every test, so each test starts with empty books.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from lounge_ledger.main import app
from lounge_ledger.models import Base
from lounge_ledger.models.base import build_engine, get_db
from lounge_ledger.services.chart_service import ChartOfAccountsService


# SQLite needs no database server, so the suite runs anywhere.
# build_engine applies the SAVEPOINT fixups the ledger relies on.
TEST_DATABASE_URL = "sqlite:///./test_ledger.db"

engine = build_engine(TEST_DATABASE_URL)

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
def seeded_session(db_session):
    """A session whose chart of accounts holds the default accounts."""
    ChartOfAccountsService(db_session).seed_defaults()
    db_session.commit()
    return db_session


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of the real database.
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
def seeded_client(client, seeded_session):
    return client


@pytest.fixture
def other_session(seeded_session):
    """
    A second, independent session on the same database.

    Stands in for another worker posting at the same time as
    seeded_session. The chart is already seeded and committed.
    """
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
