"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from lounge_ledger.config import get_settings

settings = get_settings()


def enable_sqlite_savepoints(engine: Engine) -> Engine:
    """
    Make SAVEPOINT work on the pysqlite driver.

    pysqlite issues its own BEGIN lazily and gets in the way of
    nested transactions. Turning its transaction handling off and
    emitting BEGIN ourselves lets Session.begin_nested() roll back
    a failed journal entry without touching the outer transaction.
    """
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def build_engine(url: str) -> Engine:
    """Create an engine, applying the SQLite fixups when needed."""
    if url.startswith("sqlite"):
        return enable_sqlite_savepoints(create_engine(
            url,
            connect_args={"check_same_thread": False},
        ))

    # pool_pre_ping=True tests connections before using them,
    # which handles cases where the database restarted or a
    # connection went stale.
    return create_engine(url, pool_pre_ping=True)


# --- Engine ---
engine = build_engine(settings.DATABASE_URL)

# --- Session Factory ---
# autocommit=False means we explicitly control when changes
# are saved. A journal entry and its lines are written together
# or not at all.
# autoflush=False means SQLAlchemy won't send SQL to the
# database until we explicitly flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


# --- Base Model Class ---
class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, preventing connection leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
