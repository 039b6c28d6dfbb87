"""
Shared pytest fixtures for backend tests.

Provides in-memory database fixtures and tenant identifiers.
"""
import pytest
import sys
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from compliance.database import Base  # noqa: E402
from compliance import models  # noqa: E402,F401


@pytest.fixture
def engine():
    """Function-scoped in-memory SQLite engine with FK enforcement.

    StaticPool keeps a single connection so every session (and the API
    under test) sees the same in-memory database.
    """
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng, "connect")
    def _set_fk_pragma(dbapi_conn, _):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def session(session_factory):
    """Function-scoped session bound to the in-memory engine."""
    sess = session_factory()
    yield sess
    sess.close()


@pytest.fixture
def org_id():
    """Tenant used by most tests."""
    return "org-acme"


@pytest.fixture
def other_org_id():
    """A second tenant, for isolation tests."""
    return "org-globex"
