"""
Root conftest.py for pytest configuration and shared fixtures.
"""
import os
from datetime import UTC, datetime
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment BEFORE importing any app code
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_URL"] = "https://status.example.com"
os.environ["TIMEZONE"] = "UTC"
os.environ["LOCALE"] = "en"
os.environ["RATE_LIMIT_ENABLED"] = "false"

# Fixed "now" used by presenter tests: a Monday afternoon
FROZEN_NOW = datetime(2026, 10, 19, 14, 30, tzinfo=UTC)


@pytest.fixture(scope="session")
def test_db_engine():
    """
    Create a test database engine using SQLite in-memory.
    Session-scoped so it's created once for all tests.
    """
    from services.statuspage.app.db import Base
    # Import all models so they're registered with Base.metadata
    from services.statuspage.app.models.incidents import Incident, IncidentUpdate  # noqa: F401

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # Required for SQLite in-memory
        echo=False,
    )

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(test_db_engine) -> Generator[Session, None, None]:
    """
    Create a new database session for a test.
    Function-scoped so each test gets a fresh session with rollback.
    """
    connection = test_db_engine.connect()
    transaction = connection.begin()

    SessionLocal = sessionmaker(bind=connection, expire_on_commit=False)
    session = SessionLocal()

    # Application commits only release a SAVEPOINT; the outer transaction
    # is rolled back after the test
    nested = connection.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(session, transaction):
        if transaction.nested and not transaction._parent.nested:
            session.expire_all()
            session.begin_nested()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(test_db_engine, db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a FastAPI test client with database overrides.
    """
    # Must import here to ensure test environment is set
    import services.statuspage.app.db as db_module
    from services.statuspage.app.api.deps import get_db_session
    from services.statuspage.app.main import app

    original_engine = db_module._engine
    original_sessionmaker = db_module._SessionLocal

    db_module._engine = test_db_engine
    db_module._SessionLocal = sessionmaker(bind=test_db_engine, expire_on_commit=False)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close, managed by db_session fixture

    app.dependency_overrides[get_db_session] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    db_module._engine = original_engine
    db_module._SessionLocal = original_sessionmaker


@pytest.fixture
def date_factory():
    """DateFactory with a frozen clock, UTC display timezone and English."""
    from services.statuspage.app.core.dates import DateFactory

    return DateFactory(clock=lambda: FROZEN_NOW)


@pytest.fixture
def make_incident(db_session: Session):
    """Persist an incident; keyword arguments override the defaults."""
    from services.statuspage.app.models.incidents import Incident

    def _make(**kwargs):
        values = {"name": "Elevated API error rates", "status": 1, "message": ""}
        values.update(kwargs)
        incident = Incident(**values)
        db_session.add(incident)
        db_session.commit()
        db_session.refresh(incident)
        return incident

    return _make


@pytest.fixture
def make_update(db_session: Session):
    """Persist an update for an incident."""
    from services.statuspage.app.models.incidents import IncidentUpdate

    def _make(incident, **kwargs):
        values = {"status": 1, "message": "We are investigating."}
        values.update(kwargs)
        update = IncidentUpdate(incident_id=incident.id, **values)
        db_session.add(update)
        db_session.commit()
        db_session.refresh(update)
        return update

    return _make


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
