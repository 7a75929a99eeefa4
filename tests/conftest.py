import os

os.environ["ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from neuron.db import Base, db_manager, get_db
from neuron.main import create_app
import neuron.models  # noqa: F401

pytest_plugins = [
    "tests.fixtures.auth_fixtures",
    "tests.fixtures.contact_fixtures",
    "tests.fixtures.ticket_fixtures",
    "tests.fixtures.whatsapp_fixtures",
]


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    db_manager.configure(engine)
    return engine


@pytest.fixture(scope="function")
def db(engine):
    """Fresh schema per test; the session is shared with the app under test."""
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="session")
def faker():
    return Faker()


@pytest.fixture(scope="function")
def app(db):
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as c:
        yield c
