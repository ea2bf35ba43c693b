"""
Shared fixtures: in-memory SQLite, both account stores, and a TestClient
wired to the test database through dependency overrides.
"""

import os

# Must be set before jobboard.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ACCOUNT_STORE"] = "sql"
os.environ["SECRET_KEY"] = "jobboard-test-secret-key-0123456789abcdef"
os.environ["JWT_EXPIRATION"] = "1d"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.db.base import Base
from jobboard.db.session import get_db
from jobboard.main import app
from jobboard.models import Account
from jobboard.services import AccountService, InMemoryAccountStore, SqlAccountStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(params=["sql", "memory"])
def store(request, db_session):
    if request.param == "sql":
        return SqlAccountStore(db_session)
    return InMemoryAccountStore()


@pytest.fixture
def service(store):
    return AccountService(store)


@pytest.fixture
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def job_seeker_payload():
    return {
        "name": "Ann",
        "email": "a@x.com",
        "password": "secret1",
        "role": "jobSeeker",
    }


@pytest.fixture
def employer_payload():
    return {
        "name": "Sarah Chen",
        "email": "hiring@acme.example.com",
        "password": "employer123",
        "role": "employer",
        "organization_name": "Acme Logistics",
        "industry_type": "Transportation",
        "total_employee": 250,
        "city": "Springfield",
    }


@pytest.fixture
def lookup_account(db_session):
    """Read an account straight from the test database by email."""

    def _lookup(email: str):
        db_session.expire_all()
        return db_session.query(Account).filter(Account.email == email).first()

    return _lookup


@pytest.fixture
def second_store(store, engine):
    """Another handle on the same accounts, like a concurrent request would hold."""
    if isinstance(store, SqlAccountStore):
        session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
        yield SqlAccountStore(session)
        session.close()
    else:
        yield store
