"""Pytest configuration and fixtures for Job Board tests."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite:///:memory:"
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""

from jobboard.config import get_settings
from jobboard.database import Base, get_db
from jobboard.main import app
from jobboard.models import Business, Job, User
from jobboard.services.passwords import hash_password
from jobboard.services.tokens import TokenService


STRONG_PASSWORD = "Abc#1234"

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Enable foreign key support for SQLite (required for ON DELETE CASCADE/SET NULL)
@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def tokens():
    """Token service configured the same way the app configures it."""
    return TokenService.from_settings(get_settings())


@pytest.fixture
def user(db):
    """Create an active job seeker."""
    user = User(
        name="jane doe",
        email="jane@example.com",
        phone="+55 11 99999-0000",
        password_hash=hash_password(STRONG_PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_user(db):
    """Create a second job seeker."""
    user = User(
        name="john roe",
        email="john@example.com",
        phone="+55 11 98888-0000",
        password_hash=hash_password(STRONG_PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def business(db):
    """Create an active business."""
    business = Business(
        name="Acme Corp",
        email="hr@acme.example.com",
        phone="+55 11 3333-0000",
        cnpj="12.345.678/0001-90",
        password_hash=hash_password(STRONG_PASSWORD),
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def other_business(db):
    """Create a business that does not own the test listings."""
    business = Business(
        name="Globex",
        email="jobs@globex.example.com",
        phone="+55 21 2222-0000",
        password_hash=hash_password(STRONG_PASSWORD),
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def user_headers(user, tokens):
    return {"Authorization": f"Bearer {tokens.issue_session_token(user, 'user')}"}


@pytest.fixture
def other_user_headers(other_user, tokens):
    return {"Authorization": f"Bearer {tokens.issue_session_token(other_user, 'user')}"}


@pytest.fixture
def business_headers(business, tokens):
    return {"Authorization": f"Bearer {tokens.issue_session_token(business, 'business')}"}


@pytest.fixture
def other_business_headers(other_business, tokens):
    return {"Authorization": f"Bearer {tokens.issue_session_token(other_business, 'business')}"}


@pytest.fixture
def open_job(db, business):
    """Create an open listing owned by ``business``."""
    job = Job(
        title="Backend Developer",
        description="Build and run our APIs",
        salary="R$ 8.000",
        business_id=business.id,
        city="Sao Paulo",
        state="SP",
        work_mode="REMOTE",
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job
