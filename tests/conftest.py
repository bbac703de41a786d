"""Shared pytest fixtures for the employee records service tests."""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("OPENID_CONFIG_URL", "https://login.example.com/.well-known/openid-configuration")
os.environ.setdefault("VALID_AUDIENCE", "api://employee-records")
os.environ.setdefault("VALID_ISSUER", "https://sts.example.com/tenant/")

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.auth import token_required
from app.main import app
from config.database import get_db
from models.base import Base
from models.enums import UserRole
from models.user import User
from schemas.identity import Identity
from services.authorization import WriteGrant

ADMIN_ID = 1
USER_ID = 2
ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "viewer@example.com"


def employee_payload(**overrides: Any) -> dict[str, Any]:
    """A complete, valid employee payload in API field names."""
    payload = {
        "firstName": "Jo",
        "lastName": "Lee",
        "email": "jo@example.com",
        "phone": "1234567890",
        "department": "IT",
        "position": "Dev",
        "salary": 1000,
        "dateOfJoining": "2024-01-01",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """In-memory SQLite engine with all tables and two users."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(
            [
                User(id=ADMIN_ID, username="admin", email=ADMIN_EMAIL, role="admin", is_active=True),
                User(id=USER_ID, username="viewer", email=USER_EMAIL, role="user", is_active=True),
            ]
        )
        session.commit()
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker:
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(user_id=ADMIN_ID, email=ADMIN_EMAIL, role=UserRole.ADMIN)


@pytest.fixture
def user_identity() -> Identity:
    return Identity(user_id=USER_ID, email=USER_EMAIL, role=UserRole.USER)


@pytest.fixture
def admin_grant() -> WriteGrant:
    return WriteGrant(editor_id=ADMIN_ID)


@pytest.fixture
def make_client(session_factory: sessionmaker) -> Iterator[Callable[[Identity | None], TestClient]]:
    """Build a TestClient acting as the given identity.

    With ``None`` the real token dependency runs, so requests need a valid
    Bearer token.
    """

    def override_get_db() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def factory(identity: Identity | None) -> TestClient:
        app.dependency_overrides[get_db] = override_get_db
        if identity is None:
            app.dependency_overrides.pop(token_required, None)
        else:
            app.dependency_overrides[token_required] = lambda: identity
        return TestClient(app)

    try:
        yield factory
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_client(make_client, admin_identity: Identity) -> TestClient:
    return make_client(admin_identity)


@pytest.fixture
def user_client(make_client, user_identity: Identity) -> TestClient:
    return make_client(user_identity)
