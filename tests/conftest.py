"""
Pytest configuration and fixtures.

Every test gets a fresh in-memory SQLite database; the app's get_db dependency
is overridden to hand out sessions bound to it.
"""
import os

# must be set before app.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("APP_ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import get_db
from app.main import app
from app.models import Base, Role, User
from app.services.auth import create_access_token, hash_password


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


_counter = {"n": 0}


@pytest.fixture()
def make_account(db_session):
    """Insert an account directly; returns the User row."""

    def _make(role: Role = Role.USER, name: str | None = None, email: str | None = None) -> User:
        _counter["n"] += 1
        n = _counter["n"]
        user = User(
            email=email or f"{role.value.lower()}{n}@example.com",
            password_hash=hash_password("password123"),
            name=name or f"{role.value.title()} {n}",
            role=role,
            bio="Certified coach" if role is Role.TRAINER else "",
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def trainer(make_account):
    return make_account(Role.TRAINER, name="Tina Trainer")


@pytest.fixture()
def member(make_account):
    return make_account(Role.USER, name="Uma User")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(subject=str(user.id))}"}


@pytest.fixture()
def headers_for():
    return auth_headers
