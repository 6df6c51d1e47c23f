"""Shared fixtures for the notification engine test-suite."""

from __future__ import annotations

import itertools
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from campus_notify.domain.entities import Role, User
from campus_notify.infrastructure.database import build_engine, get_db, initialize_database
from campus_notify.infrastructure.repositories import UserRepository
from campus_notify.infrastructure.security import create_access_token
from campus_notify.interfaces.api.dependencies import get_session_factory


@pytest.fixture()
def engine(tmp_path):
    """Return an engine bound to a throwaway SQLite file.

    A file database lets adapter sessions and the test session see each other's
    commits the same way separate connections would in production.
    """

    test_engine = build_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    initialize_database(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a factory that stores a directory user and commits it."""

    counter = itertools.count(1)

    def _make_user(
        *,
        role: Role = Role.STUDENT,
        branch_id: str | None = "CSE",
        year: int | None = 2,
        semester: int | None = 3,
        is_active: bool = True,
        name: str | None = None,
    ) -> User:
        index = next(counter)
        user = UserRepository(session).create(
            User(
                id=None,
                name=name or f"User {index}",
                email=f"user{index}@campus.example",
                role=role,
                branch_id=branch_id,
                year=year,
                semester=semester,
                is_active=is_active,
            )
        )
        session.commit()
        return user

    return _make_user


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def client(session_factory):
    """Return a test client whose requests use the per-test database."""

    from main import create_app

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
