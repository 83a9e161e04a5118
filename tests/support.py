"""Shared helpers: in-memory database and an API client wired to it."""

import unittest
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models import Base, User
from app.services.accounts import create_user

DEFAULT_PASSWORD = "secret123"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def event_payload(**overrides: Any) -> dict[str, Any]:
    """Valid event body starting 30 days from now."""
    start = datetime.now(UTC) + timedelta(days=30)
    body: dict[str, Any] = {
        "title": "PyCon Meetup",
        "description": "Talks and pizza",
        "startDateTime": start.isoformat(),
        "endDateTime": (start + timedelta(hours=3)).isoformat(),
        "location": "Berlin",
        "maxAttendees": 100,
        "ticketPrice": "25.50",
    }
    body.update(overrides)
    return body


class ApiTestCase(unittest.TestCase):
    """TestCase with a TestClient whose get_db points at a private in-memory database."""

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def create_user(
        self,
        username: str,
        roles: tuple[str, ...] = ("USER",),
        password: str = DEFAULT_PASSWORD,
        email: str | None = None,
    ) -> int:
        db = self.SessionLocal()
        try:
            user = create_user(
                db,
                username=username,
                email=email or f"{username}@example.com",
                password=password,
                first_name=username.title(),
                last_name="Tester",
                roles=roles,
            )
            return user.id
        finally:
            db.close()

    def user_count(self) -> int:
        db = self.SessionLocal()
        try:
            return db.query(User).count()
        finally:
            db.close()

    def signin(self, username: str, password: str = DEFAULT_PASSWORD) -> str:
        resp = self.client.post(
            "/api/auth/signin",
            json={"username": username, "password": password},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["token"]

    def headers_for(self, username: str, roles: tuple[str, ...] = ("USER",)) -> dict[str, str]:
        """Create a user with roles, sign in, and return bearer headers."""
        self.create_user(username, roles=roles)
        return {"Authorization": f"Bearer {self.signin(username)}"}
