"""Test configuration: in-memory database, fresh OTP store and stub text generators."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OTP_DEMO_MODE"] = "true"
os.environ["OTP_BACKEND"] = "memory"
os.environ.pop("GOOGLE_CLIENT_ID", None)
os.environ.pop("GENERATION_API_KEY", None)

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from journal_coach.auth.otp_store import MemoryOTPStore
from journal_coach.core.database import Base, get_db
from journal_coach.core.dependency import get_otp_store, get_text_generator
from journal_coach.core.errors import ExternalServiceUnavailable

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


class FailingGenerator:
    """Behaves like an unreachable generation API."""

    def __init__(self):
        self.prompts = []

    def generate(self, prompt, **kwargs):
        self.prompts.append(prompt)
        raise ExternalServiceUnavailable("generation offline")


class CannedGenerator:
    def __init__(self, text="Generated coaching text."):
        self.text = text
        self.prompts = []

    def generate(self, prompt, **kwargs):
        self.prompts.append(prompt)
        return self.text


def make_entry(content, mood=None, tags=None, follow_up=None, timestamp=None, **kwargs):
    """Entry-shaped object for the pure heuristics."""
    return SimpleNamespace(
        id=kwargs.pop("id", uuid4()),
        content=content,
        mood=mood,
        tags=list(tags or []),
        mood_follow_up=follow_up,
        timestamp=timestamp or datetime.now(timezone.utc),
        ai_insight=kwargs.pop("ai_insight", None),
        **kwargs,
    )


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def days_ago():
    def _days_ago(n):
        return datetime.now(timezone.utc) - timedelta(days=n)
    return _days_ago


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def otp_store():
    return MemoryOTPStore(ttl_seconds=300)


@pytest.fixture
def generator():
    return FailingGenerator()


@pytest.fixture
def client(db, otp_store, generator):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_otp_store] = lambda: otp_store
    app.dependency_overrides[get_text_generator] = lambda: generator
    yield TestClient(app)
    app.dependency_overrides.clear()


def login(client, phone="+1 (555) 123-4567"):
    sent = client.post("/api/auth/send-otp", json={"phoneNumber": phone})
    assert sent.status_code == 200
    verified = client.post(
        "/api/auth/verify-otp",
        json={"phoneNumber": phone, "otp": sent.json()["demoOTP"]},
    )
    assert verified.status_code == 200
    return verified.json()


@pytest.fixture
def auth_headers(client):
    token = login(client)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def login_user(client):
    def _login(phone="+1 (555) 123-4567"):
        return login(client, phone)
    return _login
