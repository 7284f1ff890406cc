"""Shared test fixtures for meeting-recap."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from meeting_recap.core import config
from meeting_recap.core.database import get_session
from meeting_recap.core.errors import Success
from meeting_recap.main import app
from meeting_recap.models.meeting import MeetingSummary, User
from meeting_recap.routers.auth import get_current_email
from meeting_recap.routers.meetings import get_extractor, get_transcriber

from helpers import USER_EMAIL


@pytest.fixture(autouse=True)
def _provider_config(monkeypatch):
    """Ensure tests never hit the real provider."""
    monkeypatch.setattr(config, "OPENAI_API_KEY", "test-key-not-real")
    monkeypatch.setattr(config, "OPENAI_BASE_URL", "https://provider.test/v1")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(session) -> User:
    user = User(email=USER_EMAIL, name="Alice")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def transcriber():
    return AsyncMock(return_value=Success("We decided to launch next week."))


@pytest.fixture
def extractor():
    summary = MeetingSummary.model_validate({"decisions": ["Launch next week"], "action_items": []})
    return AsyncMock(return_value=Success(summary))


@pytest.fixture
def session_email():
    """Identity the fake session hands to the app; None means signed out."""
    return USER_EMAIL


@pytest.fixture
def client(session, transcriber, extractor, session_email):
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_current_email] = lambda: session_email
    app.dependency_overrides[get_transcriber] = lambda: transcriber
    app.dependency_overrides[get_extractor] = lambda: extractor
    yield TestClient(app)
    app.dependency_overrides.clear()
