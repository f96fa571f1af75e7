"""Pytest configuration and shared fixtures."""
import threading

import pytest
from fastapi.testclient import TestClient

from app.api import routes
from app.core.auth import Session, SessionUser, get_session
from app.main import app


class FakeResponse:
    """Just enough of requests.Response for the tool code."""

    def __init__(self, payload=None, status_code: int = 200, text: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def raise_for_status(self) -> None:
        if not self.ok:
            import requests
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON payload available")
        return self._payload


class SaveRecorder:
    """Stands in for save_chat; set() once called so tests can wait on the background thread."""

    def __init__(self):
        self.calls = []
        self.done = threading.Event()

    def __call__(self, chat_id, messages, user_id):
        self.calls.append((chat_id, messages, user_id))
        self.done.set()


@pytest.fixture
def gemini_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_GENERATIVE_AI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    monkeypatch.delenv("GEMINI_SEARCH_MODEL", raising=False)


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in():
    """Log every request in as user-1."""
    app.dependency_overrides[get_session] = lambda: Session(user=SessionUser(id="user-1"))
    yield "user-1"
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def signed_out():
    app.dependency_overrides[get_session] = lambda: None
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
def save_recorder(monkeypatch):
    recorder = SaveRecorder()
    monkeypatch.setattr(routes, "save_chat", recorder)
    return recorder
