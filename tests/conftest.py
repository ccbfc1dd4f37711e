import io
import json
import urllib.error

import pytest

from core.tavily import TavilySearchClient

TEST_API_KEY = "test-api-key"
TAVILY_URL = "https://api.tavily.com/search"


class FakeHTTPResponse:
    """Minimal stand-in for the object urllib.request.urlopen returns."""

    def __init__(self, body: bytes, status: int = 200):
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeUrlopen:
    """Records every request and answers with a queued outcome.

    Queue a dict (JSON success body), bytes (raw success body) or an
    exception instance (raised from urlopen).
    """

    def __init__(self):
        self.requests = []
        self.timeouts = []
        self._outcomes = []
        # Set to a threading.Event to hold the call until the test releases it.
        self.gate = None

    def respond_with(self, outcome) -> None:
        self._outcomes.append(outcome)

    def fail_with_status(self, status: int, body) -> None:
        raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        self._outcomes.append(
            urllib.error.HTTPError(TAVILY_URL, status, "Error", {}, io.BytesIO(raw))
        )

    @property
    def last_request(self):
        return self.requests[-1]

    @property
    def last_payload(self) -> dict:
        return json.loads(self.last_request.data.decode("utf-8"))

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.gate is not None:
            self.gate.wait(timeout=10)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, bytes):
            return FakeHTTPResponse(outcome)
        return FakeHTTPResponse(json.dumps(outcome).encode("utf-8"))


@pytest.fixture
def fake_urlopen(monkeypatch):
    fake = FakeUrlopen()
    monkeypatch.setattr("core.tavily.urllib.request.urlopen", fake)
    return fake


@pytest.fixture
def client():
    return TavilySearchClient(api_key=TEST_API_KEY)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("TAVILY_API_KEY", "TAVILY_API_URL", "TAVILY_TIMEOUT_SECONDS", "LOG_LEVEL"):
        # setenv first so teardown also removes values a test loads from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def sample_payload():
    return {
        "query": "test query",
        "response_time": 1.5,
        "answer": "Test answer",
        "results": [
            {
                "title": "Test Result",
                "url": "https://example.com",
                "content": "Test content",
                "score": 0.95,
                "published_date": "2024-01-01",
            }
        ],
        "follow_up_questions": ["What is this?"],
    }
