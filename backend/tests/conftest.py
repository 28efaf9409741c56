"""
Test infrastructure for the grounded-qa backend.

Calls to the model endpoint never leave the process: each test scripts the
upstream responses on an httpx.MockTransport, and API tests swap that client
into the app through dependency overrides.
"""

from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from grounded_qa.api.dependencies import get_http_client, get_in_flight_guard
from grounded_qa.config import settings
from grounded_qa.main import app
from grounded_qa.utils.in_flight import InFlightGuard

TEST_ENDPOINT = "https://generativelanguage.test/v1beta/models/test-model:generateContent"
TEST_API_KEY = "test-key"


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def attribution(uri: str | None = None, title: str | None = None) -> dict:
    """A groundingAttributions entry; None fields are left out entirely."""
    web = {}
    if uri is not None:
        web["uri"] = uri
    if title is not None:
        web["title"] = title
    return {"web": web}


def gemini_body(text: str = "Hello", attributions: list[dict] | None = None) -> dict:
    """A generateContent success body with one candidate."""
    candidate: dict = {"content": {"parts": [{"text": text}]}}
    if attributions is not None:
        candidate["groundingMetadata"] = {"groundingAttributions": attributions}
    return {"candidates": [candidate]}


def error_body(message: str) -> dict:
    return {"error": {"code": 0, "message": message}}


# ---------------------------------------------------------------------------
# Fake upstream and clock
# ---------------------------------------------------------------------------


class ScriptedUpstream:
    """
    MockTransport handler that replays queued responses in order.

    A queued exception is raised instead of answering, which is how
    transport failures reach the client.
    """

    def __init__(self) -> None:
        self.steps: list[httpx.Response | Exception] = []
        self.requests: list[httpx.Request] = []

    def queue(self, *steps: httpx.Response | Exception) -> None:
        self.steps.extend(steps)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.steps:
            raise AssertionError(f"Unexpected upstream call #{self.calls}")
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


class FakeClock:
    """Records requested backoff delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture()
def upstream() -> ScriptedUpstream:
    return ScriptedUpstream()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
async def http_client(upstream: ScriptedUpstream) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Outbound client whose transport is the scripted upstream."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


# ---------------------------------------------------------------------------
# FastAPI AsyncClient
# ---------------------------------------------------------------------------


@pytest.fixture()
def guard() -> InFlightGuard:
    return InFlightGuard()


@pytest.fixture()
async def client(
    http_client: httpx.AsyncClient, guard: InFlightGuard, monkeypatch
) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient against the app with the scripted upstream injected,
    a fresh in-flight guard, no backoff delay and rate limiting disabled.
    """
    monkeypatch.setattr(settings, "gemini_api_url", TEST_ENDPOINT)
    monkeypatch.setattr(settings, "gemini_api_key", TEST_API_KEY)
    monkeypatch.setattr(settings, "initial_backoff_seconds", 0.0)

    async def _override_get_http_client():
        return http_client

    app.dependency_overrides[get_http_client] = _override_get_http_client
    app.dependency_overrides[get_in_flight_guard] = lambda: guard

    # Disable rate limiting for tests
    app.state.limiter.enabled = False

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.limiter.enabled = True
