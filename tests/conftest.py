"""Shared fixtures: settings, a fake agent service, and a fake clock.

The fake service sits behind httpx.MockTransport, so the real AgentsClient,
credential exchange and gateway code run end to end without network access.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import pytest_asyncio

from mealplanner.agents.gateway import AgentGateway
from mealplanner.config import Settings

_ENV_VARS = (
    "AZURE_TENANT_ID",
    "AZURE_CLIENT_ID",
    "AZURE_CLIENT_SECRET",
    "AGENTS_API_KEY",
    "PROJECT_ENDPOINT",
    "PROJECT_ID",
    "AGENT_ID",
    "RUN_POLL_INTERVAL_MS",
    "RUN_POLL_TIMEOUT_MS",
    "AMAZON_AFFILIATE_TAG",
)

BASE_SETTINGS: dict[str, Any] = {
    "AZURE_TENANT_ID": "tenant-1",
    "AZURE_CLIENT_ID": "client-1",
    "AZURE_CLIENT_SECRET": "secret-1",
    "PROJECT_ENDPOINT": "https://agents.example.com/",
    "PROJECT_ID": "proj-1",
    "AGENT_ID": "asst_meal",
    "RUN_POLL_INTERVAL_MS": 1500,
    "RUN_POLL_TIMEOUT_MS": 120000,
}


def assistant(text: Any) -> dict[str, Any]:
    return {"role": "assistant", "content": text}


class FakeAgentService:
    """Answers token, thread, message and run requests like the real service.

    ``statuses`` is consumed one per run poll; the last one repeats.
    ``failures`` maps an operation name to the response it should return,
    ``errors`` to an exception the transport should raise.
    """

    def __init__(self) -> None:
        self.statuses: list[str] = ["completed"]
        self.run_error: dict[str, Any] | None = None
        self.messages: Any = {"data": [assistant([{"type": "text", "text": "Day 1: oats"}])]}
        self.token_response = httpx.Response(200, json={"access_token": "token-abc", "token_type": "Bearer"})
        self.failures: dict[str, httpx.Response] = {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []
        self._polls = 0

    def _operation(self, request: httpx.Request) -> str:
        path = request.url.path
        if path.endswith("/oauth2/v2.0/token"):
            return "token"
        if request.method == "POST" and path.endswith("/threads"):
            return "create_thread"
        if path.endswith("/messages"):
            return "add_message" if request.method == "POST" else "list_messages"
        if request.method == "POST" and path.endswith("/runs"):
            return "create_run"
        if "/runs/" in path:
            return "get_run"
        return "unknown"

    def handler(self, request: httpx.Request) -> httpx.Response:
        operation = self._operation(request)
        self.calls.append(operation)
        self.requests.append(request)

        if operation in self.errors:
            raise self.errors[operation]
        if operation in self.failures:
            return self.failures[operation]
        if operation == "token":
            return self.token_response
        if operation == "create_thread":
            return httpx.Response(200, json={"id": "thread_1", "object": "thread"})
        if operation == "add_message":
            return httpx.Response(200, json={"id": "msg_1", "role": "user"})
        if operation == "create_run":
            return httpx.Response(200, json={"id": "run_1", "status": "queued"})
        if operation == "get_run":
            status = self.statuses[min(self._polls, len(self.statuses) - 1)]
            self._polls += 1
            body: dict[str, Any] = {"id": "run_1", "status": status}
            if self.run_error is not None:
                body["last_error"] = self.run_error
            return httpx.Response(200, json=body)
        if operation == "list_messages":
            return httpx.Response(200, json=self.messages)
        return httpx.Response(404, text="not found")

    def request_for(self, operation: str) -> httpx.Request:
        return self.requests[self.calls.index(operation)]


class FakeClock:
    """Monotonic clock advanced only by its own sleep()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's environment out of Settings."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings():
    def _make(**overrides: Any) -> Settings:
        values = {**BASE_SETTINGS, **overrides}
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def service():
    return FakeAgentService()


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def http(service):
    async with httpx.AsyncClient(transport=httpx.MockTransport(service.handler)) as client:
        yield client


@pytest.fixture
def make_gateway(http, clock):
    def _make(settings: Settings) -> AgentGateway:
        gw = AgentGateway(settings, http=http)
        gw._sleep = clock.sleep
        gw._clock = clock
        return gw

    return _make


@pytest.fixture
def gateway(make_gateway, settings):
    return make_gateway(settings)
