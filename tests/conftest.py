"""Shared test fixtures.

Provides a fake upstream (``httpx.MockTransport`` recording every outbound
request), settings/context builders, and a ``make_app`` factory that wires a
test ``AppContext`` into the FastAPI app through dependency overrides.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.context import AppContext, build_context, get_context

READ_URL = "https://n8n.example/webhook/read"
WEBHOOK_URL = "https://n8n.example/webhook/intake"
WEBHOOK_SECRET = "test-signing-secret"
SERVER_ORIGIN = "http://testserver"

ResponseFactory = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """Records outbound requests and answers them per URL."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, ResponseFactory] = {}

    def route(self, url: str, factory: ResponseFactory) -> None:
        self._routes[url] = factory

    def respond(self, url: str, status_code: int = 200, **kwargs: Any) -> None:
        self.route(url, lambda request: httpx.Response(status_code, **kwargs))

    def fail(self, url: str) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.route(url, _raise)

    def calls_to(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        factory = self._routes.get(str(request.url))
        if factory is None:
            return httpx.Response(404, text="no route")
        return factory(request)


@dataclass
class Harness:
    client: TestClient
    context: AppContext
    upstream: FakeUpstream


def make_settings(**overrides: Any) -> Settings:
    """Settings isolated from any local ``.env`` file."""
    values: dict[str, Any] = {
        "N8N_READ_URL": READ_URL,
        "N8N_WEBHOOK_URL": WEBHOOK_URL,
        "N8N_WEBHOOK_SECRET": WEBHOOK_SECRET,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


@pytest.fixture()
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture()
def make_app(upstream: FakeUpstream) -> Generator[Callable[..., Harness], None, None]:
    """Build a running TestClient whose routes see a test context."""
    from app.main import app

    clients: list[TestClient] = []

    def _make(**overrides: Any) -> Harness:
        settings = make_settings(**overrides)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        context = build_context(settings, http_client=http_client)
        app.dependency_overrides[get_context] = lambda: context
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return Harness(client=client, context=context, upstream=upstream)

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
    app.dependency_overrides.clear()


@pytest.fixture()
def harness(make_app: Callable[..., Harness]) -> Harness:
    """Fully configured app, verification disabled."""
    return make_app()
