# =============================================================================
# tests/conftest.py  —  Shared fixtures: config + recording fake backend
# =============================================================================

import json

import httpx
import pytest
import pytest_asyncio

from goalstory.config import GatewayConfig
from goalstory.dispatcher import Dispatcher


BASE_URL = "https://api.example.test/v1"
TOKEN = "secret-token-123"


class FakeBackend:
    """Records every request and answers with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.payload = {"ok": True}
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        content = self.last.content
        return json.loads(content) if content else None


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig.from_args(BASE_URL, TOKEN)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def http_client(backend):
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as client:
        yield client


@pytest.fixture
def dispatcher(config, http_client) -> Dispatcher:
    return Dispatcher(config, http_client)
