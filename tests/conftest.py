import json
from typing import Callable, List, Optional

import httpx
import pytest

import librato_metrics
from librato_metrics.adapters import register_adapter, unregister_adapter
from librato_metrics.client import Client
from librato_metrics.config import Settings


MOCK_ADAPTER = "mock"


class RecordingTransport:
    """
    Collects requests sent through a mock adapter and answers them with a
    configurable handler.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return httpx.Response(202)

    @property
    def bodies(self) -> list:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture(autouse=True)
def isolated_defaults():
    """
    Reset process-wide state around every test.
    """
    librato_metrics.reset()
    yield
    librato_metrics.reset()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def client(settings: Settings) -> Client:
    with Client(settings=settings) as client:
        yield client


@pytest.fixture
def recorder() -> RecordingTransport:
    """
    Register a ``mock`` adapter backed by httpx.MockTransport.
    """
    recording = RecordingTransport()
    register_adapter(MOCK_ADAPTER, lambda: httpx.MockTransport(recording))
    yield recording
    unregister_adapter(MOCK_ADAPTER)


@pytest.fixture
def connected_client(client: Client, recorder: RecordingTransport) -> Client:
    client.authenticate("me@example.com", "foo")
    client.adapter = MOCK_ADAPTER
    return client


@pytest.fixture
def no_retry_wait(monkeypatch):
    """
    Skip tenacity's backoff sleeps.
    """
    monkeypatch.setattr("tenacity.nap.time.sleep", lambda seconds: None)
