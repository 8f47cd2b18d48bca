import queue

import httpx
import pytest

from client.api import LookupClient
from core.config import Settings
from core.models.network import (
    DataReceived,
    ResponseReceived,
    TransferCompleted,
    TransferHandle,
)


class FakeTransport:
    """Transport that never touches the network; tests post the events themselves."""

    def __init__(self) -> None:
        self.events: queue.Queue = queue.Queue()
        self.started: list[TransferHandle] = []
        self.closed = False

    def start(self, url: httpx.URL) -> TransferHandle:
        handle = TransferHandle(url)
        self.started.append(handle)
        return handle

    def close(self) -> None:
        self.closed = True

    def respond(self, handle: TransferHandle, status_code: int = 200) -> None:
        self.events.put(ResponseReceived(handle, status_code))

    def send(self, handle: TransferHandle, data: bytes) -> None:
        self.events.put(DataReceived(handle, data))

    def finish(self, handle: TransferHandle, error: Exception | None = None) -> None:
        self.events.put(TransferCompleted(handle, error))

    def complete(self, handle: TransferHandle, body: bytes, status_code: int = 200) -> None:
        self.respond(handle, status_code)
        self.send(handle, body)
        self.finish(handle)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(settings, transport) -> LookupClient:
    return LookupClient(settings, transport=transport)


@pytest.fixture
def outcomes() -> list:
    return []
