import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from core.types import OutcomeStatus, Record


@dataclass(eq=False)
class TransferHandle:
    """Token for one transfer started by a transport. Compared by identity."""

    url: httpx.URL
    cancelled: threading.Event = field(default_factory=threading.Event)

    def cancel(self) -> None:
        self.cancelled.set()

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled.is_set()


@dataclass
class ResponseReceived:
    handle: TransferHandle
    status_code: int


@dataclass
class DataReceived:
    handle: TransferHandle
    data: bytes


@dataclass
class TransferCompleted:
    handle: TransferHandle
    error: Exception | None = None  # None when the transfer finished cleanly


type TransportEvent = ResponseReceived | DataReceived | TransferCompleted


@dataclass(frozen=True)
class LookupOutcome:
    status: OutcomeStatus
    records: list[Record] | None = None  # Decoded body, when it was a valid record list
    error: Exception | None = None  # Transport error when the lookup failed
    decode_error: Exception | None = None  # Why the body could not be decoded
    status_code: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"

    def as_tuple(self) -> tuple[bool, list[Record] | None, Exception | None]:
        return self.succeeded, self.records, self.error


type LookupCallback = Callable[[LookupOutcome], Any]


@dataclass
class PendingRequest:
    key: str
    handle: TransferHandle
    callback: LookupCallback | None = None
    status_code: int | None = None  # Set once the response headers arrive
    payload: bytearray = field(default_factory=bytearray)
    result: list[Record] | None = None
    is_result_valid: bool = False
    decode_error: Exception | None = None
