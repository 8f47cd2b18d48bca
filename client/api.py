"""
Lookup client for the acronym dictionary service.

At most one lookup is in flight at a time. Transfers run in the background and
their events are applied on the thread that calls ``process_events``/``wait``,
which is also where completion callbacks fire.
"""

import logging
import queue
import time
from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from client.transport import HTTPTransport
from core.config import Settings
from core.constants import QUERY_PATTERN, WAIT_POLL_INTERVAL
from core.errors import LookupDecodeError
from core.models.network import (
    DataReceived,
    LookupCallback,
    LookupOutcome,
    PendingRequest,
    ResponseReceived,
    TransferCompleted,
    TransferHandle,
    TransportEvent,
)
from core.types import CancelCallback

logger = logging.getLogger(__name__)

records_adapter = TypeAdapter(list[dict[str, Any]])


class Transport(Protocol):
    events: "queue.Queue[TransportEvent]"

    def start(self, url: httpx.URL) -> TransferHandle: ...

    def close(self) -> None: ...


class LookupClient:
    """Single-flight client: one outstanding lookup, one callback per lookup."""

    def __init__(self, settings: Settings, transport: Transport | None = None) -> None:
        self.endpoint = settings.lookup_endpoint
        self.transport = transport or HTTPTransport(settings)

        self._pending: PendingRequest | None = None

    @property
    def pending_request(self) -> PendingRequest | None:
        return self._pending

    @property
    def pending_key(self) -> str | None:
        return self._pending.key if self._pending else None

    def build_url(self, key: str) -> httpx.URL | None:
        """
        Build the lookup address, with the key as the whole query string.

        Args:
            key: Normalized, percent-encoded search key

        Returns:
            The address or None if the key cannot form one
        """
        if not QUERY_PATTERN.fullmatch(key):
            return None
        try:
            return httpx.URL(f"{self.endpoint}?{key}")
        except httpx.InvalidURL:
            return None

    def resolve(self, key: str, on_complete: LookupCallback | None = None) -> None:
        """
        Start a lookup for key without blocking.

        A lookup for the key already in flight is not repeated; on_complete gets an
        "ignored" outcome right away. A lookup for another key is abandoned and its
        callback never fires.
        """
        if self._pending is not None:
            if key == self._pending.key:
                logger.debug(f"Lookup for {key!r} already in progress, ignoring")
                self._notify(on_complete, LookupOutcome(status="ignored"))
                return

            logger.debug(f"Superseding lookup for {self._pending.key!r} with {key!r}")
            self._abandon()

        url = self.build_url(key)
        if url is None:
            logger.warning(f"Cannot build a lookup address from {key!r}")
            self._notify(on_complete, LookupOutcome(status="empty"))
            return

        handle = self.transport.start(url)
        self._pending = PendingRequest(key=key, handle=handle, callback=on_complete)

    def cancel(self, on_complete: CancelCallback | None = None) -> None:
        """Cancel the outstanding lookup, if any, without firing its callback."""
        if self._pending is not None:
            logger.debug(f"Cancelling lookup for {self._pending.key!r}")
            self._abandon()

        if on_complete is not None:
            on_complete()

    def process_events(self, timeout: float | None = None) -> int:
        """
        Apply queued transport events on the calling thread.

        Args:
            timeout: Seconds to wait for the first event; None only drains what is queued

        Returns:
            Number of events handled
        """
        handled = 0
        block = timeout is not None

        while True:
            try:
                event = self.transport.events.get(block=block, timeout=timeout)
            except queue.Empty:
                return handled

            block = False
            self._dispatch(event)
            handled += 1

    def wait(self, timeout: float | None = None) -> bool:
        """
        Process events until no lookup is outstanding.

        Returns:
            True if the slot is empty, False if the timeout elapsed first
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        while self._pending is not None:
            if deadline is not None and time.monotonic() >= deadline:
                break
            self.process_events(timeout=WAIT_POLL_INTERVAL)

        return self._pending is None

    def close(self) -> None:
        self.cancel()
        self.transport.close()

    def _abandon(self) -> None:
        if self._pending is not None:
            self._pending.handle.cancel()
            self._pending = None

    def _dispatch(self, event: TransportEvent) -> None:
        request = self._pending

        # Events from a cancelled or superseded transfer can still be queued
        if request is None or event.handle is not request.handle:
            logger.debug(f"Dropping stale {type(event).__name__} for {event.handle.url}")
            return

        if isinstance(event, ResponseReceived):
            self._on_response(request, event)
        elif isinstance(event, DataReceived):
            self._on_data(request, event)
        elif isinstance(event, TransferCompleted):
            self._on_complete(request, event)

    def _on_response(self, request: PendingRequest, event: ResponseReceived) -> None:
        request.status_code = event.status_code
        if event.status_code >= 400:
            logger.warning(f"Lookup for {request.key!r} answered with HTTP {event.status_code}")
        else:
            logger.debug(f"Lookup for {request.key!r} answered with HTTP {event.status_code}")

    def _on_data(self, request: PendingRequest, event: DataReceived) -> None:
        request.payload.extend(event.data)

        try:
            request.result = records_adapter.validate_json(bytes(request.payload))
        except ValidationError as e:
            # Also hit while the body is only partially received
            logger.debug(f"Body for {request.key!r} does not decode yet: {e.error_count()} error(s)")
            request.decode_error = LookupDecodeError(str(e))
            request.is_result_valid = False
            return

        request.decode_error = None
        request.is_result_valid = True

    def _on_complete(self, request: PendingRequest, event: TransferCompleted) -> None:
        result = request.result if request.is_result_valid else None

        outcome = LookupOutcome(
            status="failed" if event.error is not None else "succeeded",
            records=result,
            error=event.error,
            decode_error=request.decode_error,
            status_code=request.status_code,
        )

        if request.decode_error is not None:
            logger.warning(f"Lookup for {request.key!r} returned an unreadable body")

        # Cleared first so the callback may start another lookup
        self._pending = None
        self._notify(request.callback, outcome)

    def _notify(self, callback: LookupCallback | None, outcome: LookupOutcome) -> None:
        if callback is None:
            return
        try:
            callback(outcome)
        except Exception:
            logger.exception(f"Error in lookup callback ({outcome.status})")
