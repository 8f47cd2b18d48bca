"""
HTTP transport for lookups

Each transfer runs on its own thread so the caller never blocks; progress is
reported as events on a queue that the owner of the transport drains.
"""

import logging
import queue
import threading

import httpx

from core.config import Settings
from core.constants import CLOSE_JOIN_TIMEOUT, REQUEST_HEADERS
from core.errors import TransferCancelled
from core.models.network import (
    DataReceived,
    ResponseReceived,
    TransferCompleted,
    TransferHandle,
    TransportEvent,
)

logger = logging.getLogger(__name__)


class HTTPTransport:
    """Streams GET requests on worker threads and posts their events in order."""

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None) -> None:
        """
        Initialize a new instance of the HTTPTransport class.

        Args:
            settings: Application settings (user agent and timeout)
            transport: Optional httpx transport, used to swap out the network
        """
        self.client = httpx.Client(
            headers={"User-Agent": settings.lookup_user_agent, **REQUEST_HEADERS},
            timeout=settings.lookup_timeout,
            transport=transport,
        )
        self.events: queue.Queue[TransportEvent] = queue.Queue()
        self.threads: list[threading.Thread] = []

    def start(self, url: httpx.URL) -> TransferHandle:
        handle = TransferHandle(url)

        thread = threading.Thread(target=self._transfer, args=(handle,))
        thread.daemon = True
        thread.start()

        self.threads = [t for t in self.threads if t.is_alive()]
        self.threads.append(thread)

        return handle

    def _transfer(self, handle: TransferHandle) -> None:
        """
        Run one transfer on a separate thread

        Args:
            handle: Handle of the transfer, checked for cancellation between chunks
        """
        error: Exception | None = None

        try:
            with self.client.stream("GET", handle.url) as response:
                self.events.put(ResponseReceived(handle, response.status_code))
                for chunk in response.iter_bytes():
                    if handle.is_cancelled:
                        break
                    self.events.put(DataReceived(handle, chunk))
        except httpx.HTTPError as e:
            error = e
            if not handle.is_cancelled:
                logger.error(f"GET {handle.url} failed: {e}")
        except Exception as e:
            error = e
            logger.error(f"Unexpected error for GET {handle.url}: {e!r}")

        if handle.is_cancelled:
            error = TransferCancelled(str(handle.url))

        self.events.put(TransferCompleted(handle, error))

    def close(self) -> None:
        """Give running transfers a moment to finish, then close the HTTP client."""
        for thread in self.threads:
            thread.join(timeout=CLOSE_JOIN_TIMEOUT)
        self.threads = []
        self.client.close()
