"""Transport protocol: one physical duplex connection attempt.

A transport owns no policy. It reports what happens on the wire through the
callbacks in TransportHandlers and leaves every decision (status, retries,
logging the conversation) to its owner.

Callback ordering for a single transport instance:
    on_open, then zero or more on_message, then exactly one on_close.
    on_error may precede on_close at any point.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Protocol, runtime_checkable


class TransportState(Enum):
    """Ready state of a transport, mirroring the WebSocket readyState values."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(frozen=True)
class TransportHandlers:
    """Callbacks a transport invokes on the event loop thread."""

    on_open: Callable[[], None]
    on_message: Callable[[str], None]
    on_close: Callable[[int, str], None]
    on_error: Callable[[str], None]


@runtime_checkable
class Transport(Protocol):
    """Protocol for a single duplex connection."""

    generation: int

    @property
    def state(self) -> TransportState:
        """Current ready state."""
        ...

    @property
    def is_open(self) -> bool:
        """True when the handshake completed and the connection is not closing."""
        ...

    def open(self, url: str) -> None:
        """Start connecting to url. Raises TransportConstructionError on bad input."""
        ...

    def send(self, payload: str) -> None:
        """Queue payload for transmission. Raises NotConnectedError if not open."""
        ...

    def close(self, code: int, reason: str = "") -> None:
        """Initiate graceful termination with the given close code."""
        ...

    def wait_closed(self) -> Awaitable[None]:
        """Resolve once the transport has fully shut down."""
        ...


TransportFactory = Callable[[TransportHandlers, int], Transport]
"""Builds a transport from its handlers and generation tag."""
