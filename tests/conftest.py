"""Shared fixtures and fakes for channel tests."""

from typing import Any, Callable, Optional

import pytest

from wschannel.application.channel import ChatChannel
from wschannel.config import ChannelConfig
from wschannel.domain.errors import NotConnectedError
from wschannel.domain.events import (
    Event,
    MessageAppended,
    ReconnectScheduled,
    SendRejected,
    StatusChanged,
)
from wschannel.domain.protocols import TransportHandlers, TransportState


class FakeTransport:
    """Scripted transport: tests drive its callbacks explicitly."""

    def __init__(self, handlers: TransportHandlers, generation: int):
        self.handlers = handlers
        self.generation = generation
        self.url: Optional[str] = None
        self.sent: list[str] = []
        self.close_calls: list[tuple[int, str]] = []
        self.fail_with: Optional[Exception] = None
        self._state = TransportState.CLOSED

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == TransportState.OPEN

    def open(self, url: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.url = url
        self._state = TransportState.CONNECTING

    def send(self, payload: str) -> None:
        if not self.is_open:
            raise NotConnectedError("fake transport is not open")
        self.sent.append(payload)

    def close(self, code: int, reason: str = "") -> None:
        self.close_calls.append((code, reason))
        self._state = TransportState.CLOSING

    async def wait_closed(self) -> None:
        return None

    # Drivers

    def simulate_open(self) -> None:
        self._state = TransportState.OPEN
        self.handlers.on_open()

    def simulate_message(self, payload: str) -> None:
        self.handlers.on_message(payload)

    def simulate_error(self, info: str = "boom") -> None:
        self.handlers.on_error(info)

    def simulate_close(self, code: int = 1006, reason: str = "") -> None:
        self._state = TransportState.CLOSED
        self.handlers.on_close(code, reason)


class FakeTransportFactory:
    """TransportFactory recording every transport it builds."""

    def __init__(self):
        self.created: list[FakeTransport] = []
        self.fail_with: Optional[Exception] = None

    def __call__(self, handlers: TransportHandlers, generation: int) -> FakeTransport:
        transport = FakeTransport(handlers, generation)
        transport.fail_with = self.fail_with
        self.created.append(transport)
        return transport

    @property
    def latest(self) -> FakeTransport:
        return self.created[-1]


class EventRecorder:
    """Collects every event a channel publishes, in order."""

    def __init__(self):
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]

    @property
    def statuses(self) -> list:
        return [e.status for e in self.of_type(StatusChanged)]


@pytest.fixture
def transport_factory() -> FakeTransportFactory:
    return FakeTransportFactory()


@pytest.fixture
def make_channel(transport_factory) -> Callable[..., ChatChannel]:
    def _make(**config_values: Any) -> ChatChannel:
        config_values.setdefault("url", "ws://chat.test/ws")
        config_values.setdefault("reconnect_delay", 0.05)
        return ChatChannel(
            ChannelConfig(**config_values),
            transport_factory=transport_factory,
        )

    return _make


@pytest.fixture
def channel(make_channel) -> ChatChannel:
    return make_channel()


@pytest.fixture
def recorder(channel) -> EventRecorder:
    rec = EventRecorder()
    for event_type in (StatusChanged, MessageAppended, SendRejected, ReconnectScheduled):
        channel.events.subscribe(event_type, rec)
    return rec
