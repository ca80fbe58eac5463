"""Connection manager for a single chat channel.

ChatChannel owns one transport at a time and turns its callbacks into the
channel's visible state: the connection status, the ordered message log and
the automatic reconnection after an abnormal closure.

Every transport is tagged with a generation number. Callbacks carrying a
generation other than the current one come from a binding that has already
been replaced or dropped, and are ignored.
"""

from typing import Optional

from wschannel.config import ChannelConfig
from wschannel.domain.errors import NotConnectedError
from wschannel.domain.events import (
    EventBus,
    MessageAppended,
    ReconnectScheduled,
    SendRejected,
    StatusChanged,
)
from wschannel.domain.protocols import (
    Transport,
    TransportFactory,
    TransportHandlers,
    TransportState,
)
from wschannel.domain.types import NORMAL_CLOSURE, ConnectionStatus, Message
from wschannel.infrastructure.transport import websocket_transport_factory
from wschannel.logger import get_logger

from .lifecycle import ConnectionLifecycle
from .message_log import MessageLog
from .reconnect import FixedDelayStrategy, ReconnectionStrategy, ReconnectTimer

logger = get_logger("channel")

MANUAL_DISCONNECT_REASON = "Manual disconnect"


class ChatChannel:
    """
    Client side of a real-time chat connection.

    The channel coordinates:
    - Connection status (disconnected, connecting, connected, error)
    - The append-only message log
    - One pending reconnect at most, scheduled after each abnormal closure
    - Push notifications on its EventBus for every status or log change

    All methods must be called from the event loop thread that runs the
    transports.

    Example:
        ```python
        async with ChatChannel(ChannelConfig(url="ws://localhost:8080/ws")) as channel:
            channel.events.subscribe(MessageAppended, on_message)
            channel.send_message("hi")
        ```
    """

    def __init__(
        self,
        config: Optional[ChannelConfig] = None,
        *,
        transport_factory: Optional[TransportFactory] = None,
        reconnection_strategy: Optional[ReconnectionStrategy] = None,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the channel. Nothing connects until connect() is called.

        Args:
            config: Channel configuration (defaults to ChannelConfig())
            transport_factory: Builds a transport from (handlers, generation);
                defaults to WebSocket transports configured from config
            reconnection_strategy: Retry policy (defaults to a fixed delay of
                config.reconnect_delay seconds)
            event_bus: Bus receiving status and message events (created if not provided)
        """
        self._config = config or ChannelConfig()
        self._transport_factory = transport_factory or websocket_transport_factory(
            open_timeout=self._config.open_timeout,
            ping_interval=self._config.ping_interval,
        )
        self._strategy = reconnection_strategy or FixedDelayStrategy(self._config.reconnect_delay)
        self._events = event_bus or EventBus()
        self._lifecycle = ConnectionLifecycle(on_status_change=self._publish_status)
        self._log = MessageLog()
        self._timer = ReconnectTimer()

        self._binding: Optional[Transport] = None
        self._last_binding: Optional[Transport] = None
        self._generation = 0
        self._reconnect_attempts = 0
        self._torn_down = False

    @property
    def config(self) -> ChannelConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def status(self) -> ConnectionStatus:
        """Get current connection status."""
        return self._lifecycle.status

    @property
    def error_message(self) -> Optional[str]:
        """Description of the last failure while status is ERROR."""
        return self._lifecycle.error_message

    @property
    def is_connected(self) -> bool:
        return self._lifecycle.is_connected and self._binding is not None and self._binding.is_open

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the message log in send/arrival order."""
        return self._log.snapshot()

    @property
    def events(self) -> EventBus:
        """Bus publishing StatusChanged, MessageAppended, SendRejected and ReconnectScheduled."""
        return self._events

    @property
    def reconnect_pending(self) -> bool:
        return self._timer.is_pending

    @property
    def generation(self) -> int:
        """Generation tag of the most recently created transport."""
        return self._generation

    def connect(self) -> None:
        """
        Open a new connection unless one is already open or opening.

        Any pending reconnect is cancelled. A transport that cannot be
        constructed moves the channel to ERROR instead of raising.
        """
        if self._torn_down:
            logger.warning("connect() called on a closed channel; ignoring")
            return

        if self._binding is not None and self._binding.state in (
            TransportState.CONNECTING,
            TransportState.OPEN,
        ):
            logger.debug(f"Connection already {self._binding.state.value}; ignoring connect()")
            return

        self._timer.cancel()
        self._lifecycle.set_status(ConnectionStatus.CONNECTING)

        self._generation += 1
        generation = self._generation
        logger.info(f"Connecting to {self._config.url} (generation {generation})")

        try:
            binding = self._transport_factory(self._handlers_for(generation), generation)
            self._binding = binding
            self._last_binding = binding
            binding.open(self._config.url)
        except Exception as e:
            logger.error(f"Failed to create WebSocket: {e}")
            self._binding = None
            self._lifecycle.set_status(ConnectionStatus.ERROR, str(e))
            if self._config.retry_on_construction_failure:
                self._schedule_reconnect(close_code=None)

    def disconnect(self) -> None:
        """
        Close the connection on purpose.

        Cancels any pending reconnect, closes the current transport with the
        normal-closure code and forgets it, so no reconnect follows.
        Calling it while already disconnected changes nothing.
        """
        self._timer.cancel()

        binding, self._binding = self._binding, None
        if binding is not None:
            logger.info(f"Disconnecting (generation {binding.generation})")
            binding.close(NORMAL_CLOSURE, MANUAL_DISCONNECT_REASON)

        self._lifecycle.set_status(ConnectionStatus.DISCONNECTED)

    def send_message(self, content: str) -> bool:
        """
        Send content and record it in the log as our own message.

        Args:
            content: Text to send; must not be blank

        Returns:
            True if the message was transmitted and appended, False if it was
            rejected (blank content, or the channel is not connected)
        """
        if not content or not content.strip():
            logger.warning("Refusing to send an empty message")
            self._events.publish(SendRejected(content=content, reason="empty"))
            return False

        binding = self._binding
        if not self._lifecycle.is_connected or binding is None or not binding.is_open:
            logger.warning("WebSocket is not connected")
            self._events.publish(SendRejected(content=content, reason="not_connected"))
            return False

        try:
            binding.send(content)
        except NotConnectedError as e:
            logger.warning(f"WebSocket is not connected: {e}")
            self._events.publish(SendRejected(content=content, reason="not_connected"))
            return False

        self._append(Message.outgoing(content))
        return True

    async def aclose(self) -> None:
        """Tear the channel down: disconnect and wait for the last transport to finish."""
        self.disconnect()
        self._torn_down = True

        binding, self._last_binding = self._last_binding, None
        if binding is not None:
            await binding.wait_closed()
        logger.debug("Channel closed")

    async def __aenter__(self) -> "ChatChannel":
        self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _handlers_for(self, generation: int) -> TransportHandlers:
        return TransportHandlers(
            on_open=lambda: self._on_open(generation),
            on_message=lambda payload: self._on_message(generation, payload),
            on_close=lambda code, reason: self._on_close(generation, code, reason),
            on_error=lambda info: self._on_error(generation, info),
        )

    def _is_current(self, generation: int, event: str) -> bool:
        if self._binding is not None and generation == self._generation:
            return True
        logger.debug(f"Ignoring {event} from stale transport (generation {generation})")
        return False

    def _on_open(self, generation: int) -> None:
        if not self._is_current(generation, "open"):
            return
        logger.info("WebSocket connected")
        self._reconnect_attempts = 0
        self._lifecycle.set_status(ConnectionStatus.CONNECTED)

    def _on_message(self, generation: int, payload: str) -> None:
        if not self._is_current(generation, "message"):
            return
        logger.debug(f"Received message: {payload[:200]}")
        self._append(Message.incoming(payload))

    def _on_error(self, generation: int, info: str) -> None:
        if not self._is_current(generation, "error"):
            return
        logger.error(f"WebSocket error: {info}")
        self._lifecycle.set_status(ConnectionStatus.ERROR, info)

    def _on_close(self, generation: int, code: int, reason: str) -> None:
        if not self._is_current(generation, "close"):
            return
        logger.info(f"WebSocket closed: {code} {reason!r}")
        self._binding = None
        self._lifecycle.set_status(ConnectionStatus.DISCONNECTED)

        if code != NORMAL_CLOSURE:
            logger.warning(f"Abnormal closure (code {code})")
            self._schedule_reconnect(close_code=code)

    def _schedule_reconnect(self, close_code: Optional[int]) -> None:
        self._reconnect_attempts += 1
        if not self._strategy.should_retry(self._reconnect_attempts):
            logger.info(f"Not reconnecting after {self._reconnect_attempts - 1} attempt(s)")
            return

        delay = self._strategy.calculate_delay(self._reconnect_attempts)
        try:
            self._timer.schedule(delay, self._reconnect)
        except RuntimeError as e:
            logger.error(f"Cannot schedule reconnect: {e}")
            return

        logger.info(f"Reconnecting in {delay:.1f}s (attempt {self._reconnect_attempts})")
        self._events.publish(ReconnectScheduled(delay=delay, close_code=close_code))

    def _reconnect(self) -> None:
        logger.info("Reconnect timer fired")
        self.connect()

    def _append(self, message: Message) -> None:
        self._log.append(message)
        self._events.publish(MessageAppended(message=message))

    def _publish_status(
        self,
        status: ConnectionStatus,
        previous_status: ConnectionStatus,
        error_message: Optional[str],
    ) -> None:
        self._events.publish(
            StatusChanged(
                status=status,
                previous_status=previous_status,
                error_message=error_message,
            )
        )
