"""WebSocket transport binding built on the websockets library.

One WebSocketTransport represents exactly one connection attempt. It is
opened once, reports its lifecycle through TransportHandlers and is then
discarded; reconnecting means building a new instance.
"""

import asyncio
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import websockets
from websockets.exceptions import ConnectionClosed

from wschannel.domain.errors import NotConnectedError, TransportConstructionError
from wschannel.domain.protocols import TransportHandlers, TransportState
from wschannel.domain.types import ABNORMAL_CLOSURE
from wschannel.logger import get_logger

logger = get_logger("transport.websocket")


def _close_details(exc: ConnectionClosed) -> tuple[int, str]:
    """Extract the close code and reason from a ConnectionClosed exception.

    The frame received from the peer wins; if none arrived, the frame we sent
    is used. With neither, the connection dropped abnormally.
    """
    frame = exc.rcvd if exc.rcvd is not None else exc.sent
    if frame is None:
        return ABNORMAL_CLOSURE, ""
    return frame.code, frame.reason


class WebSocketTransport:
    """A single WebSocket connection driven by a background task."""

    def __init__(
        self,
        handlers: TransportHandlers,
        generation: int = 0,
        *,
        open_timeout: float = 10.0,
        ping_interval: Optional[float] = 20.0,
    ):
        """
        Initialize the transport. No I/O happens until open() is called.

        Args:
            handlers: Callbacks invoked for open/message/close/error events
            generation: Tag identifying this attempt to its owner
            open_timeout: Handshake timeout in seconds
            ping_interval: Keep-alive ping interval in seconds (None disables)
        """
        self.generation = generation
        self._handlers = handlers
        self._open_timeout = open_timeout
        self._ping_interval = ping_interval

        self._state = TransportState.CLOSED
        self._url: Optional[str] = None
        self._websocket: Optional[Any] = None
        self._task: Optional[asyncio.Task] = None
        self._connect_task: Optional[asyncio.Future] = None
        self._close_task: Optional[asyncio.Task] = None
        self._outgoing: asyncio.Queue[str] = asyncio.Queue()
        self._close_requested: Optional[tuple[int, str]] = None
        self._closed = asyncio.Event()

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == TransportState.OPEN

    @property
    def url(self) -> Optional[str]:
        return self._url

    def open(self, url: str) -> None:
        """
        Start connecting to url in the background.

        Raises:
            TransportConstructionError: If url is not a ws:// or wss:// address,
                if the transport was already opened, or if no event loop is running
        """
        if self._task is not None:
            raise TransportConstructionError("Transport already opened", url=url)

        parsed = urlparse(url)
        if parsed.scheme not in ("ws", "wss"):
            raise TransportConstructionError(
                f"Invalid WebSocket URL scheme {parsed.scheme!r}; use ws:// or wss://",
                url=url,
            )
        if not parsed.hostname:
            raise TransportConstructionError(f"WebSocket URL has no host: {url}", url=url)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise TransportConstructionError(f"No running event loop: {e}", url=url) from e

        self._url = url
        self._state = TransportState.CONNECTING
        self._task = loop.create_task(self._run(url))
        logger.debug(f"[gen {self.generation}] Opening {url}")

    def send(self, payload: str) -> None:
        """
        Queue payload for transmission. Payloads go out in call order.

        Raises:
            NotConnectedError: If the connection is not open
        """
        if not self.is_open:
            raise NotConnectedError(f"Cannot send: transport is {self._state.value}")
        self._outgoing.put_nowait(payload)

    def close(self, code: int, reason: str = "") -> None:
        """Initiate graceful termination. Closing twice is a no-op."""
        if self._state in (TransportState.CLOSING, TransportState.CLOSED):
            return

        self._close_requested = (code, reason)
        self._state = TransportState.CLOSING
        logger.debug(f"[gen {self.generation}] Close requested ({code} {reason!r})")

        if self._websocket is None:
            # Still handshaking: abandon the attempt
            if self._connect_task is not None:
                self._connect_task.cancel()
            return

        self._close_task = asyncio.get_running_loop().create_task(
            self._close_connection(self._websocket, code, reason)
        )

    async def wait_closed(self) -> None:
        """Wait until the background task has finished and on_close was delivered."""
        if self._task is None or self._task.done():
            return
        await self._closed.wait()

    async def _run(self, url: str) -> None:
        """Connect, pump frames until the connection ends, then report the closure."""
        code, reason = ABNORMAL_CLOSURE, ""
        try:
            if self._close_requested is not None:
                # Closed before the attempt started
                code, reason = self._close_requested
                return

            self._connect_task = asyncio.ensure_future(
                websockets.connect(
                    url,
                    open_timeout=self._open_timeout,
                    ping_interval=self._ping_interval,
                )
            )
            try:
                self._websocket = await self._connect_task
            except asyncio.CancelledError:
                if self._close_requested is None:
                    raise
                code, reason = self._close_requested
                return
            except Exception as e:
                logger.warning(f"[gen {self.generation}] Connection to {url} failed: {e}")
                self._emit(self._handlers.on_error, f"Connection to {url} failed: {e}")
                reason = str(e)
                return

            if self._close_requested is not None:
                code, reason = self._close_requested
                await self._close_connection(self._websocket, code, reason)
                return

            self._state = TransportState.OPEN
            logger.info(f"[gen {self.generation}] WebSocket connected to {url}")
            self._emit(self._handlers.on_open)

            sender = asyncio.create_task(self._send_loop())
            try:
                code, reason = await self._receive_loop()
            finally:
                sender.cancel()
                try:
                    await sender
                except asyncio.CancelledError:
                    pass

        except asyncio.CancelledError:
            logger.debug(f"[gen {self.generation}] Transport task cancelled")
            raise
        except Exception as e:
            logger.error(f"[gen {self.generation}] Transport failure: {e}")
            self._emit(self._handlers.on_error, f"Transport failure: {e}")
            code, reason = ABNORMAL_CLOSURE, str(e)
            if self._websocket is not None:
                await self._close_connection(self._websocket, 1011, "internal error")
        finally:
            self._state = TransportState.CLOSED
            self._websocket = None
            logger.info(f"[gen {self.generation}] WebSocket closed: {code} {reason!r}")
            self._emit(self._handlers.on_close, code, reason)
            self._closed.set()

    async def _receive_loop(self) -> tuple[int, str]:
        """Deliver inbound frames until the connection closes; return the close details."""
        while True:
            try:
                data = await self._websocket.recv()
            except ConnectionClosed as exc:
                return _close_details(exc)

            if isinstance(data, bytes):
                data = data.decode("utf-8", errors="replace")
            logger.debug(f"[gen {self.generation}] Received: {data[:200]}")
            self._emit(self._handlers.on_message, data)

    async def _send_loop(self) -> None:
        while True:
            payload = await self._outgoing.get()
            try:
                await self._websocket.send(payload)
                logger.debug(f"[gen {self.generation}] Sent: {payload[:200]}")
            except ConnectionClosed:
                # The receive loop reports the closure
                return
            except Exception as e:
                logger.error(f"[gen {self.generation}] Send failed: {e}")
                self._emit(self._handlers.on_error, f"Send failed: {e}")

    async def _close_connection(self, websocket: Any, code: int, reason: str) -> None:
        try:
            await websocket.close(code, reason)
        except Exception as e:
            logger.debug(f"[gen {self.generation}] Error closing WebSocket: {e}")

    def _emit(self, callback: Callable[..., None], *args: Any) -> None:
        try:
            callback(*args)
        except Exception as e:
            logger.opt(exception=e).error(
                f"[gen {self.generation}] Error in transport callback: {e}"
            )


def websocket_transport_factory(
    *,
    open_timeout: float = 10.0,
    ping_interval: Optional[float] = 20.0,
) -> Callable[[TransportHandlers, int], WebSocketTransport]:
    """Return a TransportFactory building WebSocketTransport instances."""

    def _factory(handlers: TransportHandlers, generation: int) -> WebSocketTransport:
        return WebSocketTransport(
            handlers,
            generation,
            open_timeout=open_timeout,
            ping_interval=ping_interval,
        )

    return _factory
