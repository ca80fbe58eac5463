"""Reconnection policy and the cancelable timer that carries it out."""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from wschannel.logger import get_logger

logger = get_logger("reconnect")


class ReconnectionStrategy(ABC):
    """Abstract base class for reconnection strategies."""

    @abstractmethod
    def should_retry(self, attempt: int) -> bool:
        """Check if reconnection should be attempted."""
        pass

    @abstractmethod
    def calculate_delay(self, attempt: int) -> float:
        """Seconds to wait before the given attempt (1-indexed)."""
        pass


class FixedDelayStrategy(ReconnectionStrategy):
    """Retry once per abnormal closure after a constant delay.

    No backoff, no jitter and no attempt ceiling: if the retry also closes
    abnormally the cycle repeats indefinitely.
    """

    def __init__(self, delay: float = 3.0):
        """
        Initialize fixed delay strategy.

        Args:
            delay: Seconds to wait before each reconnection attempt
        """
        if delay <= 0:
            raise ValueError(f"Reconnect delay must be positive, got {delay}")
        self._delay = delay

    @property
    def delay(self) -> float:
        return self._delay

    def should_retry(self, attempt: int) -> bool:
        return True

    def calculate_delay(self, attempt: int) -> float:
        return self._delay


class ReconnectTimer:
    """At most one pending deferred callback, cancelable at any time.

    Scheduling while a callback is pending replaces it, so two reconnection
    attempts can never race.
    """

    def __init__(self):
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def is_pending(self) -> bool:
        """True while a scheduled callback has neither fired nor been cancelled."""
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """
        Run callback after delay seconds on the running event loop.

        Raises:
            RuntimeError: If no event loop is running
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, callback)
        logger.debug(f"Reconnect scheduled in {delay:.1f}s")

    def cancel(self) -> bool:
        """Cancel the pending callback. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        logger.debug("Pending reconnect cancelled")
        return True

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        try:
            callback()
        except Exception as e:
            logger.opt(exception=e).error(f"Error in reconnect callback: {e}")
