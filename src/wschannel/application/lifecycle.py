"""Connection status holder for a chat channel."""

from typing import Callable, Optional

from wschannel.domain.types import ConnectionStatus
from wschannel.logger import get_logger

logger = get_logger("connection.lifecycle")


class ConnectionLifecycle:
    """Holds the current ConnectionStatus and reports changes."""

    def __init__(
        self,
        on_status_change: Optional[
            Callable[[ConnectionStatus, ConnectionStatus, Optional[str]], None]
        ] = None,
    ):
        """
        Initialize connection lifecycle.

        Args:
            on_status_change: Callback invoked with (new, previous, error_message)
                when the status actually changes
        """
        self._status = ConnectionStatus.DISCONNECTED
        self._on_status_change = on_status_change
        self._error_message: Optional[str] = None

    @property
    def status(self) -> ConnectionStatus:
        """Get current connection status."""
        return self._status

    @property
    def is_connected(self) -> bool:
        return self._status == ConnectionStatus.CONNECTED

    @property
    def error_message(self) -> Optional[str]:
        """Get error message if in ERROR state."""
        return self._error_message

    def set_status(self, status: ConnectionStatus, error_message: Optional[str] = None) -> None:
        """
        Update connection status and notify callback.

        Setting the status already held is a no-op.

        Args:
            status: New connection status
            error_message: Optional error message for ERROR status
        """
        if self._status == status:
            return

        old_status = self._status
        self._status = status
        self._error_message = error_message if status == ConnectionStatus.ERROR else None

        logger.debug(f"Status changed: {old_status.value} -> {status.value}")

        if self._on_status_change:
            try:
                self._on_status_change(status, old_status, self._error_message)
            except Exception as e:
                logger.error(f"Error in status change callback: {e}")
