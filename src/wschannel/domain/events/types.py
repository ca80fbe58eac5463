"""Event types published by a chat channel.

Consumers (a UI, a console client, tests) subscribe to these on the
channel's EventBus to be notified of every status or log mutation.
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from wschannel.domain.types import ConnectionStatus, Message


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class StatusChanged(Event):
    """Published whenever the channel's connection status changes.

    Attributes:
        status: New connection status
        previous_status: Status held before the change
        error_message: Description of the failure when status is ERROR
    """

    status: ConnectionStatus
    """New connection status."""
    previous_status: ConnectionStatus
    """Previous connection status."""
    error_message: Optional[str] = None
    """Failure description, only set for ERROR."""


@dataclass
class MessageAppended(Event):
    """Published after a message is appended to the channel's log."""

    message: Message
    """The appended message."""


@dataclass
class SendRejected(Event):
    """Published when send_message refuses a message.

    Attributes:
        content: The rejected content
        reason: "empty" or "not_connected"
    """

    content: str
    reason: str


@dataclass
class ReconnectScheduled(Event):
    """Published when a reconnect attempt is scheduled after an abnormal closure."""

    delay: float
    """Seconds until the attempt."""
    close_code: Optional[int] = None
    """Close code that triggered the reconnect, None for a construction failure."""
