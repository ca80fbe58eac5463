"""Chat message domain type."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

__all__ = ["Message", "Sender"]


class Sender(Enum):
    """Who produced a message.

    SELF is assigned locally at send time, REMOTE to every payload received
    from the transport regardless of its actual originator.
    """

    SELF = "self"
    REMOTE = "remote"


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Message:
    """One chat entry."""

    content: str
    """Text payload, verbatim."""
    sender: Sender
    """Origin of the message."""
    id: str = field(default_factory=_new_message_id)
    """Opaque unique identifier."""
    timestamp: datetime = field(default_factory=_now)
    """Creation time (send time or receipt time)."""

    @classmethod
    def outgoing(cls, content: str) -> "Message":
        """Create a message sent by this client."""
        return cls(content=content, sender=Sender.SELF)

    @classmethod
    def incoming(cls, content: str) -> "Message":
        """Create a message received from the transport."""
        return cls(content=content, sender=Sender.REMOTE)
