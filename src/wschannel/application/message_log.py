"""Append-only, ordered message log."""

from wschannel.domain.types import Message


class MessageLog:
    """Ordered record of every message sent or received during a session.

    Entries are only ever appended; order equals send/arrival order.
    """

    def __init__(self):
        self._entries: list[Message] = []

    def append(self, message: Message) -> None:
        self._entries.append(message)

    def snapshot(self) -> tuple[Message, ...]:
        """Immutable copy of the log in insertion order."""
        return tuple(self._entries)
