"""Connection-related domain types."""

from enum import Enum

__all__ = ["ConnectionStatus", "NORMAL_CLOSURE", "ABNORMAL_CLOSURE"]

NORMAL_CLOSURE = 1000
"""Close code sent on a manual disconnect. Any other code is abnormal."""

ABNORMAL_CLOSURE = 1006
"""Close code reported when the connection dropped without a close frame."""


class ConnectionStatus(Enum):
    """Status of a chat channel connection.

    Exactly one value holds at any instant. It is the only externally
    observable summary of channel health.
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"
