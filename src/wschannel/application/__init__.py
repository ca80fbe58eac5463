"""Application layer: the connection manager and its collaborators."""

from .channel import ChatChannel
from .lifecycle import ConnectionLifecycle
from .message_log import MessageLog
from .reconnect import FixedDelayStrategy, ReconnectionStrategy, ReconnectTimer

__all__ = [
    "ChatChannel",
    "ConnectionLifecycle",
    "MessageLog",
    "FixedDelayStrategy",
    "ReconnectionStrategy",
    "ReconnectTimer",
]
