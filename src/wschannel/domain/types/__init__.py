"""Domain types."""

from .connection import NORMAL_CLOSURE, ABNORMAL_CLOSURE, ConnectionStatus
from .message import Message, Sender

__all__ = [
    "NORMAL_CLOSURE",
    "ABNORMAL_CLOSURE",
    "ConnectionStatus",
    "Message",
    "Sender",
]
