"""wschannel - client-side real-time chat channel over WebSocket."""

from wschannel.application.channel import ChatChannel
from wschannel.config import ChannelConfig, load_channel_config
from wschannel.domain.types import ConnectionStatus, Message, Sender

__all__ = [
    "ChatChannel",
    "ChannelConfig",
    "load_channel_config",
    "ConnectionStatus",
    "Message",
    "Sender",
]

__version__ = "0.1.0"
