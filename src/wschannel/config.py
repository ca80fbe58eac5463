"""Channel configuration.

Values come from keyword overrides first, then from the environment (a local
``.env`` file is honoured through python-dotenv), then from the defaults.
"""

import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from wschannel.logger import get_logger

logger = get_logger("config")

DEFAULT_URL = "ws://localhost:8080/ws"
DEFAULT_RECONNECT_DELAY = 3.0


class ChannelConfig(BaseModel):
    """Configuration for a single chat channel."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(DEFAULT_URL, description="WebSocket endpoint the channel connects to")
    reconnect_delay: float = Field(
        DEFAULT_RECONNECT_DELAY,
        gt=0,
        description="Seconds to wait before reconnecting after an abnormal closure",
    )
    retry_on_construction_failure: bool = Field(
        False,
        description="Schedule a reconnect when the connection object cannot be created",
    )
    open_timeout: float = Field(10.0, gt=0, description="Handshake timeout in seconds")
    ping_interval: Optional[float] = Field(
        20.0, description="Keep-alive ping interval in seconds, None disables pings"
    )


_ENV_KEYS = {
    "url": "WSCHANNEL_URL",
    "reconnect_delay": "WSCHANNEL_RECONNECT_DELAY",
    "retry_on_construction_failure": "WSCHANNEL_RETRY_ON_CONSTRUCTION_FAILURE",
    "open_timeout": "WSCHANNEL_OPEN_TIMEOUT",
    "ping_interval": "WSCHANNEL_PING_INTERVAL",
}


def load_channel_config(**overrides: Any) -> ChannelConfig:
    """
    Build a ChannelConfig from the environment.

    Args:
        **overrides: Field values that take precedence over the environment.
            Overrides set to None are ignored.

    Returns:
        ChannelConfig: Validated configuration

    Raises:
        ValidationError: If a value cannot be coerced to its field type
    """
    load_dotenv()

    values: dict[str, Any] = {}
    for field_name, env_key in _ENV_KEYS.items():
        raw = os.getenv(env_key)
        if raw is None or raw == "":
            continue
        if field_name == "ping_interval" and raw.lower() == "none":
            values[field_name] = None
        else:
            values[field_name] = raw

    values.update({key: value for key, value in overrides.items() if value is not None})

    config = ChannelConfig(**values)
    logger.debug(f"Loaded channel config: {config.model_dump()}")
    return config
