"""Domain protocols - structural interfaces implemented by infrastructure."""

from wschannel.domain.protocols.transport import (
    Transport,
    TransportFactory,
    TransportHandlers,
    TransportState,
)

__all__ = [
    "Transport",
    "TransportFactory",
    "TransportHandlers",
    "TransportState",
]
