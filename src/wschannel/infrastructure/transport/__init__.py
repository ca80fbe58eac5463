"""Transport bindings for chat channels."""

from .websocket import WebSocketTransport, websocket_transport_factory

__all__ = ["WebSocketTransport", "websocket_transport_factory"]
