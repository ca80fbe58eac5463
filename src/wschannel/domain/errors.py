"""Exceptions raised by the channel and its transports."""


class ChannelError(Exception):
    """Base class for all wschannel errors."""


class TransportConstructionError(ChannelError):
    """The underlying connection object could not be created.

    Raised for malformed endpoint addresses or when no event loop is
    available to run the connection on.
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class NotConnectedError(ChannelError):
    """A send was attempted on a connection that is not open."""
