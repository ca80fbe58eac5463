"""Event system for decoupled channel/consumer communication.

Example:
    ```python
    from wschannel.domain.events import EventBus, StatusChanged

    event_bus = EventBus()

    def handle_status(event: StatusChanged):
        print(f"Channel is {event.status.value}")

    event_bus.subscribe(StatusChanged, handle_status)
    ```
"""

from .bus import EventBus
from .types import (
    Event,
    MessageAppended,
    ReconnectScheduled,
    SendRejected,
    StatusChanged,
)

__all__ = [
    "EventBus",
    "Event",
    "StatusChanged",
    "MessageAppended",
    "SendRejected",
    "ReconnectScheduled",
]
