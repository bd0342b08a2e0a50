from .event_bus import NO_PAYLOAD, EventBus, Subscription
from .types import EventType, minerals_placed_channel, task_completed_channel

__all__ = [
    "EventBus",
    "EventType",
    "minerals_placed_channel",
    "NO_PAYLOAD",
    "Subscription",
    "task_completed_channel",
]
