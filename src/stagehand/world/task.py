from __future__ import annotations

import logging

from ..events import EventBus, EventType, task_completed_channel
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Task:
    """A scripted objective that announces its own completion.

    Completing publishes the task's own channel (no payload) and then the
    shared TASK_COMPLETED channel with the task name.
    """

    def __init__(self, bus: EventBus, name: str) -> None:
        if bus is None:
            raise ConfigurationError(f"Task '{name}' requires an EventBus")
        if not name:
            raise ConfigurationError("Task requires a name")
        self.bus = bus
        self.name = name
        self.completions = 0

    @property
    def channel(self) -> str:
        return task_completed_channel(self.name)

    @property
    def completed(self) -> bool:
        return self.completions > 0

    def complete(self) -> None:
        self.completions += 1
        logger.info("Task '%s' completed (%d)", self.name, self.completions)
        self.bus.publish(self.channel)
        self.bus.publish(EventType.TASK_COMPLETED, self.name)
