from __future__ import annotations

import logging
from typing import Union

from ..components import Component
from ..events import EventBus
from ..exceptions import ConfigurationError
from ..gates import Gate
from ..world import Door, Task

logger = logging.getLogger(__name__)


class LockEngineRoom(Component):
    """Locks the player in the engine room once a task completes.

    Keeps the player from wandering off toward the other door during the
    generator check. Both doors stay locked for the rest of the session; the
    task completing again changes nothing.
    """

    name = "lock_engine_room"

    def __init__(self, bus: EventBus, task: Union[Task, str], door1: Door, door2: Door) -> None:
        super().__init__(bus)
        if task is None:
            raise ConfigurationError("LockEngineRoom requires the task it waits for")
        if door1 is None or door2 is None:
            raise ConfigurationError("LockEngineRoom requires both doors")
        self.channel = task if isinstance(task, str) else task.channel
        self.door1 = door1
        self.door2 = door2
        self.gate: Gate = self.bind_gate(self.channel, [door1.lock, door2.lock], name="lock_engine_room")

    @property
    def locked(self) -> bool:
        return self.door1.is_locked and self.door2.is_locked
