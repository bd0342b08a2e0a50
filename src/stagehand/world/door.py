from __future__ import annotations

import logging
from typing import Optional

from ..events import EventBus, EventType

logger = logging.getLogger(__name__)


class Door:
    """A door that opens and closes on interaction until it gets locked.

    Locking is one-way and idempotent: locking an already locked door changes
    nothing and publishes nothing, and the door never unlocks itself. Locking
    also closes the door.

    Engine integration:
    - Input systems call `interact(agent)` when the player uses the door.
    - Scripted events call `lock()`; observers can follow `DOOR_*` channels.
    """

    def __init__(self, name: str, bus: Optional[EventBus] = None, is_open: bool = False) -> None:
        self.name = name
        self.bus = bus
        self.is_open = is_open
        self._locked = False
        self.lock_count = 0

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        state = "locked" if self._locked else ("open" if self.is_open else "closed")
        return f"<Door {self.name!r} state={state}>"

    @property
    def is_locked(self) -> bool:
        return self._locked

    def is_passable(self) -> bool:
        """Return True if the door is currently open."""
        return self.is_open and not self._locked

    def lock(self) -> None:
        if self._locked:
            logger.debug("Door %s already locked", self.name)
            return
        self._locked = True
        self.is_open = False
        self.lock_count += 1
        logger.info("Door %s locked", self.name)
        self._publish(EventType.DOOR_LOCKED)

    def interact(self, agent: object) -> None:
        if self._locked:
            logger.info("Door %s is locked; %r cannot use it", self.name, agent)
            self._publish(EventType.DOOR_BLOCKED)
            return
        self.is_open = not self.is_open
        logger.debug("Door %s %s by %r", self.name, "opened" if self.is_open else "closed", agent)
        self._publish(EventType.DOOR_OPENED if self.is_open else EventType.DOOR_CLOSED)

    def _publish(self, channel: str) -> None:
        if self.bus is not None:
            self.bus.publish(channel, self)
