from __future__ import annotations

import logging
from typing import List, Optional, TypeVar

from .components import Component
from .engine import GameConfig, GameEngine
from .events import EventBus
from .gates import GateController
from .sequencing import SequenceScheduler

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Component)


class Session:
    """Owns the bus, scheduler, gate controller and engine for one play session.

    Nothing here is process-global: components receive the session's bus and
    scheduler explicitly. `close()` disables every registered component, cancels
    every sequence, unbinds the session-level gates and clears the bus, so no
    handler survives into the next session.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.bus = EventBus()
        self.scheduler = SequenceScheduler(self.bus)
        self.gates = GateController(self.bus)
        self.engine = GameEngine(config, scheduler=self.scheduler)
        self._components: List[Component] = []
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def start(self) -> "Session":
        if self._open:
            return self
        self._open = True
        self.engine.start()
        for component in self._components:
            component.enable()
        logger.info("Session started with %d components", len(self._components))
        return self

    def add(self, component: C, enable: bool = True) -> C:
        """Register a component; it is enabled right away if the session is open."""
        self._components.append(component)
        if enable and self._open:
            component.enable()
        return component

    def advance(self, dt: float) -> None:
        self.engine.advance(dt)

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        for component in reversed(self._components):
            component.teardown()
        self._components.clear()
        cancelled = self.scheduler.clear()
        self.gates.unbind_all()
        self.engine.stop()
        self.bus.clear()
        logger.info("Session closed (%d sequences cancelled)", cancelled)

    def __enter__(self) -> "Session":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
