from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..events import EventBus, EventType
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SceneManager:
    """Tracks the active scene in build order and announces transitions.

    Loading scene content is left to the host; this only decides which scene
    comes next and publishes SCENE_CHANGED with its name.
    """

    def __init__(self, scenes: Sequence[str], bus: Optional[EventBus] = None, start_index: int = 0) -> None:
        if not scenes:
            raise ConfigurationError("SceneManager needs at least one scene")
        if not 0 <= start_index < len(scenes):
            raise ConfigurationError(f"start_index {start_index} out of range for {len(scenes)} scenes")
        self._scenes: List[str] = list(scenes)
        self.bus = bus
        self._index = start_index
        self.transitions = 0

    @property
    def active_index(self) -> int:
        return self._index

    @property
    def active_scene(self) -> str:
        return self._scenes[self._index]

    def advance_scene(self) -> None:
        """Load the scene after the active one in build order."""
        if self._index + 1 >= len(self._scenes):
            logger.warning("No scene after '%s'; staying put", self.active_scene)
            return
        self.transition_to(self._index + 1)

    def transition_to(self, index: int) -> None:
        if not 0 <= index < len(self._scenes):
            raise IndexError(f"Scene index {index} out of range")
        prev = self.active_scene
        self._index = index
        self.transitions += 1
        logger.info("Scene transition: %s -> %s", prev, self.active_scene)
        if self.bus is not None:
            self.bus.publish(EventType.SCENE_CHANGED, self.active_scene)
