from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..curves import Color

logger = logging.getLogger(__name__)


@dataclass
class GameObject:
    """Scene object whose only state here is whether it is shown."""

    name: str
    active: bool = True

    def set_active(self, active: bool) -> None:
        if self.active != active:
            logger.debug("%s active=%s", self.name, active)
        self.active = active


@dataclass
class Collider:
    """Trigger volume that can be switched on and off."""

    name: str
    enabled: bool = False


@dataclass
class TextLabel:
    """UI text whose color the presentation sequences write."""

    name: str
    text: str = ""
    color: Color = field(default_factory=lambda: Color.WHITE)

    def set_color(self, color: Color) -> None:
        self.color = color
