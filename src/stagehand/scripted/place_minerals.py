from __future__ import annotations

import logging
from functools import partial
from typing import Optional

from ..components import Component
from ..events import EventBus, EventType, minerals_placed_channel
from ..exceptions import ConfigurationError
from ..gates import Gate
from ..world import Collider, GameObject

logger = logging.getLogger(__name__)


class PlaceMinerals(Component):
    """Container the player clicks to place the collected minerals.

    Interacting publishes the container's own channel and then the shared
    MINERALS_PLACED channel, both with the agent. The component's gate on its
    own channel shows the crystal inside the container, swaps the guide arrow
    for the one pointing at the monitor and enables the scene-transition
    trigger, once. Other containers on the same bus are left alone.
    """

    def __init__(
        self,
        bus: EventBus,
        crystal: GameObject,
        arrow: GameObject,
        monitor_arrow: GameObject,
        transition_collider: Collider,
        name: Optional[str] = None,
    ) -> None:
        missing = [
            label
            for label, target in (
                ("crystal", crystal),
                ("arrow", arrow),
                ("monitor_arrow", monitor_arrow),
                ("transition_collider", transition_collider),
            )
            if target is None
        ]
        if missing:
            raise ConfigurationError(f"PlaceMinerals is missing targets: {', '.join(missing)}")
        super().__init__(bus, name=name or f"place_minerals.{crystal.name}")
        self.crystal = crystal
        self.arrow = arrow
        self.monitor_arrow = monitor_arrow
        self.transition_collider = transition_collider
        self.gate: Gate = self.bind_gate(
            self.channel,
            [
                partial(crystal.set_active, True),
                partial(arrow.set_active, False),
                partial(monitor_arrow.set_active, True),
                self._enable_transition,
            ],
            name=self.name,
        )

    @property
    def channel(self) -> str:
        return minerals_placed_channel(self.name)

    def interact(self, agent: object) -> None:
        if not self.enabled:
            logger.debug("Ignoring interaction by %r; %s is disabled", agent, self.name)
            return
        logger.info("%r placed the minerals in %s", agent, self.name)
        self.bus.publish(self.channel, agent)
        self.bus.publish(EventType.MINERALS_PLACED, agent)

    def _enable_transition(self) -> None:
        self.transition_collider.enabled = True
