"""Scan-line jitter effect driven by glitch intensity samples.

Generators scattered through a scene publish an intensity on the
``GLITCH_VALUE`` channel each tick. The effect keeps the latest sample,
converts it to shader parameters once per rendered frame, writes them to the
rendering sink and resets, so the effect fades out as soon as nothing
publishes.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from ..components import Component
from ..events import EventBus, EventType
from ..exceptions import ConfigurationError
from ..interfaces import EffectSink
from ..utils.math import clamp01

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def scan_line_jitter(intensity: float) -> Tuple[float, float]:
    """Return (displacement, threshold) for a glitch intensity.

    These formulas feed an existing shader and must stay exactly as written.
    """
    intensity = clamp01(intensity)
    threshold = clamp01(1.0 - intensity * 1.2)
    displacement = intensity ** 3 * 0.05
    return displacement, threshold


class IntensitySignal:
    """A single [0, 1] sample that is consumed once per tick."""

    def __init__(self) -> None:
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def set(self, value: float) -> None:
        self._value = clamp01(value)

    def consume(self) -> float:
        value = self._value
        self._value = 0.0
        return value


class GlitchEffect(Component):
    """Listens for glitch samples while enabled and renders them once per frame."""

    name = "glitch_effect"

    def __init__(self, bus: EventBus, sink: EffectSink, full_glitch: bool = False) -> None:
        super().__init__(bus)
        if sink is None:
            raise ConfigurationError("GlitchEffect requires an effect sink")
        self.sink = sink
        self.full_glitch = full_glitch
        self.signal = IntensitySignal()

    def on_enable(self) -> None:
        self.listen(EventType.GLITCH_VALUE, self._on_value_above_zero)

    def _on_value_above_zero(self, value: float) -> None:
        self.signal.set(value)

    def render(self) -> Tuple[float, float]:
        """Write this frame's jitter parameters to the sink and reset the signal."""
        if self.full_glitch:
            self.signal.set(1.0)
        intensity = self.signal.consume()
        displacement, threshold = scan_line_jitter(intensity)
        logger.debug("Scan line jitter intensity=%.3f disp=%.5f thresh=%.3f", intensity, displacement, threshold)
        self.sink.write(displacement, threshold)
        return displacement, threshold


class GlitchValueGenerator:
    """Publishes a glitch intensity that grows as a target approaches.

    The value is 1 at the generator's position and falls off linearly to 0 at
    `radius`. Nothing is published while the value is zero.
    """

    def __init__(self, bus: EventBus, position: Point, radius: float, strength: float = 1.0) -> None:
        if bus is None:
            raise ConfigurationError("GlitchValueGenerator requires an EventBus")
        if radius <= 0:
            raise ConfigurationError(f"GlitchValueGenerator radius must be positive, got {radius}")
        self.bus = bus
        self.position = position
        self.radius = radius
        self.strength = strength
        self.target: Optional[Point] = None

    def value_for(self, point: Point) -> float:
        distance = math.hypot(point[0] - self.position[0], point[1] - self.position[1])
        return clamp01((1.0 - distance / self.radius) * self.strength)

    def update(self, dt: float) -> None:
        if self.target is None:
            return
        value = self.value_for(self.target)
        if value > 0.0:
            self.bus.publish(EventType.GLITCH_VALUE, value)
