from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

from ..curves import Curve, evaluate, interpolate, linear
from ..exceptions import ConfigurationError


class FadeDirection(Enum):
    TOWARD_END = "toward_end"
    TOWARD_START = "toward_start"


@dataclass
class Stage:
    """One timed interpolation written to an owned target every tick.

    Attributes:
        duration: Seconds the interpolation takes. Non-positive durations snap
            straight to the end value.
        start: Value at the beginning of the stage (float or Color).
        end: Value at the end of the stage.
        write: Setter for the owned target; receives each computed value.
        curve: Easing curve applied to normalized progress.
        direction: TOWARD_START plays the stage backwards, end -> start.
        name: Label used in logs.
    """

    duration: float
    start: Any
    end: Any
    write: Callable[[Any], None]
    curve: Curve = linear
    direction: FadeDirection = FadeDirection.TOWARD_END
    name: str = "stage"

    def __post_init__(self) -> None:
        if self.write is None or not callable(self.write):
            raise ConfigurationError(f"Stage '{self.name}' has no target to write to")
        if self.curve is None:
            raise ConfigurationError(f"Stage '{self.name}' has no curve")

    @property
    def origin(self) -> Any:
        return self.start if self.direction is FadeDirection.TOWARD_END else self.end

    @property
    def target(self) -> Any:
        return self.end if self.direction is FadeDirection.TOWARD_END else self.start

    def value_at(self, elapsed: float) -> Any:
        return interpolate(self.origin, self.target, evaluate(self.curve, elapsed, self.duration))


@dataclass
class Wait:
    """Suspend the sequence for `duration` seconds; 0 waits for the next tick."""

    duration: float = 0.0


@dataclass
class Call:
    """Run an instantaneous action between timed steps."""

    action: Callable[[], Any]
    name: str = field(default="")

    def __post_init__(self) -> None:
        if self.action is None or not callable(self.action):
            raise ConfigurationError(f"Call step '{self.name}' has no action")
        if not self.name:
            self.name = getattr(self.action, "__name__", "call")


Step = Union[Stage, Wait, Call]
