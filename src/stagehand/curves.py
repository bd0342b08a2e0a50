"""Easing curves and interpolation helpers for timed fades.

Everything here is pure: no state, no logging on the hot path. The scheduler
calls :func:`evaluate` once per tick for each running fade and feeds the
result to :func:`interpolate`.
"""
from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Sequence, Tuple, Type, TypeVar, Union

from easing_functions import (
    CubicEaseIn,
    CubicEaseInOut,
    CubicEaseOut,
    LinearInOut,
    QuadEaseIn,
    QuadEaseInOut,
    QuadEaseOut,
    SineEaseIn,
    SineEaseInOut,
    SineEaseOut,
)

from .exceptions import ConfigurationError
from .utils.math import clamp01

Curve = Callable[[float], float]
T = TypeVar("T", float, "Color")


@dataclass(frozen=True)
class Color:
    """RGBA color with float channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    CLEAR: ClassVar["Color"]
    WHITE: ClassVar["Color"]

    @classmethod
    def from_rgba(cls, values: Iterable[float]) -> "Color":
        parts = [float(v) for v in values]
        if len(parts) == 3:
            parts.append(1.0)
        if len(parts) != 4:
            raise ValueError(f"Expected 3 or 4 color channels, got {len(parts)}")
        return cls(*parts)

    @property
    def is_transparent(self) -> bool:
        return self.a <= 0.0

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.r, self.g, self.b, alpha)

    def lerp(self, other: "Color", t: float) -> "Color":
        t = clamp01(t)
        if t >= 1.0:
            return other
        if t <= 0.0:
            return self
        return Color(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t,
            self.a + (other.a - self.a) * t,
        )


Color.CLEAR = Color(0.0, 0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0, 1.0)


# Named easing curves. All map 0 -> 0 and 1 -> 1.


def _make_easing(easing_cls: Type[Any]) -> Curve:
    easing = easing_cls(start=0.0, end=1.0, duration=1.0)
    return lambda t: float(easing.ease(t))


linear = _make_easing(LinearInOut)


Key = Union[Tuple[float, float], Tuple[float, float, float]]


class KeyframeCurve:
    """Designer-authored curve through (time, value[, tangent]) keys.

    Segments are cubic Hermite splines. Keys without an explicit tangent get a
    flat tangent at the ends and a finite-difference slope in the interior.
    Inputs outside the key range hold the first/last value.
    """

    def __init__(self, keys: Sequence[Key]) -> None:
        if not keys:
            raise ConfigurationError("KeyframeCurve needs at least one key")
        ordered = sorted(keys, key=lambda k: k[0])
        self._times: List[float] = [float(k[0]) for k in ordered]
        self._values: List[float] = [float(k[1]) for k in ordered]
        if len(set(self._times)) != len(self._times):
            raise ConfigurationError("KeyframeCurve keys must have distinct times")
        self._tangents: List[float] = []
        last = len(ordered) - 1
        for i, key in enumerate(ordered):
            if len(key) > 2:
                self._tangents.append(float(key[2]))
            elif i == 0 or i == last:
                self._tangents.append(0.0)
            else:
                dt = self._times[i + 1] - self._times[i - 1]
                self._tangents.append((self._values[i + 1] - self._values[i - 1]) / dt)

    @classmethod
    def ease_in_out(cls, start: float = 0.0, end: float = 1.0) -> "KeyframeCurve":
        return cls([(0.0, start), (1.0, end)])

    def __call__(self, t: float) -> float:
        times = self._times
        if t <= times[0]:
            return self._values[0]
        if t >= times[-1]:
            return self._values[-1]
        i = bisect.bisect_right(times, t) - 1
        t0, t1 = times[i], times[i + 1]
        span = t1 - t0
        s = (t - t0) / span
        s2 = s * s
        s3 = s2 * s
        h00 = 2 * s3 - 3 * s2 + 1
        h10 = s3 - 2 * s2 + s
        h01 = -2 * s3 + 3 * s2
        h11 = s3 - s2
        return (
            h00 * self._values[i]
            + h10 * span * self._tangents[i]
            + h01 * self._values[i + 1]
            + h11 * span * self._tangents[i + 1]
        )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<KeyframeCurve keys={len(self._times)}>"


CURVES: Dict[str, Curve] = {
    "linear": linear,
    "ease_in_quad": _make_easing(QuadEaseIn),
    "ease_out_quad": _make_easing(QuadEaseOut),
    "ease_in_out_quad": _make_easing(QuadEaseInOut),
    "ease_in_cubic": _make_easing(CubicEaseIn),
    "ease_out_cubic": _make_easing(CubicEaseOut),
    "ease_in_out_cubic": _make_easing(CubicEaseInOut),
    "ease_in_sine": _make_easing(SineEaseIn),
    "ease_out_sine": _make_easing(SineEaseOut),
    "ease_in_out_sine": _make_easing(SineEaseInOut),
    "ease_in_out": KeyframeCurve.ease_in_out(),
}


def get_curve(name: str) -> Curve:
    """Look up a built-in curve by name."""
    try:
        return CURVES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown curve '{name}'. Known: {sorted(CURVES)}") from None


def evaluate(curve: Curve, elapsed: float, duration: float) -> float:
    """Return eased progress in [0, 1] for a fade that has run `elapsed` of `duration`.

    Reaching the duration yields exactly 1.0 so a finished fade lands on its end
    value instead of a near-end approximation. Non-positive durations count as
    already finished.
    """
    if duration <= 0 or elapsed >= duration:
        return 1.0
    if elapsed <= 0:
        return 0.0
    return clamp01(curve(elapsed / duration))


def interpolate(start: T, end: T, t: float) -> T:
    """Interpolate floats or Colors; t is clamped to [0, 1]."""
    if isinstance(start, Color) and isinstance(end, Color):
        return start.lerp(end, t)
    if isinstance(start, Color) or isinstance(end, Color):
        raise TypeError("Cannot interpolate between a Color and a non-Color")
    t = clamp01(t)
    if t >= 1.0:
        return end
    return start + (end - start) * t


def match_transparent(start: Color, end: Color) -> Tuple[Color, Color]:
    """Give a fully transparent endpoint the RGB of the opposite endpoint.

    Alpha-only fades then never pass through a different hue.
    """
    if start.is_transparent and not end.is_transparent:
        start = end.with_alpha(start.a)
    elif end.is_transparent and not start.is_transparent:
        end = start.with_alpha(end.a)
    return start, end

