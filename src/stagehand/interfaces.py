from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Interactable(Protocol):
    """Anything an outside input system can interact with.

    Implementations mutate their own state and may publish events; the caller
    gets nothing back.
    """

    def interact(self, agent: object) -> None:
        ...


class EffectSink(Protocol):
    """Write-only receiver for the scan-line jitter parameters of one frame."""

    def write(self, displacement: float, threshold: float) -> None:
        ...


def is_interactable(obj: object) -> bool:
    return isinstance(obj, Interactable)
