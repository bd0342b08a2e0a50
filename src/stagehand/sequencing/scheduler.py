from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, Dict, Hashable, List, Optional, Tuple

from ..events.event_bus import EventBus
from .sequence import Sequence

logger = logging.getLogger(__name__)

DEFAULT_TRACK = "default"

SlotKey = Tuple[Hashable, str]


class SequenceScheduler:
    """Runs sequences cooperatively, one step per external tick.

    Each running sequence occupies a slot keyed by (owner, track). A track
    names one mutable target of the owner; starting a sequence on an occupied
    slot cancels the previous occupant first, so two sequences never write the
    same target in the same session.

    When constructed with a bus, the bus is held while sequences are stepped:
    anything published during a step is delivered after the step completes.
    """

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self.bus = bus
        self._slots: Dict[SlotKey, Sequence] = {}

    @property
    def active_count(self) -> int:
        return sum(1 for seq in self._slots.values() if seq.running)

    def start(self, owner: Hashable, sequence: Sequence, track: str = DEFAULT_TRACK) -> Sequence:
        """Start `sequence` for `owner`, replacing whatever ran on the same track.

        The sequence runs immediately up to its first suspension point, so any
        leading instantaneous steps take effect before this call returns.
        """
        key = (owner, track)
        previous = self._slots.get(key)
        if previous is not None and previous.running:
            previous.cancel(reason=f"superseded by '{sequence.name}'")
        sequence.begin()
        self._slots[key] = sequence
        logger.debug("Started '%s' for %r on track '%s'", sequence.name, owner, track)
        self._advance(key, sequence, 0.0)
        return sequence

    def cancel(self, owner: Hashable, track: Optional[str] = None) -> int:
        """Cancel the owner's sequence on `track`, or on every track when None.

        Returns the number of sequences that were running and got cancelled.
        """
        keys = [key for key in self._slots if key[0] == owner and (track is None or key[1] == track)]
        cancelled = 0
        for key in keys:
            sequence = self._slots.pop(key)
            if sequence.cancel(reason="owner request"):
                cancelled += 1
        return cancelled

    def current(self, owner: Hashable, track: str = DEFAULT_TRACK) -> Optional[Sequence]:
        return self._slots.get((owner, track))

    def is_running(self, owner: Hashable, track: Optional[str] = None) -> bool:
        return any(
            seq.running
            for (slot_owner, slot_track), seq in self._slots.items()
            if slot_owner == owner and (track is None or slot_track == track)
        )

    def tick(self, dt: float) -> None:
        """Advance every sequence that was running when this tick began."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        snapshot: List[Tuple[SlotKey, Sequence]] = list(self._slots.items())
        hold: Any = self.bus.hold() if self.bus is not None else nullcontext()
        with hold:
            for key, sequence in snapshot:
                # Skip sequences replaced or cancelled earlier in this tick
                if self._slots.get(key) is not sequence:
                    continue
                self._advance(key, sequence, dt)

    def clear(self) -> int:
        """Cancel and drop every sequence (session teardown)."""
        cancelled = sum(1 for seq in self._slots.values() if seq.cancel(reason="scheduler cleared"))
        self._slots.clear()
        return cancelled

    def _advance(self, key: SlotKey, sequence: Sequence, dt: float) -> None:
        if sequence.running:
            try:
                sequence.advance(dt)
            except Exception:
                # A faulting step only stops its own sequence
                logger.exception("Sequence '%s' for %r raised; cancelling it", sequence.name, key[0])
                sequence.cancel(reason="step raised")
        self._discard_if_finished(key, sequence)

    def _discard_if_finished(self, key: SlotKey, sequence: Sequence) -> None:
        if sequence.finished and self._slots.get(key) is sequence:
            del self._slots[key]
