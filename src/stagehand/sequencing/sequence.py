from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Iterable, List, Optional

from .steps import Call, Stage, Step, Wait

logger = logging.getLogger(__name__)


class SequenceState(Enum):
    IDLE = auto()
    RUNNING = auto()
    CANCELLED = auto()
    COMPLETED = auto()


class Sequence:
    """Ordered timed steps advanced cooperatively by the scheduler.

    Suspension state is only the current step index and the time spent in that
    step, so a sequence can be paused at any tick boundary and resumed by the
    next `advance` call. Time left over when a step finishes carries into the
    following step within the same advance.

    A sequence is single-use: once cancelled or completed it never runs again.
    """

    def __init__(
        self,
        steps: Iterable[Step],
        name: str = "sequence",
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        self.steps: List[Step] = list(steps)
        self.name = name
        self.on_complete = on_complete
        self._state = SequenceState.IDLE
        self._index = 0
        self._elapsed = 0.0
        self._frame_wait_pending = False
        self.total_elapsed = 0.0

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Sequence {self.name!r} state={self._state.name} step={self._index}/{len(self.steps)}>"

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is SequenceState.RUNNING

    @property
    def finished(self) -> bool:
        return self._state in (SequenceState.CANCELLED, SequenceState.COMPLETED)

    @property
    def index(self) -> int:
        return self._index

    def begin(self) -> None:
        if self._state is not SequenceState.IDLE:
            raise RuntimeError(f"Sequence '{self.name}' already {self._state.name.lower()}; sequences are single-use")
        self._state = SequenceState.RUNNING
        logger.debug("Sequence '%s' started with %d steps", self.name, len(self.steps))

    def cancel(self, reason: str = "requested") -> bool:
        """Stop the sequence; targets keep whatever value was last written.

        Returns True if the sequence was running.
        """
        if self._state is not SequenceState.RUNNING:
            return False
        self._state = SequenceState.CANCELLED
        logger.info(
            "Sequence '%s' cancelled at step %d/%d (%s)",
            self.name,
            self._index,
            len(self.steps),
            reason,
        )
        return True

    def advance(self, dt: float) -> None:
        """Spend `dt` seconds of the sequence's time budget."""
        if self._state is not SequenceState.RUNNING:
            return
        budget = max(0.0, float(dt))
        self.total_elapsed += budget

        while self._state is SequenceState.RUNNING and self._index < len(self.steps):
            step = self.steps[self._index]

            if isinstance(step, Call):
                logger.debug("Sequence '%s' calling %s", self.name, step.name)
                self._next_step()
                step.action()
                continue

            if isinstance(step, Wait):
                if step.duration <= 0:
                    if not self._frame_wait_pending:
                        self._frame_wait_pending = True
                        budget = 0.0
                        break
                    self._frame_wait_pending = False
                    self._next_step()
                    continue
                remaining = step.duration - self._elapsed
                if budget >= remaining:
                    budget -= remaining
                    self._next_step()
                    continue
                self._elapsed += budget
                budget = 0.0
                break

            if isinstance(step, Stage):
                if step.duration <= 0:
                    logger.debug("Stage '%s' has non-positive duration; snapping to end value", step.name)
                    step.write(step.target)
                    self._next_step()
                    continue
                self._elapsed += budget
                if self._elapsed >= step.duration:
                    budget = self._elapsed - step.duration
                    step.write(step.target)
                    self._next_step()
                    continue
                step.write(step.value_at(self._elapsed))
                budget = 0.0
                break

            raise TypeError(f"Unsupported step {step!r} in sequence '{self.name}'")

        if self._state is SequenceState.RUNNING and self._index >= len(self.steps):
            self._complete()

    def _next_step(self) -> None:
        self._index += 1
        self._elapsed = 0.0

    def _complete(self) -> None:
        self._state = SequenceState.COMPLETED
        logger.debug("Sequence '%s' completed after %.3fs", self.name, self.total_elapsed)
        if self.on_complete is not None:
            self.on_complete()
