from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..sequencing import SequenceScheduler

logger = logging.getLogger(__name__)

TickHook = Callable[[float], None]


@dataclass
class GameConfig:
    """Configuration for the tick loop.

    Attributes:
        tick_rate: Target updates per second for the loop. If 0 or None, updates as fast as possible.
        max_steps: If provided and > 0, the loop will automatically stop after this many updates.
        fixed_dt: If set, `run()` advances by this many seconds per step instead of wall-clock time.
    """

    tick_rate: float = 30.0
    max_steps: Optional[int] = None
    fixed_dt: Optional[float] = None


class GameEngine:
    """Headless tick driver for the sequencing core.

    Each `advance(dt)` runs, in order: update hooks (event producers such as
    glitch generators), one scheduler step, then late hooks (render sinks).
    The host runtime calls `advance` once per frame; `run()` is a blocking
    loop for CLI use.
    """

    def __init__(self, config: Optional[GameConfig] = None, scheduler: Optional[SequenceScheduler] = None) -> None:
        self.config = config or GameConfig()
        self.scheduler = scheduler or SequenceScheduler()
        self._update_hooks: List[TickHook] = []
        self._late_hooks: List[TickHook] = []
        self._running: bool = False
        self._step: int = 0
        self._elapsed: float = 0.0
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    @property
    def elapsed(self) -> float:
        """Total simulated seconds advanced since start."""
        return self._elapsed

    def add_update_hook(self, hook: TickHook) -> None:
        self._update_hooks.append(hook)

    def add_late_hook(self, hook: TickHook) -> None:
        self._late_hooks.append(hook)

    def remove_hook(self, hook: TickHook) -> None:
        for hooks in (self._update_hooks, self._late_hooks):
            if hook in hooks:
                hooks.remove(hook)

    def start(self) -> None:
        """Start the engine loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameEngine.start() called while already running")
            return
        self._running = True
        self._step = 0
        self._elapsed = 0.0
        self._last_time = time.perf_counter()
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        """Stop the loop gracefully."""
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def advance(self, dt: float) -> None:
        """Perform a single tick.

        Args:
            dt: Delta time in seconds since last tick; must be non-negative.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if not self._running:
            logger.debug("advance() called while not running; ignored")
            return
        self._step += 1
        self._elapsed += dt
        logger.debug("Tick #%d (dt=%.4f)", self._step, dt)

        for hook in list(self._update_hooks):
            hook(dt)
        self.scheduler.tick(dt)
        for hook in list(self._late_hooks):
            hook(dt)

        # Auto stop if max_steps set
        if self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()

    def run(self) -> None:
        """Run a blocking loop until stopped or max_steps reached.

        Throttles to tick_rate if configured.
        """
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            if self.config.fixed_dt is not None:
                dt = self.config.fixed_dt
            elif self._last_time is None:
                dt = 0.0
            else:
                dt = now - self._last_time
            self._last_time = now

            self.advance(dt)

            # Throttle to tick rate if configured
            if target_dt > 0:
                elapsed = time.perf_counter() - now
                remaining = target_dt - elapsed
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d, elapsed=%.3fs)", self._step, self._elapsed)
