from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from .events.event_bus import EventBus, Subscription
from .exceptions import ConfigurationError
from .gates import Gate, GateController, Mutation
from .sequencing import DEFAULT_TRACK, Sequence as StepSequence, SequenceScheduler

logger = logging.getLogger(__name__)


class Component:
    """Base for objects that own targets, subscriptions, gates and sequences.

    Subscriptions made with :meth:`listen` during :meth:`on_enable` are
    released by every :meth:`disable` call, together with the owner's gates and
    running sequences, so a disabled component never receives a late callback
    and never keeps writing its targets.

    Gates are created once (usually in ``__init__``) and survive disable/enable
    cycles: a gate that already fired stays fired.
    """

    name: str = "component"

    def __init__(self, bus: EventBus, scheduler: Optional[SequenceScheduler] = None, name: Optional[str] = None) -> None:
        if bus is None:
            raise ConfigurationError(f"{type(self).__name__} requires an EventBus")
        self.bus = bus
        self.scheduler = scheduler
        if name:
            self.name = name
        self.gates = GateController(bus)
        self._subscriptions: List[Subscription] = []
        self._enabled = False

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        state = "enabled" if self._enabled else "disabled"
        return f"<{type(self).__name__} {self.name!r} {state}>"

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        """Activate the component. Calling it on an enabled component is a no-op."""
        if self._enabled:
            return
        self._enabled = True
        try:
            self.gates.attach_all()
            self.on_enable()
        except Exception:
            self.disable()
            raise
        logger.debug("Enabled %s", self.name)

    def disable(self) -> None:
        """Deactivate the component, releasing everything acquired while enabled."""
        if not self._enabled:
            return
        self._enabled = False
        try:
            self.on_disable()
        finally:
            for subscription in self._subscriptions:
                subscription.close()
            self._subscriptions.clear()
            self.gates.detach_all()
            if self.scheduler is not None:
                cancelled = self.scheduler.cancel(self)
                if cancelled:
                    logger.debug("Cancelled %d sequences owned by %s", cancelled, self.name)
        logger.debug("Disabled %s", self.name)

    def teardown(self) -> None:
        """Disable and drop every gate for good."""
        self.disable()
        self.gates.unbind_all()

    def on_enable(self) -> None:
        """Acquire subscriptions here."""
        return

    def on_disable(self) -> None:
        return

    def listen(self, channel: str, handler: Callable[..., Any]) -> Subscription:
        if not self._enabled:
            raise RuntimeError(f"{self.name} must be enabled before subscribing to '{channel}'")
        subscription = self.bus.subscribe(channel, handler)
        self._subscriptions.append(subscription)
        return subscription

    def bind_gate(self, channel: str, mutations: Sequence[Mutation], name: Optional[str] = None) -> Gate:
        return self.gates.bind(channel, mutations, name=name, attach=self._enabled)

    def run_sequence(self, sequence: StepSequence, track: str = DEFAULT_TRACK) -> StepSequence:
        """Start a sequence owned by this component, replacing any on the same track."""
        if self.scheduler is None:
            raise ConfigurationError(f"{self.name} has no scheduler to run '{sequence.name}'")
        if not self._enabled:
            raise RuntimeError(f"{self.name} is disabled; cannot start '{sequence.name}'")
        return self.scheduler.start(self, sequence, track=track)
