from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Callable, List, Optional, Sequence

from .events.event_bus import NO_PAYLOAD, EventBus, Subscription
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

Mutation = Callable[[], Any]


class GateState(Enum):
    UNBOUND = auto()
    ARMED = auto()
    FIRED = auto()


class Gate:
    """Applies a set of state mutations the first time a channel is delivered.

    Lifecycle: UNBOUND -> ARMED -> FIRED. FIRED is terminal; later deliveries
    of the channel are ignored and the gate never re-arms. An armed gate can
    be detached while its owner is disabled and attached again later; it stays
    armed in between and only listens while attached.

    Mutations take no arguments and must not depend on other gates bound to
    the same channel.
    """

    def __init__(self, channel: str, mutations: Sequence[Mutation], name: Optional[str] = None) -> None:
        if not channel:
            raise ConfigurationError("Gate requires a channel")
        if not mutations:
            raise ConfigurationError(f"Gate on '{channel}' requires at least one mutation")
        for mutation in mutations:
            if mutation is None or not callable(mutation):
                raise ConfigurationError(f"Gate on '{channel}' has a missing or non-callable mutation: {mutation!r}")
        self.channel = channel
        self.mutations: List[Mutation] = list(mutations)
        self.name = name or channel
        self._state = GateState.UNBOUND
        self._subscription: Optional[Subscription] = None

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Gate {self.name!r} channel={self.channel!r} state={self._state.name}>"

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def fired(self) -> bool:
        return self._state is GateState.FIRED

    @property
    def attached(self) -> bool:
        return self._subscription is not None

    def attach(self, bus: EventBus) -> None:
        """Start listening on the gate's channel. No-op once fired or already attached."""
        if self._state is GateState.FIRED or self._subscription is not None:
            return
        self._subscription = bus.subscribe(self.channel, self._on_event)
        self._state = GateState.ARMED
        logger.debug("Gate '%s' armed on '%s'", self.name, self.channel)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def _on_event(self, payload: Any = NO_PAYLOAD) -> None:
        if self._state is not GateState.ARMED:
            return
        # Transition first so a mutation that republishes the channel cannot re-enter
        self._state = GateState.FIRED
        logger.info("Gate '%s' fired on '%s' (%d mutations)", self.name, self.channel, len(self.mutations))
        for mutation in self.mutations:
            try:
                mutation()
            except Exception:
                logger.exception("Mutation %r failed in gate '%s'", mutation, self.name)
        self.detach()


class GateController:
    """Owns the gates of one component and attaches/detaches them together."""

    def __init__(self, bus: EventBus) -> None:
        if bus is None:
            raise ConfigurationError("GateController requires an EventBus")
        self.bus = bus
        self._gates: List[Gate] = []

    @property
    def gates(self) -> List[Gate]:
        return list(self._gates)

    def bind(
        self,
        channel: str,
        mutations: Sequence[Mutation],
        name: Optional[str] = None,
        attach: bool = True,
    ) -> Gate:
        """Create a gate that runs `mutations` once on the first delivery of `channel`.

        With attach=False the gate stays UNBOUND until :meth:`attach_all`.
        """
        gate = Gate(channel, mutations, name=name)
        if attach:
            gate.attach(self.bus)
        self._gates.append(gate)
        return gate

    def attach_all(self) -> None:
        for gate in self._gates:
            gate.attach(self.bus)

    def detach_all(self) -> None:
        for gate in self._gates:
            gate.detach()

    def unbind_all(self) -> None:
        """Detach and forget every gate (owner teardown)."""
        self.detach_all()
        logger.debug("Released %d gates", len(self._gates))
        self._gates.clear()
