import pytest

from stagehand.components import Component
from stagehand.events import EventBus
from stagehand.exceptions import ConfigurationError
from stagehand.sequencing import Sequence, SequenceScheduler, Wait


class Listener(Component):
    name = "listener"

    def __init__(self, bus, scheduler=None):
        super().__init__(bus, scheduler)
        self.received = []
        self.disabled_calls = 0

    def on_enable(self):
        self.listen("ping", self.received.append)

    def on_disable(self):
        self.disabled_calls += 1


class BrokenOnEnable(Component):
    def on_enable(self):
        self.listen("ping", lambda payload: None)
        raise RuntimeError("bad wiring")


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


def test_subscriptions_follow_enable_and_disable(bus: EventBus):
    listener = Listener(bus)
    bus.publish("ping", 1)
    listener.enable()
    bus.publish("ping", 2)
    listener.disable()
    bus.publish("ping", 3)

    assert listener.received == [2]
    assert bus.subscriber_count("ping") == 0


def test_enable_and_disable_are_idempotent(bus: EventBus):
    listener = Listener(bus)
    listener.enable()
    listener.enable()
    bus.publish("ping", 1)
    listener.disable()
    listener.disable()

    assert listener.received == [1]
    assert listener.disabled_calls == 1


def test_reenable_resubscribes(bus: EventBus):
    listener = Listener(bus)
    listener.enable()
    listener.disable()
    listener.enable()
    bus.publish("ping", 1)
    assert listener.received == [1]


def test_failed_enable_releases_partial_subscriptions(bus: EventBus):
    component = BrokenOnEnable(bus)
    with pytest.raises(RuntimeError):
        component.enable()
    assert component.enabled is False
    assert bus.subscriber_count("ping") == 0


def test_disable_cancels_owned_sequences(bus: EventBus):
    scheduler = SequenceScheduler(bus)
    listener = Listener(bus, scheduler)
    listener.enable()
    seq = listener.run_sequence(Sequence([Wait(10.0)]))
    other = listener.run_sequence(Sequence([Wait(10.0)]), track="other")

    listener.disable()

    assert not seq.running
    assert not other.running
    assert scheduler.active_count == 0


def test_run_sequence_requires_scheduler_and_enabled(bus: EventBus):
    listener = Listener(bus)
    listener.enable()
    with pytest.raises(ConfigurationError):
        listener.run_sequence(Sequence([Wait(1.0)]))

    disabled = Listener(bus, SequenceScheduler(bus))
    with pytest.raises(RuntimeError):
        disabled.run_sequence(Sequence([Wait(1.0)]))


def test_listen_requires_enabled(bus: EventBus):
    listener = Listener(bus)
    with pytest.raises(RuntimeError):
        listener.listen("ping", print)


def test_component_requires_bus():
    with pytest.raises(ConfigurationError):
        Listener(None)


def test_teardown_forgets_gates(bus: EventBus):
    calls = []
    listener = Listener(bus)
    listener.bind_gate("door", [lambda: calls.append("lock")])
    listener.enable()
    listener.teardown()
    bus.publish("door")

    assert calls == []
    assert listener.gates.gates == []
