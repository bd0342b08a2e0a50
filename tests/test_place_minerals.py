import pytest

from stagehand.events import EventBus, EventType
from stagehand.exceptions import ConfigurationError
from stagehand.interfaces import is_interactable
from stagehand.scripted import PlaceMinerals
from stagehand.world import Collider, GameObject


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def targets():
    return {
        "crystal": GameObject("crystal", active=False),
        "arrow": GameObject("arrow", active=True),
        "monitor_arrow": GameObject("monitor_arrow", active=False),
        "transition_collider": Collider("to_hub", enabled=False),
    }


def test_interact_activates_transition(bus: EventBus, targets):
    placed = []
    bus.subscribe(EventType.MINERALS_PLACED, placed.append)
    container = PlaceMinerals(bus, **targets)
    container.enable()

    container.interact("player")

    assert targets["crystal"].active is True
    assert targets["arrow"].active is False
    assert targets["monitor_arrow"].active is True
    assert targets["transition_collider"].enabled is True
    assert placed == ["player"]


def test_mutations_apply_only_once(bus: EventBus, targets):
    container = PlaceMinerals(bus, **targets)
    container.enable()
    container.interact("player")

    # Something else re-shows the guide arrow; a second placement must not hide it again
    targets["arrow"].set_active(True)
    container.interact("player")

    assert targets["arrow"].active is True
    assert container.gate.fired


def test_disabled_container_ignores_interaction(bus: EventBus, targets):
    container = PlaceMinerals(bus, **targets)
    container.interact("player")
    assert targets["crystal"].active is False
    assert targets["transition_collider"].enabled is False


def test_is_interactable(bus: EventBus, targets):
    assert is_interactable(PlaceMinerals(bus, **targets))


def test_missing_target_fails_loudly(bus: EventBus, targets):
    targets["monitor_arrow"] = None
    with pytest.raises(ConfigurationError, match="monitor_arrow"):
        PlaceMinerals(bus, **targets)


def _container_targets(tag: str):
    return {
        "crystal": GameObject(f"crystal_{tag}", active=False),
        "arrow": GameObject(f"arrow_{tag}", active=True),
        "monitor_arrow": GameObject(f"monitor_arrow_{tag}", active=False),
        "transition_collider": Collider(f"to_hub_{tag}", enabled=False),
    }


def test_interaction_only_changes_own_container(bus: EventBus):
    targets_a = _container_targets("a")
    targets_b = _container_targets("b")
    a = PlaceMinerals(bus, **targets_a)
    b = PlaceMinerals(bus, **targets_b)
    a.enable()
    b.enable()

    a.interact("player")

    assert targets_a["crystal"].active is True
    assert targets_a["transition_collider"].enabled is True
    assert targets_b["crystal"].active is False
    assert targets_b["arrow"].active is True
    assert targets_b["transition_collider"].enabled is False
    assert a.gate.fired
    assert not b.gate.fired


def test_container_channel_is_named_after_its_crystal(bus: EventBus, targets):
    container = PlaceMinerals(bus, **targets)
    assert container.channel == "minerals.placed.place_minerals.crystal"
    assert PlaceMinerals(bus, **_container_targets("x"), name="hold").channel == "minerals.placed.hold"
