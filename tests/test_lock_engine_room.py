import pytest

from stagehand.events import EventBus, EventType
from stagehand.exceptions import ConfigurationError
from stagehand.gates import GateController, GateState
from stagehand.scripted import LockEngineRoom
from stagehand.world import Door, Task


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def task(bus: EventBus) -> Task:
    return Task(bus, "check_generator")


def test_two_gates_lock_both_doors_once(bus: EventBus):
    door1 = Door("engine_room", bus=bus)
    door2 = Door("cargo_hold", bus=bus)
    gates = GateController(bus)
    gates.bind(EventType.TASK_COMPLETED, [door1.lock], name="door1-lock")
    gates.bind(EventType.TASK_COMPLETED, [door2.lock], name="door2-lock")

    bus.publish(EventType.TASK_COMPLETED, "check_generator")
    assert door1.is_locked and door2.is_locked

    bus.publish(EventType.TASK_COMPLETED, "check_generator")
    assert door1.is_locked and door2.is_locked
    assert door1.lock_count == 1
    assert door2.lock_count == 1


def test_task_completion_locks_engine_room(bus: EventBus, task: Task):
    door1 = Door("engine_room", bus=bus, is_open=True)
    door2 = Door("cargo_hold", bus=bus)
    lock = LockEngineRoom(bus, task, door1, door2)
    lock.enable()

    assert lock.locked is False
    task.complete()

    assert lock.locked is True
    assert door1.is_open is False
    assert lock.gate.state is GateState.FIRED


def test_repeated_completion_never_toggles(bus: EventBus, task: Task):
    door1 = Door("engine_room", bus=bus)
    door2 = Door("cargo_hold", bus=bus)
    locked = []
    bus.subscribe(EventType.DOOR_LOCKED, locked.append)
    lock = LockEngineRoom(bus, task, door1, door2)
    lock.enable()

    for _ in range(3):
        task.complete()

    assert lock.locked is True
    assert locked == [door1, door2]


def test_other_tasks_do_not_lock(bus: EventBus, task: Task):
    door1 = Door("engine_room")
    door2 = Door("cargo_hold")
    lock = LockEngineRoom(bus, task, door1, door2)
    lock.enable()

    Task(bus, "refuel").complete()

    assert door1.is_locked is False
    assert door2.is_locked is False


def test_disabled_component_ignores_completion(bus: EventBus, task: Task):
    door1 = Door("engine_room")
    door2 = Door("cargo_hold")
    lock = LockEngineRoom(bus, task, door1, door2)

    task.complete()
    assert lock.locked is False

    lock.enable()
    lock.disable()
    task.complete()
    assert lock.locked is False

    lock.enable()
    task.complete()
    assert lock.locked is True


def test_accepts_channel_name(bus: EventBus):
    door1, door2 = Door("a"), Door("b")
    lock = LockEngineRoom(bus, "task.completed.manual", door1, door2)
    lock.enable()
    bus.publish("task.completed.manual")
    assert lock.locked is True


@pytest.mark.parametrize("missing", ["task", "door1", "door2"])
def test_missing_binding_fails_loudly(bus: EventBus, task: Task, missing):
    kwargs = {"task": task, "door1": Door("a"), "door2": Door("b")}
    kwargs[missing] = None
    with pytest.raises(ConfigurationError):
        LockEngineRoom(bus, **kwargs)
