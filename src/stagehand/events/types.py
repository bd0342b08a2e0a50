class EventType:
    """Centralized channel names used across the package."""

    # A scripted task finished; payload: task name
    TASK_COMPLETED = "task.completed"

    # The ship's engine sequence shut the generator down; no payload
    ENGINE_SHUTDOWN = "engine.shutdown"

    # Per-tick glitch intensity sample; payload: float
    GLITCH_VALUE = "glitch.value"

    # Minerals were placed in any container; payload: interacting agent
    MINERALS_PLACED = "minerals.placed"

    # Door state notifications; payload: Door
    DOOR_OPENED = "door.opened"
    DOOR_CLOSED = "door.closed"
    DOOR_LOCKED = "door.locked"
    DOOR_BLOCKED = "door.blocked"

    # Active scene changed; payload: new scene name
    SCENE_CHANGED = "scene.changed"


def task_completed_channel(task_name: str) -> str:
    """Return the channel a specific task publishes on when it completes."""
    return f"{EventType.TASK_COMPLETED}.{task_name}"


def minerals_placed_channel(container_name: str) -> str:
    """Return the channel a specific mineral container publishes on when filled."""
    return f"{EventType.MINERALS_PLACED}.{container_name}"
