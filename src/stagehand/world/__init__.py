from .door import Door
from .objects import Collider, GameObject, TextLabel
from .task import Task

__all__ = [
    "Collider",
    "Door",
    "GameObject",
    "Task",
    "TextLabel",
]
