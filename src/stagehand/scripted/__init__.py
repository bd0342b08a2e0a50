from .lock_engine_room import LockEngineRoom
from .opening_title import OPENING_TRACK, TITLE_TRACK, OpeningTitleSequence
from .place_minerals import PlaceMinerals

__all__ = [
    "LockEngineRoom",
    "OPENING_TRACK",
    "OpeningTitleSequence",
    "PlaceMinerals",
    "TITLE_TRACK",
]
