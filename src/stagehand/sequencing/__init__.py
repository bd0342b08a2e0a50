from .scheduler import DEFAULT_TRACK, SequenceScheduler
from .sequence import Sequence, SequenceState
from .steps import Call, FadeDirection, Stage, Step, Wait

__all__ = [
    "Call",
    "DEFAULT_TRACK",
    "FadeDirection",
    "Sequence",
    "SequenceScheduler",
    "SequenceState",
    "Stage",
    "Step",
    "Wait",
]
