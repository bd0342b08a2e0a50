"""
Stagehand: event-driven scripted sequencing for scene presentation.

Subsystems talk through an explicit EventBus, timed presentation runs as
cancellable sequences stepped by an external tick, and one-shot gates apply
state changes exactly once no matter how often their event repeats.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
