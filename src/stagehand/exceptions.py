class StagehandError(Exception):
    """Base exception for the stagehand package."""


class ConfigurationError(StagehandError):
    """Raised when a required binding or setting is missing or invalid at initialization."""
