from .loader import (
    GlitchSettings,
    OpeningSettings,
    PresentationSettings,
    TitleSettings,
    load_presentation_settings,
)

__all__ = [
    "GlitchSettings",
    "OpeningSettings",
    "PresentationSettings",
    "TitleSettings",
    "load_presentation_settings",
]
