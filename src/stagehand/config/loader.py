from __future__ import annotations

import logging
from importlib.resources import files as resource_files
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..curves import CURVES, Color, Curve, get_curve
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class OpeningSettings(BaseModel):
    """Timings of the opening text presentation."""

    fade_time: float = Field(0.5, ge=0, description="Seconds to fade the opening text in or out")
    wait_time: float = Field(2.5, ge=0, description="Seconds the opening text stays fully visible")
    edge_padding: Optional[float] = Field(
        default=None, ge=0, description="Pause before the fade in and after the fade out; None uses fade_time"
    )

    @property
    def padding(self) -> float:
        return self.fade_time if self.edge_padding is None else self.edge_padding

    @property
    def total_time(self) -> float:
        return 2 * self.fade_time + self.wait_time + 2 * self.padding


class TitleSettings(BaseModel):
    """Timings and color of the game title reveal."""

    color: List[float] = Field(default_factory=lambda: [1.0, 1.0, 1.0, 1.0], description="RGB or RGBA in [0, 1]")
    fade_in_time: float = Field(3.0, ge=0)
    wait_time: float = Field(1.5, ge=0)
    fade_out_time: float = Field(1.5, ge=0)

    @field_validator("color")
    @classmethod
    def check_color(cls, v: List[float]) -> List[float]:
        if len(v) not in (3, 4):
            raise ValueError("color must have 3 or 4 channels")
        if any(c < 0.0 or c > 1.0 for c in v):
            raise ValueError("color channels must be within [0, 1]")
        return list(v) if len(v) == 4 else list(v) + [1.0]

    def as_color(self) -> Color:
        return Color.from_rgba(self.color)


class GlitchSettings(BaseModel):
    full_glitch: bool = Field(False, description="Force the scan-line effect fully on")
    generator_radius: float = Field(4.0, gt=0, description="Distance at which glitch generators fade to zero")


class PresentationSettings(BaseModel):
    """Top-level presentation configuration."""

    curve: str = Field("ease_in_out", description="Name of the easing curve used by text fades")
    opening: OpeningSettings = Field(default_factory=OpeningSettings)
    title: TitleSettings = Field(default_factory=TitleSettings)
    glitch: GlitchSettings = Field(default_factory=GlitchSettings)

    @field_validator("curve")
    @classmethod
    def known_curve(cls, v: str) -> str:
        if v not in CURVES:
            raise ValueError(f"unknown curve '{v}'; expected one of {sorted(CURVES)}")
        return v

    def fade_curve(self) -> Curve:
        return get_curve(self.curve)


def load_presentation_settings(path: Optional[str] = None) -> PresentationSettings:
    """Load presentation settings from YAML.

    If path is None, loads the embedded default resource at
    stagehand/config/presentation.yaml.
    """
    if path is None:
        data = resource_files("stagehand.config").joinpath("presentation.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded presentation settings")
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read presentation settings from {path}: {e}") from e
        logger.debug("Loaded presentation settings from path: %s", path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in presentation settings: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError("Presentation settings must be a mapping")

    try:
        settings = PresentationSettings(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid presentation settings: {e}") from e
    logger.info(
        "Presentation settings: curve=%s opening=%.2fs title_fade_in=%.2fs",
        settings.curve,
        settings.opening.total_time,
        settings.title.fade_in_time,
    )
    return settings
