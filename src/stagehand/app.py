from __future__ import annotations

import logging
from typing import Optional

from .config import load_presentation_settings
from .effects import GlitchEffect, GlitchValueGenerator
from .engine import GameConfig
from .events import EventType
from .scenes import SceneManager
from .scripted import OpeningTitleSequence
from .session import Session
from .world import TextLabel

logger = logging.getLogger(__name__)


class LoggingEffectSink:
    """Effect sink for headless runs: logs non-idle frames."""

    def __init__(self) -> None:
        self.frames = 0

    def write(self, displacement: float, threshold: float) -> None:
        self.frames += 1
        if displacement > 0.0:
            logger.info("Scan line jitter disp=%.5f thresh=%.3f", displacement, threshold)


def run_headless(
    max_steps: Optional[int] = None,
    tick_rate: float = 60.0,
    config_path: Optional[str] = None,
    realtime: bool = False,
) -> int:
    """Play the opening presentation without a window.

    Stops once the opening hands over to the next scene, or after max_steps.

    Returns:
        Process exit code (0 on success).
    """
    settings = load_presentation_settings(config_path)
    dt = 1.0 / tick_rate if tick_rate > 0 else 1.0 / 60.0
    config = GameConfig(tick_rate=tick_rate if realtime else 0, max_steps=max_steps, fixed_dt=dt)

    scenes = SceneManager(["opening", "ship"])
    with Session(config) as session:
        scenes.bus = session.bus
        opening_text = TextLabel("opening_text", text="Somewhere past the edge of the charts...")
        title_text = TextLabel("title_text", text="STAGEHAND")
        presentation = session.add(
            OpeningTitleSequence(
                session.bus,
                session.scheduler,
                opening_text,
                title_text,
                advance_scene=scenes.advance_scene,
                settings=settings,
            )
        )
        glitch = session.add(GlitchEffect(session.bus, LoggingEffectSink(), full_glitch=settings.glitch.full_glitch))
        session.engine.add_late_hook(lambda _dt: glitch.render())
        # A generator the demo walks toward at one unit per second
        generator = GlitchValueGenerator(session.bus, (0.0, 0.0), radius=settings.glitch.generator_radius)
        generator.target = (2.0 * generator.radius, 0.0)

        def walk(dt: float) -> None:
            x = max(0.0, generator.target[0] - dt)
            generator.target = (x, 0.0)
            generator.update(dt)

        session.engine.add_update_hook(walk)
        session.bus.subscribe(EventType.SCENE_CHANGED, lambda _scene: session.engine.stop())

        presentation.begin()
        session.engine.run()
        logger.info(
            "Headless run finished: scene=%s steps=%d elapsed=%.2fs",
            scenes.active_scene,
            session.engine.step,
            session.engine.elapsed,
        )
    return 0
