"""Opening text and title reveal for the start of the game.

The opening sequence introduces the game, then hands over to the first
playable scene. The title reveal plays later, whenever the engine sequence
shuts the generator down.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..components import Component
from ..config import PresentationSettings
from ..curves import Color, Curve, match_transparent
from ..events import EventBus, EventType
from ..exceptions import ConfigurationError
from ..sequencing import Call, Sequence, SequenceScheduler, Stage, Wait
from ..world import TextLabel

logger = logging.getLogger(__name__)

OPENING_TRACK = "opening"
TITLE_TRACK = "title"


class OpeningTitleSequence(Component):
    """Fades the opening text and the game title in and out.

    Opening: wait(edge) -> fade in -> hold -> fade out -> wait(edge) ->
    advance_scene(). Title: wait -> fade in -> wait -> fade out, started on
    every ENGINE_SHUTDOWN; a new shutdown restarts a title reveal in progress.
    """

    name = "opening_title_sequence"

    def __init__(
        self,
        bus: EventBus,
        scheduler: SequenceScheduler,
        opening_text: TextLabel,
        title_text: TextLabel,
        advance_scene: Callable[[], None],
        settings: Optional[PresentationSettings] = None,
        fade_curve: Optional[Curve] = None,
        opening_color: Color = Color.WHITE,
    ) -> None:
        super().__init__(bus, scheduler)
        if scheduler is None:
            raise ConfigurationError("OpeningTitleSequence requires a SequenceScheduler")
        if opening_text is None or title_text is None:
            raise ConfigurationError("OpeningTitleSequence requires both opening and title text labels")
        if advance_scene is None or not callable(advance_scene):
            raise ConfigurationError("OpeningTitleSequence requires a scene-advance hook")
        self.opening_text = opening_text
        self.title_text = title_text
        self.advance_scene = advance_scene
        self.settings = settings or PresentationSettings()
        self.fade_curve = fade_curve or self.settings.fade_curve()
        self.opening_color = opening_color
        self.title_color = self.settings.title.as_color()

    def on_enable(self) -> None:
        self.listen(EventType.ENGINE_SHUTDOWN, self.display_title_text)

    def hide_text(self) -> None:
        """All text starts clear so it only appears when needed."""
        self.opening_text.set_color(Color.CLEAR)
        self.title_text.set_color(Color.CLEAR)

    def begin(self) -> Sequence:
        """Hide the text and start the opening presentation."""
        self.hide_text()
        return self.run_sequence(self.opening_sequence(), track=OPENING_TRACK)

    def display_title_text(self, *_: object) -> Sequence:
        logger.info("Engine shutdown received; revealing title")
        return self.run_sequence(self.title_sequence(), track=TITLE_TRACK)

    def opening_sequence(self) -> Sequence:
        opening = self.settings.opening
        # Wait(0) would still yield a tick, so zero padding is left out entirely
        edge = [Wait(opening.padding)] if opening.padding > 0 else []
        steps = [
            *edge,
            self.fade_text(self.opening_text, self.opening_color, opening.fade_time, fade_in=True),
            Wait(opening.wait_time),
            self.fade_text(self.opening_text, self.opening_color, opening.fade_time, fade_in=False),
            *edge,
            Call(self._load_next_scene, name="advance_scene"),
        ]
        return Sequence(steps, name="opening")

    def title_sequence(self) -> Sequence:
        title = self.settings.title
        return Sequence(
            [
                Wait(title.wait_time),
                self.fade_text(self.title_text, self.title_color, title.fade_in_time, fade_in=True),
                Wait(title.wait_time),
                self.fade_text(self.title_text, self.title_color, title.fade_out_time, fade_in=False),
            ],
            name="title",
        )

    def fade_text(self, label: TextLabel, color: Color, fade_time: float, fade_in: bool) -> Stage:
        """Build a stage fading `label` between clear and `color`."""
        start, end = (Color.CLEAR, color) if fade_in else (color, Color.CLEAR)
        start, end = match_transparent(start, end)
        return Stage(
            duration=fade_time,
            start=start,
            end=end,
            write=label.set_color,
            curve=self.fade_curve,
            name=f"fade_{'in' if fade_in else 'out'}:{label.name}",
        )

    def _load_next_scene(self) -> None:
        logger.info("Opening presentation finished; advancing scene")
        self.advance_scene()
