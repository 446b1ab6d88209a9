"""The splash screen's fade animation and timer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from shapeherd.state import Screen, Timer, TimerMode

SPLASH_BACKGROUND_COLOR = (40, 40, 40)
SPLASH_DURATION_SECS = 1.8
SPLASH_FADE_DURATION_SECS = 0.6


@dataclass
class FadeInOut:
    """Trapezoid-shaped opacity: fade in, hold, fade out."""

    total_duration: float = SPLASH_DURATION_SECS
    fade_duration: float = SPLASH_FADE_DURATION_SECS
    t: float = 0.0

    def alpha(self) -> float:
        t = min(max(self.t / self.total_duration, 0.0), 1.0)
        fade = self.fade_duration / self.total_duration
        return min((1.0 - abs(2.0 * t - 1.0)) / fade, 1.0)

    def tick(self, dt: float) -> None:
        self.t += dt


@dataclass
class Splash:
    """The splash screen; reports when it is time to show the title."""

    fade: FadeInOut = field(default_factory=FadeInOut)
    timer: Timer = field(
        default_factory=lambda: Timer(SPLASH_DURATION_SECS, TimerMode.ONCE)
    )

    def update(self, dt: float) -> Optional[Screen]:
        self.fade.tick(dt)
        self.timer.tick(dt)
        if self.timer.just_finished():
            return Screen.TITLE
        return None

    def skip(self) -> Screen:
        return Screen.TITLE