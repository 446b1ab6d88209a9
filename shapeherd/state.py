"""Game states and the timers that drive transitions between them."""

from __future__ import annotations

import enum
from typing import Optional


class Screen(enum.Enum):
    """Top-level screens; the game starts on SPLASH."""

    SPLASH = enum.auto()
    TITLE = enum.auto()
    LOADING = enum.auto()
    GAMEPLAY = enum.auto()
    SCORE = enum.auto()


class Menu(enum.Enum):
    """Menus shown over a screen; NONE is the default."""

    NONE = enum.auto()
    MAIN = enum.auto()
    CREDITS = enum.auto()
    SETTINGS = enum.auto()
    PAUSE = enum.auto()


class Playing(enum.Enum):
    """Whether the player is alive; LIVE is the default."""

    LIVE = enum.auto()
    DYING = enum.auto()
    DEAD = enum.auto()


class TimerMode(enum.Enum):
    ONCE = enum.auto()
    REPEATING = enum.auto()


class Timer:
    """Counts elapsed seconds up to a duration, once or repeatedly."""

    def __init__(self, duration: float, mode: TimerMode = TimerMode.ONCE) -> None:
        if duration < 0:
            raise ValueError("timer duration must not be negative")
        self.duration = float(duration)
        self.mode = mode
        self.elapsed = 0.0
        self._finished = False
        self.times_finished_this_tick = 0

    def tick(self, delta: float) -> Timer:
        if self._finished:
            self.times_finished_this_tick = 0
            if self.mode is TimerMode.ONCE:
                return self
            self._finished = False

        self.elapsed += delta
        self._finished = self.elapsed >= self.duration
        if self._finished:
            if self.mode is TimerMode.REPEATING:
                if self.duration > 0:
                    self.times_finished_this_tick = int(self.elapsed // self.duration)
                    self.elapsed %= self.duration
                else:
                    self.times_finished_this_tick = 1
                    self.elapsed = 0.0
            else:
                self.times_finished_this_tick = 1
                self.elapsed = self.duration
        else:
            self.times_finished_this_tick = 0
        return self

    def finished(self) -> bool:
        return self._finished

    def just_finished(self) -> bool:
        return self.times_finished_this_tick > 0

    def reset(self) -> None:
        self.elapsed = 0.0
        self._finished = False
        self.times_finished_this_tick = 0


DYING_SECONDS = 1.0


class DyingState:
    """Waits out the death animation before the player counts as dead."""

    def __init__(self) -> None:
        self.timer = Timer(DYING_SECONDS, TimerMode.ONCE)

    def update(self, dt: float) -> Optional[Playing]:
        """Return Playing.DEAD once the timer has run out, else None."""
        if self.timer.tick(dt).finished():
            self.timer.reset()
            return Playing.DEAD
        return None