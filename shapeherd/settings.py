"""Global volume setting and where the settings menu returns to."""

from __future__ import annotations

from dataclasses import dataclass

from shapeherd.state import Menu, Screen

MIN_VOLUME = 0.0
MAX_VOLUME = 3.0
VOLUME_STEP = 0.1


@dataclass
class GlobalVolume:
    """Linear master volume applied on top of each sound's own volume."""

    volume: float = 1.0

    def lower(self) -> float:
        self.volume = max(self.volume - VOLUME_STEP, MIN_VOLUME)
        return self.volume

    def raise_volume(self) -> float:
        self.volume = min(self.volume + VOLUME_STEP, MAX_VOLUME)
        return self.volume

    def label(self) -> str:
        percent = 100.0 * self.volume
        return f"{percent:3.0f}%"

    def effective(self, playback_volume: float) -> float:
        """The volume a playing sound should have."""
        return self.volume * playback_volume


def settings_back_target(screen: Screen) -> Menu:
    """The title screen goes back to the main menu, elsewhere to pause."""
    return Menu.MAIN if screen is Screen.TITLE else Menu.PAUSE