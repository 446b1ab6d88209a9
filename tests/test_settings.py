import pytest

from shapeherd.settings import MAX_VOLUME, MIN_VOLUME, GlobalVolume, settings_back_target
from shapeherd.state import Menu, Screen


def test_default_label():
    assert GlobalVolume().label() == "100%"


def test_lower_stops_at_minimum():
    volume = GlobalVolume()
    for _ in range(50):
        volume.lower()
    assert volume.volume == MIN_VOLUME
    assert volume.label() == "  0%"


def test_raise_stops_at_maximum():
    volume = GlobalVolume()
    for _ in range(50):
        volume.raise_volume()
    assert volume.volume == MAX_VOLUME
    assert volume.label() == "300%"


def test_lower_then_raise_round_trip():
    volume = GlobalVolume(volume=1.5)
    volume.lower()
    assert volume.volume < 1.5
    volume.raise_volume()
    assert volume.volume == pytest.approx(1.5)


def test_effective_scales_playback():
    volume = GlobalVolume(volume=0.5)
    assert volume.effective(0.8) == pytest.approx(0.5 * 0.8)
    assert GlobalVolume().effective(0.8) == pytest.approx(0.8)


@pytest.mark.parametrize(
    "screen, menu",
    [
        (Screen.TITLE, Menu.MAIN),
        (Screen.GAMEPLAY, Menu.PAUSE),
        (Screen.SCORE, Menu.PAUSE),
    ],
)
def test_back_target(screen, menu):
    assert settings_back_target(screen) is menu