import pytest

from shapeherd.splash import SPLASH_DURATION_SECS, FadeInOut, Splash
from shapeherd.state import Screen


def test_alpha_starts_transparent():
    assert FadeInOut().alpha() == pytest.approx(0.0)


def test_alpha_full_in_middle():
    assert FadeInOut(t=SPLASH_DURATION_SECS / 2).alpha() == pytest.approx(1.0)


def test_alpha_symmetric_and_bounded():
    for step in range(0, 19):
        t = step * 0.1
        a = FadeInOut(t=t).alpha()
        mirrored = FadeInOut(t=SPLASH_DURATION_SECS - t).alpha()
        assert a == pytest.approx(mirrored)
        assert a <= 1.0


def test_alpha_rises_during_fade_in():
    values = [FadeInOut(t=t).alpha() for t in (0.1, 0.2, 0.3)]
    assert values == sorted(values)
    assert values[0] < values[-1]


def test_alpha_after_end_matches_end():
    assert FadeInOut(t=10.0).alpha() == pytest.approx(FadeInOut(t=SPLASH_DURATION_SECS).alpha())


def test_tick_advances_time():
    fade = FadeInOut()
    fade.tick(0.25)
    fade.tick(0.25)
    assert fade.t == pytest.approx(0.5)


def test_splash_goes_to_title_once():
    splash = Splash()
    assert splash.update(1.0) is None
    assert splash.update(1.0) is Screen.TITLE
    assert splash.update(1.0) is None


def test_skip():
    assert Splash().skip() is Screen.TITLE