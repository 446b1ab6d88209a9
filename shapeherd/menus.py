"""The game's menus, built from theme widgets."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from shapeherd.score import Score
from shapeherd.settings import GlobalVolume
from shapeherd.theme import (
    HEADER_TEXT,
    Column,
    Label,
    button,
    button_small,
    header,
    label,
)

Action = Callable[[], object]

GRID_COLUMN_WIDTH = 400
GRID_ROW_GAP = 10
GRID_COLUMN_GAP = 30
SCORE_FONT_SIZE = 20
SCORE_NAME_WIDTH = 100

CREATED_BY: Tuple[Tuple[str, str], ...] = (
    ("Joe Shmoe", "Implemented alligator wrestling AI"),
    ("Jane Doe", "Made the music for the alien invasion"),
)

ASSETS: Tuple[Tuple[str, str], ...] = (
    ("Shapes", "Drawn in code"),
    ("Button sounds", "Stock sound effects"),
    ("Music", "Stock music track"),
    ("Splash image", "Game logo"),
)


def credits_rows() -> List[Tuple[str, List[Tuple[str, str]]]]:
    """Credit sections: a heading and its (name, credit) pairs."""
    return [("Created by", list(CREATED_BY)), ("Assets", list(ASSETS))]


def _grid(name: str, rows: Sequence[Tuple[str, str]]) -> Column:
    cells = []
    for left, right in rows:
        left_label = label(left)
        left_label.width, left_label.justify = GRID_COLUMN_WIDTH, "end"
        right_label = label(right)
        right_label.width, right_label.justify = GRID_COLUMN_WIDTH, "start"
        cells.append((left_label, right_label))
    return Column(name, cells, gap=GRID_ROW_GAP, column_gap=GRID_COLUMN_GAP)


def credits_menu(on_back: Action) -> Column:
    children = []
    for heading, rows in credits_rows():
        children.append(header(heading))
        children.append(_grid("Grid", rows))
    children.append(button("Back", on_back))
    return Column("Credits Menu", children)


def main_menu(
    on_play: Action, on_settings: Action, on_exit: Optional[Action] = None
) -> Column:
    """The title screen menu; without ``on_exit`` there is no Exit button."""
    children = [button("Play", on_play), button("Settings", on_settings)]
    if on_exit is not None:
        children.append(button("Exit", on_exit))
    return Column("Main Menu", children)


def pause_menu(on_continue: Action, on_settings: Action, on_quit: Action) -> Column:
    return Column(
        "Pause Menu",
        [
            header("Game paused"),
            button("Continue", on_continue),
            button("Settings", on_settings),
            button("Quit to title", on_quit),
        ],
    )


def settings_menu(volume: GlobalVolume, on_back: Action) -> Column:
    """Master volume controls and a Back button."""
    name = label("Master Volume")
    name.width, name.justify = GRID_COLUMN_WIDTH, "end"
    volume_label = Label("", source=volume.label)
    volume_widget = (
        button_small("-", volume.lower),
        volume_label,
        button_small("+", volume.raise_volume),
    )
    grid = Column(
        "Settings Grid",
        [(name, volume_widget)],
        gap=GRID_ROW_GAP,
        column_gap=GRID_COLUMN_GAP,
    )
    return Column("Settings Menu", [header("Settings"), grid, button("Back", on_back)])


def score_menu(score: Score, on_quit: Action) -> Column:
    """The end-of-game tally and a way back to the title."""
    children = [header("Score")]
    for name, count in score.rows():
        children.append(
            (
                Label(
                    name,
                    font_size=SCORE_FONT_SIZE,
                    color=HEADER_TEXT,
                    width=SCORE_NAME_WIDTH,
                    justify="start",
                ),
                Label(
                    str(count),
                    font_size=SCORE_FONT_SIZE,
                    color=HEADER_TEXT,
                    justify="start",
                ),
            )
        )
    children.append(button("Quit to title", on_quit))
    return Column("Score", children)