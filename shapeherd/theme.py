"""Reusable UI widgets, colours and interaction feedback."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import pygame

Color = Tuple[int, int, int]

LABEL_TEXT: Color = (0xDD, 0xD3, 0x69)
HEADER_TEXT: Color = (0xFC, 0xFB, 0xCC)
BUTTON_TEXT: Color = (0xEC, 0xEC, 0xEC)
BUTTON_BACKGROUND: Color = (0x46, 0x66, 0xBF)
BUTTON_HOVERED_BACKGROUND: Color = (0x62, 0x99, 0xD1)
BUTTON_PRESSED_BACKGROUND: Color = (0x3D, 0x49, 0x99)

HEADER_FONT_SIZE = 40
LABEL_FONT_SIZE = 24
BUTTON_FONT_SIZE = 40
ROW_GAP = 20
COLUMN_GAP = 30

_CHAR_WIDTH = 0.55
_LINE_HEIGHT = 1.2


class Interaction(enum.Enum):
    """Pointer state of an interactive widget."""

    NONE = enum.auto()
    HOVERED = enum.auto()
    PRESSED = enum.auto()


@dataclass(frozen=True)
class InteractionPalette:
    """Background colours for each interaction state."""

    none: Color
    hovered: Color
    pressed: Color

    def color(self, interaction: Interaction) -> Color:
        if interaction is Interaction.HOVERED:
            return self.hovered
        if interaction is Interaction.PRESSED:
            return self.pressed
        return self.none


DEFAULT_PALETTE = InteractionPalette(
    none=BUTTON_BACKGROUND,
    hovered=BUTTON_HOVERED_BACKGROUND,
    pressed=BUTTON_PRESSED_BACKGROUND,
)


@functools.lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def _blit_text(
    surface: pygame.Surface,
    text: str,
    size: float,
    color: Color,
    rect: pygame.Rect,
    justify: str = "center",
) -> None:
    rendered = _font(int(size)).render(text, True, color)
    box = rendered.get_rect()
    box.centery = rect.centery
    if justify == "start":
        box.left = rect.left
    elif justify == "end":
        box.right = rect.right
    else:
        box.centerx = rect.centerx
    surface.blit(rendered, box)


@dataclass(eq=False)
class Label:
    """A line of text; ``source`` supplies text that changes over time."""

    text: str
    font_size: float = LABEL_FONT_SIZE
    color: Color = LABEL_TEXT
    width: Optional[int] = None
    justify: str = "center"
    source: Optional[Callable[[], str]] = None
    rect: Optional[pygame.Rect] = None

    @property
    def display_text(self) -> str:
        return self.source() if self.source is not None else self.text

    def _size(self) -> Tuple[int, int]:
        width = self.width
        if width is None:
            width = int(round(len(self.display_text) * self.font_size * _CHAR_WIDTH))
        return width, int(round(self.font_size * _LINE_HEIGHT))

    def _draw(self, surface: pygame.Surface) -> None:
        if self.rect is not None:
            _blit_text(
                surface, self.display_text, self.font_size, self.color, self.rect, self.justify
            )


@dataclass(eq=False)
class Button:
    """A clickable box whose background follows its interaction state."""

    text: str
    action: Callable[[], object]
    width: int = 380
    height: int = 80
    rounded: bool = True
    palette: InteractionPalette = DEFAULT_PALETTE
    font_size: float = BUTTON_FONT_SIZE
    interaction: Interaction = Interaction.NONE
    rect: Optional[pygame.Rect] = None
    hover_sound: Optional[Callable[[], None]] = None
    click_sound: Optional[Callable[[], None]] = None

    @property
    def background(self) -> Color:
        return self.palette.color(self.interaction)

    def _size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _contains(self, position: Sequence[float]) -> bool:
        if self.rect is None:
            return False
        x, y = position
        return bool(self.rect.collidepoint(int(x), int(y)))

    def update_interaction(self, mouse_pos: Sequence[float], pressed: bool) -> Interaction:
        """Set the state from the pointer; play the hover sound on entering."""
        inside = self._contains(mouse_pos)
        if inside and pressed:
            new = Interaction.PRESSED
        elif inside:
            new = Interaction.HOVERED
        else:
            new = Interaction.NONE
        if (
            new is not Interaction.NONE
            and self.interaction is Interaction.NONE
            and self.hover_sound is not None
        ):
            self.hover_sound()
        self.interaction = new
        return new

    def click(self) -> object:
        if self.click_sound is not None:
            self.click_sound()
        return self.action()

    def _draw(self, surface: pygame.Surface) -> None:
        if self.rect is None:
            return
        radius = self.rect.height // 2 if self.rounded else 0
        pygame.draw.rect(surface, self.background, self.rect, border_radius=radius)
        _blit_text(surface, self.text, self.font_size, BUTTON_TEXT, self.rect)


Widget = Union[Label, Button]
Child = Union[Label, Button, "Column", Tuple["Child", ...]]


def _measure(child: Child, column_gap: int) -> Tuple[int, int]:
    if isinstance(child, (Label, Button)):
        return child._size()
    if isinstance(child, Column):
        return child._content_size()
    sizes = [_measure(item, column_gap) for item in child]
    width = sum(w for w, _ in sizes) + column_gap * max(len(sizes) - 1, 0)
    return width, max((h for _, h in sizes), default=0)


def _place(child: Child, x: int, y: int, column_gap: int) -> pygame.Rect:
    width, height = _measure(child, column_gap)
    rect = pygame.Rect(x, y, width, height)
    if isinstance(child, (Label, Button)):
        child.rect = rect
    elif isinstance(child, Column):
        child._place_children(x, y, width)
        child.rect = rect
    else:
        cursor = x
        for item in child:
            item_width, item_height = _measure(item, column_gap)
            _place(item, cursor, y + (height - item_height) // 2, column_gap)
            cursor += item_width + column_gap
    return rect


def _leaves(child: Child) -> Iterator[Widget]:
    if isinstance(child, (Label, Button)):
        yield child
    elif isinstance(child, Column):
        yield from child
    else:
        for item in child:
            yield from _leaves(item)


@dataclass(eq=False)
class Column:
    """A vertical stack of widgets; tuples inside it are horizontal rows."""

    name: str
    children: List[Child] = field(default_factory=list)
    gap: int = ROW_GAP
    column_gap: int = COLUMN_GAP
    background: Optional[Color] = None
    rect: Optional[pygame.Rect] = None

    def __iter__(self) -> Iterator[Widget]:
        """Every label and button, in layout order."""
        for child in self.children:
            yield from _leaves(child)

    def _content_size(self) -> Tuple[int, int]:
        sizes = [_measure(child, self.column_gap) for child in self.children]
        width = max((w for w, _ in sizes), default=0)
        height = sum(h for _, h in sizes) + self.gap * max(len(sizes) - 1, 0)
        return width, height

    def _place_children(self, x: int, y: int, width: int) -> List[pygame.Rect]:
        rects = []
        cursor = y
        for child in self.children:
            child_width, child_height = _measure(child, self.column_gap)
            rects.append(
                _place(child, x + (width - child_width) // 2, cursor, self.column_gap)
            )
            cursor += child_height + self.gap
        return rects

    def layout(self, width: int, height: int) -> List[pygame.Rect]:
        """Fill a window of this size, centring the content; return child rects."""
        _, content_height = self._content_size()
        rects = self._place_children(0, (height - content_height) // 2, width)
        self.rect = pygame.Rect(0, 0, width, height)
        return rects

    def draw(self, surface: pygame.Surface) -> None:
        if self.background is not None:
            if self.rect is not None:
                surface.fill(self.background, self.rect)
            else:
                surface.fill(self.background)
        for widget in self:
            widget._draw(surface)

    def handle_click(self, position: Sequence[float]) -> bool:
        """Click the button under ``position``; return whether one was hit."""
        for widget in self:
            if isinstance(widget, Button) and widget._contains(position):
                widget.click()
                return True
        return False


def header(text: str) -> Label:
    """A large header label."""
    return Label(text, font_size=HEADER_FONT_SIZE, color=HEADER_TEXT)


def label(text: str) -> Label:
    """A plain text label."""
    return Label(text, font_size=LABEL_FONT_SIZE, color=LABEL_TEXT)


def button(text: str, action: Callable[[], object]) -> Button:
    """A large rounded button."""
    return Button(text, action, width=380, height=80, rounded=True)


def button_small(text: str, action: Callable[[], object]) -> Button:
    """A small square button."""
    return Button(text, action, width=30, height=30, rounded=False)