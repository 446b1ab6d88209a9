"""Enemy kinds, how they combine, and how they spawn and move."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from shapeherd.physics import Body, FollowPlayer, Vec2, bounce_in_bounds
from shapeherd.rng_bag import RngBag

SHAPE_LENGTH = 20.0
MAX_LINEAR_SPEED = 100.0
MAX_SPAWN_VELOCITY = 100.0
RESTITUTION = 0.8
SPAWN_MARGIN = 20.0

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Shape:
    """Outline of an enemy: a polygon, or a circle when there are no vertices."""

    kind: str
    vertices: Tuple[Vec2, ...] = ()
    radius: Optional[float] = None


def _regular_polygon(circumradius: float, sides: int) -> Tuple[Vec2, ...]:
    step = 2.0 * math.pi / sides
    return tuple(
        Vec2.from_angle(math.pi / 2 + i * step) * circumradius for i in range(sides)
    )


def _rectangle(width: float, height: float) -> Tuple[Vec2, ...]:
    hw, hh = width / 2.0, height / 2.0
    return (Vec2(hw, hh), Vec2(-hw, hh), Vec2(-hw, -hh), Vec2(hw, -hh))


def _triangle(half_base: float, height: float) -> Tuple[Vec2, ...]:
    return (Vec2(0.0, height), Vec2(-half_base, -height), Vec2(half_base, -height))


class EnemyType(enum.Enum):
    """The colour of an enemy; NONE is never spawned."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    YELLOW = "yellow"
    CYAN = "cyan"
    WHITE = "white"
    NONE = "none"

    def _require_spawnable(self) -> None:
        if self is EnemyType.NONE:
            raise ValueError("EnemyType.NONE has no enemy")

    def pair_combine(self, other: EnemyType) -> Optional[EnemyType]:
        """The kind two enemies merge into, or None if they do not merge."""
        return _PAIRS.get(frozenset((self, other)))

    def complement(self) -> EnemyType:
        self._require_spawnable()
        return _COMPLEMENTS[self]

    def color(self) -> Color:
        self._require_spawnable()
        return _COLORS[self]

    def shape(self) -> Shape:
        self._require_spawnable()
        length = SHAPE_LENGTH
        if self is EnemyType.RED:
            return Shape("triangle", _triangle(length / 2, length * math.cos(math.pi / 3)))
        if self is EnemyType.GREEN:
            return Shape("hexagon", _regular_polygon(0.55 * length, 6))
        if self is EnemyType.BLUE:
            return Shape("square", _rectangle(length, length))
        if self is EnemyType.PURPLE:
            return Shape("hexagon", _regular_polygon(1.1 * length, 6))
        if self is EnemyType.YELLOW:
            return Shape("square", _rectangle(2 * length, 2 * length))
        if self is EnemyType.CYAN:
            return Shape("triangle", _triangle(length, 2 * length * math.cos(math.pi / 3)))
        return Shape("circle", radius=0.75 * length)

    def collider_radius(self) -> float:
        self._require_spawnable()
        return 15.0 if self is EnemyType.WHITE else 10.0

    def follow(self) -> Optional[FollowPlayer]:
        """Green enemies flee the player and blue ones chase it."""
        if self is EnemyType.GREEN:
            return FollowPlayer(acceleration=-2000.0, distance=150.0)
        if self is EnemyType.BLUE:
            return FollowPlayer(acceleration=2000.0, distance=150.0)
        return None


_PAIRS = {
    frozenset((EnemyType.RED, EnemyType.GREEN)): EnemyType.YELLOW,
    frozenset((EnemyType.RED, EnemyType.BLUE)): EnemyType.PURPLE,
    frozenset((EnemyType.GREEN, EnemyType.BLUE)): EnemyType.CYAN,
    frozenset((EnemyType.RED, EnemyType.CYAN)): EnemyType.WHITE,
    frozenset((EnemyType.GREEN, EnemyType.PURPLE)): EnemyType.WHITE,
    frozenset((EnemyType.BLUE, EnemyType.YELLOW)): EnemyType.WHITE,
}

_COMPLEMENTS = {
    EnemyType.RED: EnemyType.CYAN,
    EnemyType.GREEN: EnemyType.PURPLE,
    EnemyType.BLUE: EnemyType.YELLOW,
    EnemyType.PURPLE: EnemyType.GREEN,
    EnemyType.YELLOW: EnemyType.BLUE,
    EnemyType.CYAN: EnemyType.RED,
    EnemyType.WHITE: EnemyType.NONE,
}

_COLORS = {
    EnemyType.RED: (239, 68, 68),
    EnemyType.GREEN: (34, 197, 94),
    EnemyType.BLUE: (59, 130, 246),
    EnemyType.PURPLE: (168, 85, 247),
    EnemyType.YELLOW: (234, 179, 8),
    EnemyType.CYAN: (6, 182, 212),
    EnemyType.WHITE: (243, 244, 246),
}


@dataclass
class Enemy:
    """A spawned enemy with its physical body."""

    kind: EnemyType
    body: Body = field(default_factory=lambda: Body(max_speed=MAX_LINEAR_SPEED))
    follow: Optional[FollowPlayer] = None
    collider_enabled: bool = True

    @property
    def radius(self) -> float:
        return self.kind.collider_radius()

    @property
    def mass(self) -> float:
        return math.pi * self.radius**2

    def step(
        self,
        dt: float,
        player_position: Optional[Vec2] = None,
        half_width: Optional[float] = None,
        half_height: Optional[float] = None,
    ) -> None:
        """Apply the follow force, move, and bounce off the window walls."""
        if self.follow is not None and player_position is not None:
            force = self.follow.force(self.body.position, player_position)
            self.body.acceleration = force / self.mass
        else:
            self.body.acceleration = Vec2()
        self.body.integrate(dt)
        if self.collider_enabled and half_width is not None and half_height is not None:
            self.body.position, self.body.velocity = bounce_in_bounds(
                self.body.position,
                self.body.velocity,
                self.radius,
                half_width,
                half_height,
                RESTITUTION,
            )


def spawn_enemy(kind: EnemyType, position: Vec2, velocity: Vec2) -> Enemy:
    if kind is EnemyType.NONE:
        raise ValueError("cannot spawn an enemy of type NONE")
    body = Body(position=position, velocity=velocity, max_speed=MAX_LINEAR_SPEED)
    return Enemy(kind=kind, body=body, follow=kind.follow())


def spawn_wave(
    existing_count: int,
    width: float,
    height: float,
    rng: Optional[random.Random] = None,
) -> List[Enemy]:
    """Spawn three primaries if few enemies remain, otherwise six."""
    rng = rng if rng is not None else random.Random()
    bag = RngBag([EnemyType.RED, EnemyType.BLUE, EnemyType.GREEN], rng)
    count = 3 if existing_count < 3 else 6
    max_x = width / 2.0 - SPAWN_MARGIN
    max_y = height / 2.0 - SPAWN_MARGIN
    wave = []
    for _ in range(count):
        kind = bag.get()
        position = Vec2(rng.uniform(-max_x, max_x), rng.uniform(-max_y, max_y))
        velocity = Vec2(
            rng.uniform(-MAX_SPAWN_VELOCITY, MAX_SPAWN_VELOCITY),
            rng.uniform(-MAX_SPAWN_VELOCITY, MAX_SPAWN_VELOCITY),
        )
        wave.append(spawn_enemy(kind, position, velocity))
    return wave