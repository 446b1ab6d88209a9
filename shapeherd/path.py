"""Paths drawn by the player, closing loops, and combining herded enemies."""

from __future__ import annotations

import enum
import math
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from shapeherd.enemy import Enemy, EnemyType, spawn_enemy
from shapeherd.physics import Vec2
from shapeherd.state import Timer, TimerMode

MAX_LIVE_PATHS = 4
COMBINE_RADIUS = 10.0
COMBINE_TIMEOUT = 0.5
EJECT_SPEED = 1000.0

Color = Tuple[int, int, int]


@dataclass(eq=False)
class DrawPath:
    """The pen state of whatever draws paths (the player)."""

    active: bool = False
    path: Optional[Path] = None

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False
        self.path = None

    def is_active_path(self, path: Path) -> bool:
        return self.path is not None and self.path is path


@dataclass(eq=False)
class Path:
    """A polyline; once it crosses itself it is closed into a polygon."""

    points: List[Vec2] = field(default_factory=list)
    remainder: Optional[List[Vec2]] = None
    closed: bool = False
    changed: bool = True
    pen: Optional[DrawPath] = None

    def swap_remainder(self) -> bool:
        """Replace the points with the saved remainder, if there is one."""
        if self.remainder is None:
            return False
        self.points = self.remainder
        self.remainder = None
        self.changed = True
        return True

    def segments(self) -> Iterator[Tuple[Vec2, Vec2]]:
        return zip(self.points, self.points[1:])

    def contains_point(self, point: Vec2) -> bool:
        """Whether ``point`` lies strictly inside the polygon the points outline."""
        if len(self.points) < 3:
            return False
        ring = list(zip(self.points, self.points[1:] + self.points[:1]))
        if any(_on_segment(point, a, b) for a, b in ring):
            return False
        inside = False
        for a, b in ring:
            if (a.y > point.y) != (b.y > point.y):
                x_cross = a.x + (point.y - a.y) * (b.x - a.x) / (b.y - a.y)
                if point.x < x_cross:
                    inside = not inside
        return inside


def _cross(a: Vec2, b: Vec2) -> float:
    return a.x * b.y - a.y * b.x


def _on_segment(point: Vec2, a: Vec2, b: Vec2) -> bool:
    if _cross(b - a, point - a) != 0.0:
        return False
    return (
        min(a.x, b.x) <= point.x <= max(a.x, b.x)
        and min(a.y, b.y) <= point.y <= max(a.y, b.y)
    )


def _segment_crossing(p1: Vec2, p2: Vec2, p3: Vec2, p4: Vec2) -> Optional[Vec2]:
    """Crossing point of two segments, ignoring crossings at any end point."""
    r = p2 - p1
    s = p4 - p3
    denom = _cross(r, s)
    if denom == 0.0:
        return None
    offset = p3 - p1
    t = _cross(offset, s) / denom
    u = _cross(offset, r) / denom
    if 0.0 < t < 1.0 and 0.0 < u < 1.0:
        return p1 + r * t
    return None


def find_self_intersection(
    points: Sequence[Vec2],
) -> Optional[Tuple[Vec2, Tuple[int, int]]]:
    """The first crossing of two segments of a polyline, with their indices."""
    for j in range(2, len(points) - 1):
        for i in range(j - 1):
            crossing = _segment_crossing(points[i], points[i + 1], points[j], points[j + 1])
            if crossing is not None:
                return crossing, (i, j)
    return None


def close_path(path: Path) -> bool:
    """Close ``path`` at its first self-crossing; return whether it closed."""
    found = find_self_intersection(path.points)
    if found is None:
        return False
    point, (first, second) = found
    loop = path.points[first:second] + [point]
    remainder = path.points[:first] + path.points[second:]
    if len(remainder) > len(loop):
        path.remainder = remainder
    path.points = loop
    path.closed = True
    path.changed = True
    return True


@dataclass(eq=False)
class Combine:
    """Enemies that merge into one new enemy."""

    entities: List[Enemy]
    new_type: EnemyType
    velocity: Vec2


def _average_velocity(enemies: Sequence[Enemy]) -> Vec2:
    total = Vec2()
    for enemy in enemies:
        total = total + enemy.body.velocity
    return total / len(enemies)


def plan_combines(surrounded: Sequence[Enemy]) -> Tuple[List[Combine], List[Enemy]]:
    """Decide which surrounded enemies combine and which explode."""
    remaining = list(surrounded)
    combines: List[Combine] = []
    explode: List[Enemy] = []

    def take(predicate) -> Optional[Enemy]:
        for index, other in enumerate(remaining):
            if predicate(other.kind):
                return remaining.pop(index)
        return None

    while remaining:
        enemy = remaining.pop()
        kind = enemy.kind

        complement = kind.complement()
        partner = take(lambda other: other is complement)
        if partner is not None:
            combines.append(
                Combine(
                    entities=[enemy, partner],
                    new_type=kind.pair_combine(partner.kind),
                    velocity=_average_velocity([enemy, partner]),
                )
            )
            continue

        required = [EnemyType.RED, EnemyType.BLUE, EnemyType.GREEN]
        if kind not in required:
            explode.append(enemy)
            continue
        required.remove(kind)
        first = take(lambda other: other in required)
        if first is None:
            explode.append(enemy)
            continue
        required.remove(first.kind)
        second = take(lambda other: other is required[0])
        if second is None:
            combines.append(
                Combine(
                    entities=[enemy, first],
                    new_type=kind.pair_combine(first.kind),
                    velocity=_average_velocity([enemy, first]),
                )
            )
            continue
        combines.append(
            Combine(
                entities=[enemy, first, second],
                new_type=EnemyType.WHITE,
                velocity=_average_velocity([enemy, first, second]),
            )
        )
    return combines, explode


class AnimationPhase(enum.Enum):
    INITIALIZE = enum.auto()
    MOVE_TO_CENTER = enum.auto()
    EJECT = enum.auto()
    DONE = enum.auto()
    FINISHED = enum.auto()


def _contains(enemies: Sequence[Enemy], enemy: Enemy) -> bool:
    return any(other is enemy for other in enemies)


class CombineAnimation:
    """Pull surrounded enemies together, then merge or scatter them."""

    def __init__(self, combines: List[Combine], explode: List[Enemy]) -> None:
        self.combines = combines
        self.explode = explode
        self.phase = AnimationPhase.INITIALIZE
        self.center = Vec2()
        self.targets: List[Tuple[Enemy, Vec2]] = []
        self.timer = Timer(COMBINE_TIMEOUT, TimerMode.ONCE)

    @property
    def finished(self) -> bool:
        return self.phase is AnimationPhase.FINISHED

    def _members(self) -> List[Enemy]:
        members = [enemy for combine in self.combines for enemy in combine.entities]
        return members + list(self.explode)

    def update(
        self, dt: float, enemies: List[Enemy], rng: Optional[random.Random] = None
    ) -> Tuple[bool, int]:
        """Advance one phase step.

        Returns whether all paths should be cleared and how many new waves
        of enemies to spawn.
        """
        rng = rng if rng is not None else random.Random()
        if self.phase is AnimationPhase.INITIALIZE:
            members = self._members()
            total = Vec2()
            for enemy in members:
                enemy.collider_enabled = False
                if _contains(enemies, enemy):
                    total = total + enemy.body.position
            count = len(members)
            self.center = total / count if count else Vec2()
            self.targets = [
                (
                    enemy,
                    self.center
                    + Vec2.from_angle(2.0 * math.pi * index / count) * COMBINE_RADIUS,
                )
                for index, enemy in enumerate(members)
            ]
            self.phase = AnimationPhase.MOVE_TO_CENTER
            return False, 0

        if self.phase is AnimationPhase.MOVE_TO_CENTER:
            factor = 1.0 - math.exp(-10.0 * dt)
            for enemy, target in self.targets:
                enemy.body.position = enemy.body.position.lerp(target, factor)
            if self.timer.tick(dt).finished():
                self.timer.reset()
                self.phase = AnimationPhase.EJECT
            return False, 0

        if self.phase is AnimationPhase.EJECT:
            for enemy in self.explode:
                enemy.collider_enabled = True
                if not _contains(enemies, enemy):
                    continue
                enemy.body.velocity = Vec2(
                    rng.uniform(-EJECT_SPEED, EJECT_SPEED),
                    rng.uniform(-EJECT_SPEED, EJECT_SPEED),
                )
            self.phase = AnimationPhase.DONE
            return bool(self.explode), 0

        if self.phase is AnimationPhase.DONE:
            waves = 0
            for combine in self.combines:
                doomed = {id(enemy) for enemy in combine.entities}
                enemies[:] = [enemy for enemy in enemies if id(enemy) not in doomed]
                enemies.append(spawn_enemy(combine.new_type, self.center, combine.velocity))
                if combine.new_type is EnemyType.WHITE:
                    waves += 1
            self.phase = AnimationPhase.FINISHED
            return False, waves

        raise RuntimeError("animation has already finished")


class PathField:
    """All live paths, oldest first, and the combine animations in progress."""

    def __init__(self) -> None:
        self.paths: List[Path] = []
        self.animations: List[CombineAnimation] = []

    def _is_live(self, path: Optional[Path]) -> bool:
        return path is not None and any(live is path for live in self.paths)

    def record(self, pen: DrawPath, position: Vec2) -> None:
        """Extend the pen's path with ``position``, starting a new one if needed."""
        if not pen.active:
            return
        path = pen.path
        if path is not None and self._is_live(path):
            if not path.points:
                path.points.append(position)
                return
            if position != path.points[-1]:
                path.points.append(position)
                path.changed = True
            return
        new_path = Path(points=[position], pen=pen)
        self.paths.append(new_path)
        pen.path = new_path

    def find_intersections(self) -> List[Path]:
        """Close every open path that crosses itself; return those closed."""
        return [path for path in self.paths if not path.closed and close_path(path)]

    def check_areas(self, pen: DrawPath, enemies: Sequence[Enemy]) -> List[CombineAnimation]:
        """Look for enemies inside newly closed paths and start animations."""
        started = []
        for path in list(self.paths):
            if not (path.closed and path.changed):
                continue
            path.changed = False
            surrounded = [
                enemy
                for enemy in enemies
                if enemy.collider_enabled and path.contains_point(enemy.body.position)
            ]
            if not surrounded:
                if pen.is_active_path(path):
                    if path.swap_remainder():
                        path.closed = False
                    else:
                        pen.deactivate()
            elif len(surrounded) == 1:
                pen.deactivate()
            else:
                combines, explode = plan_combines(surrounded)
                animation = CombineAnimation(combines, explode)
                self.animations.append(animation)
                started.append(animation)
        return started

    def despawn_old_paths(self) -> None:
        if len(self.paths) > MAX_LIVE_PATHS:
            self.paths.pop(0)

    def animate(
        self, dt: float, enemies: List[Enemy], rng: Optional[random.Random] = None
    ) -> int:
        """Advance every animation; return how many enemy waves to spawn."""
        waves = 0
        for animation in list(self.animations):
            clear, spawned = animation.update(dt, enemies, rng)
            if clear:
                self.clear()
            waves += spawned
            if animation.finished:
                self.animations.remove(animation)
        return waves

    def shade(self, path: Path, pen: DrawPath) -> Color:
        """Drawing colour: white for the pen's path, older paths darker."""
        if pen.is_active_path(path):
            return (255, 255, 255)
        index = next((i for i, live in enumerate(self.paths) if live is path), 0)
        lightness = 0.6 - 0.075 * (len(self.paths) - index)
        level = round(min(max(lightness, 0.0), 1.0) * 255)
        return (level, level, level)

    def clear(self) -> None:
        self.paths.clear()