"""Two-dimensional vectors and the simple kinematics used by the game."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Vec2:
        """Return the unit vector in this direction; a zero vector has none."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            raise ValueError("cannot normalize a zero or non-finite vector")
        return self / length

    def normalize_or_zero(self) -> Vec2:
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return Vec2()
        return self / length

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def perp(self) -> Vec2:
        """The vector rotated a quarter turn counter-clockwise."""
        return Vec2(-self.y, self.x)

    @classmethod
    def from_angle(cls, angle: float) -> Vec2:
        return cls(math.cos(angle), math.sin(angle))

    def angle_to(self, other: Vec2) -> float:
        """Signed angle in radians that rotates this vector onto ``other``."""
        cross = self.x * other.y - self.y * other.x
        return math.atan2(cross, self.dot(other))

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return self + (other - self) * t


def clamp_speed(velocity: Vec2, max_speed: float) -> Vec2:
    """Scale ``velocity`` down so its length does not exceed ``max_speed``."""
    if velocity.length() > max_speed:
        return velocity.normalize() * max_speed
    return velocity


@dataclass
class Body:
    """A point mass moved by its velocity and acceleration."""

    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    acceleration: Vec2 = field(default_factory=Vec2)
    max_speed: Optional[float] = None

    def apply_acceleration(self, dt: float) -> None:
        self.velocity = self.velocity + self.acceleration * dt
        if self.max_speed is not None:
            self.velocity = clamp_speed(self.velocity, self.max_speed)

    def apply_velocity(self, dt: float) -> None:
        self.position = self.position + self.velocity * dt

    def integrate(self, dt: float) -> None:
        """Advance by ``dt`` seconds: acceleration first, then velocity."""
        self.apply_acceleration(dt)
        self.apply_velocity(dt)


@dataclass(frozen=True)
class FollowPlayer:
    """Pull towards the player (or push away, for a negative acceleration)."""

    acceleration: float
    distance: float

    def force(self, follower_position: Vec2, player_position: Vec2) -> Vec2:
        direction = player_position - follower_position
        if direction.length() < self.distance:
            return direction * self.acceleration
        return Vec2()


def _bounce_axis(
    position: float, velocity: float, limit: float, restitution: float
) -> Tuple[float, float]:
    limit = max(limit, 0.0)
    if position > limit:
        position = limit
        if velocity > 0.0:
            velocity = -velocity * restitution
    elif position < -limit:
        position = -limit
        if velocity < 0.0:
            velocity = -velocity * restitution
    return position, velocity


def bounce_in_bounds(
    position: Vec2,
    velocity: Vec2,
    radius: float,
    half_width: float,
    half_height: float,
    restitution: float,
) -> Tuple[Vec2, Vec2]:
    """Keep a circle inside a centred rectangle, reflecting it off the walls."""
    x, vx = _bounce_axis(position.x, velocity.x, half_width - radius, restitution)
    y, vy = _bounce_axis(position.y, velocity.y, half_height - radius, restitution)
    return Vec2(x, y), Vec2(vx, vy)