"""The player ship: steering, thrust, drawing toggles and collisions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from shapeherd.enemy import Enemy, EnemyType
from shapeherd.path import DrawPath
from shapeherd.physics import Body, Vec2

MAX_SPEED = 300.0
FRICTION_TRANSVERSE = 1000.0
FRICTION_NEUTRAL = 50.0
FRICTION_BRAKE = 2000.0
FORWARD_ACCEL = 200.0
FORWARD_ACCEL_REVERSE = 800.0
PLAYER_COLOR = (255, 255, 255)

TRIANGLE = (Vec2(0.0, 8.0), Vec2(-5.0, -8.0), Vec2(5.0, -8.0))


def _cross(a: Vec2, b: Vec2) -> float:
    return a.x * b.y - a.y * b.x


def _distance_to_segment(point: Vec2, a: Vec2, b: Vec2) -> float:
    edge = b - a
    length_sq = edge.dot(edge)
    if length_sq == 0.0:
        return (point - a).length()
    t = min(max((point - a).dot(edge) / length_sq, 0.0), 1.0)
    return (point - (a + edge * t)).length()


def _inside_triangle(point: Vec2, vertices: Sequence[Vec2]) -> bool:
    signs = [
        _cross(b - a, point - a)
        for a, b in zip(vertices, list(vertices[1:]) + [vertices[0]])
    ]
    return all(s >= 0.0 for s in signs) or all(s <= 0.0 for s in signs)


def _circle_touches_triangle(center: Vec2, radius: float, vertices: Sequence[Vec2]) -> bool:
    if _inside_triangle(center, vertices):
        return True
    edges = zip(vertices, list(vertices[1:]) + [vertices[0]])
    return any(_distance_to_segment(center, a, b) < radius for a, b in edges)


@dataclass
class Player:
    """The triangle the player flies around to draw paths."""

    body: Body = field(default_factory=lambda: Body(max_speed=MAX_SPEED))
    rotation: float = 0.0
    draw: DrawPath = field(default_factory=DrawPath)

    @property
    def position(self) -> Vec2:
        return self.body.position

    def vertices(self) -> List[Vec2]:
        """The triangle's corners in world coordinates."""
        c, s = math.cos(self.rotation), math.sin(self.rotation)
        return [
            Vec2(v.x * c - v.y * s, v.x * s + v.y * c) + self.body.position
            for v in TRIANGLE
        ]

    def point_at(self, target: Vec2) -> float:
        """Turn the nose towards ``target``; return the new rotation."""
        direction = target - self.body.position
        if direction.length() == 0.0:
            return self.rotation
        self.rotation = Vec2(0.0, 1.0).angle_to(direction.normalize())
        return self.rotation

    def forward(self) -> Vec2:
        return Vec2.from_angle(self.rotation + math.pi / 2)

    def accelerate(self, forward_pressed: bool, brake_pressed: bool) -> Vec2:
        """Set the acceleration from thrust, brake and friction; return it."""
        forward = self.forward()
        velocity = self.body.velocity
        v_forward = velocity.dot(forward)
        if forward_pressed:
            a_forward = FORWARD_ACCEL if v_forward >= 0.0 else FORWARD_ACCEL_REVERSE
        elif brake_pressed:
            if v_forward > 0.0:
                a_forward = -FRICTION_BRAKE
            elif v_forward < 0.0:
                a_forward = FRICTION_BRAKE
            else:
                a_forward = 0.0
        elif v_forward < 0.0:
            a_forward = FRICTION_NEUTRAL
        elif v_forward > 0.0:
            a_forward = -FRICTION_NEUTRAL
        else:
            a_forward = 0.0

        transverse = forward.perp()
        v_transverse = velocity.dot(transverse)
        if v_transverse > 0.0:
            a_transverse = -FRICTION_TRANSVERSE
        elif v_transverse < 0.0:
            a_transverse = FRICTION_TRANSVERSE
        else:
            a_transverse = 0.0

        self.body.acceleration = (
            forward.normalize() * a_forward + transverse.normalize() * a_transverse
        )
        return self.body.acceleration

    def update(self, dt: float) -> None:
        self.body.integrate(dt)

    def toggle_drawing(self) -> bool:
        """Start drawing if idle, stop if drawing; return whether now active."""
        if self.draw.active:
            self.draw.deactivate()
        else:
            self.draw.activate()
        return self.draw.active

    def collide_walls(self, half_width: float, half_height: float) -> bool:
        """Push the ship back inside the window and stop it moving into walls."""
        collided = False
        walls = (
            (Vec2(-1.0, 0.0), lambda v: v.x - half_width),
            (Vec2(1.0, 0.0), lambda v: -half_width - v.x),
            (Vec2(0.0, -1.0), lambda v: v.y - half_height),
            (Vec2(0.0, 1.0), lambda v: -half_height - v.y),
        )
        for normal, depth in walls:
            penetration = max(depth(v) for v in self.vertices())
            if penetration <= 0.0:
                continue
            collided = True
            along = normal.perp()
            self.body.velocity = along * self.body.velocity.dot(along)
            self.body.position = self.body.position + normal * penetration
        return collided

    def hits_white(self, enemies: Iterable[Enemy]) -> bool:
        """Whether the ship touches a white enemy, which kills it."""
        vertices = self.vertices()
        return any(
            enemy.kind is EnemyType.WHITE
            and enemy.collider_enabled
            and _circle_touches_triangle(enemy.body.position, enemy.radius, vertices)
            for enemy in enemies
        )


def cursor_to_world(cursor: Vec2, window_size: Vec2, camera: Vec2 = Vec2()) -> Vec2:
    """Convert a window cursor position (y down) to world coordinates (y up)."""
    offset = cursor - window_size / 2.0
    return Vec2(offset.x, -offset.y) + camera