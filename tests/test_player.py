import math

import pytest

from shapeherd.enemy import EnemyType, spawn_enemy
from shapeherd.physics import Body, Vec2
from shapeherd.player import (
    FORWARD_ACCEL,
    FORWARD_ACCEL_REVERSE,
    FRICTION_BRAKE,
    FRICTION_NEUTRAL,
    FRICTION_TRANSVERSE,
    MAX_SPEED,
    Player,
    cursor_to_world,
)


def _xy(v):
    return (v.x, v.y)


@pytest.mark.parametrize("target", [Vec2(1, 0), Vec2(0, -3), Vec2(-2, 5), Vec2(7, 7)])
def test_point_at_makes_forward_face_target(target):
    player = Player()
    player.point_at(target)
    forward = player.forward()
    expected = target.normalize()
    assert forward.x == pytest.approx(expected.x, abs=1e-9)
    assert forward.y == pytest.approx(expected.y, abs=1e-9)


def test_point_at_own_position_keeps_rotation():
    player = Player(rotation=0.3)
    assert player.point_at(Vec2()) == 0.3


def test_default_forward_is_up():
    forward = Player().forward()
    assert forward.x == pytest.approx(0.0, abs=1e-9)
    assert forward.y == pytest.approx(1.0, abs=1e-9)


def test_thrust_from_rest():
    player = Player()
    a = player.accelerate(True, False)
    assert a.x == pytest.approx(0.0, abs=1e-9)
    assert a.y == pytest.approx(FORWARD_ACCEL, abs=1e-9)


def test_thrust_while_reversing_is_stronger():
    player = Player(body=Body(velocity=Vec2(0, -10), max_speed=MAX_SPEED))
    a = player.accelerate(True, False)
    assert a.x == pytest.approx(0.0, abs=1e-9)
    assert a.y == pytest.approx(FORWARD_ACCEL_REVERSE, abs=1e-9)


def test_brake_opposes_forward_motion():
    player = Player(body=Body(velocity=Vec2(0, 10), max_speed=MAX_SPEED))
    a = player.accelerate(False, True)
    assert a.x == pytest.approx(0.0, abs=1e-9)
    assert a.y == pytest.approx(-FRICTION_BRAKE, abs=1e-9)


def test_neutral_friction_and_transverse_friction():
    player = Player(body=Body(velocity=Vec2(5, 10), max_speed=MAX_SPEED))
    a = player.accelerate(False, False)
    forward = player.forward()
    expected = forward * -FRICTION_NEUTRAL + forward.perp() * FRICTION_TRANSVERSE
    assert _xy(a) == pytest.approx(_xy(expected), abs=1e-9)


def test_speed_never_exceeds_max():
    player = Player()
    for _ in range(200):
        player.accelerate(True, False)
        player.update(0.1)
    assert player.body.velocity.length() <= MAX_SPEED + 1e-9


def test_toggle_drawing():
    player = Player()
    assert player.toggle_drawing() is True
    assert player.toggle_drawing() is False
    assert player.draw.path is None


def test_collide_right_wall():
    player = Player(body=Body(position=Vec2(395, 0), velocity=Vec2(50, 20), max_speed=MAX_SPEED))
    player.point_at(Vec2(1000, 0))
    assert player.collide_walls(400, 300) is True
    assert max(v.x for v in player.vertices()) <= 400 + 1e-9
    assert _xy(player.body.velocity) == pytest.approx((0.0, 20.0), abs=1e-9)


def test_no_collision_inside():
    player = Player(body=Body(velocity=Vec2(3, 4), max_speed=MAX_SPEED))
    assert player.collide_walls(400, 300) is False
    assert _xy(player.body.velocity) == pytest.approx((3.0, 4.0), abs=1e-9)


def test_hits_white_only():
    player = Player()
    assert player.hits_white([spawn_enemy(EnemyType.WHITE, Vec2(), Vec2())]) is True
    assert player.hits_white([spawn_enemy(EnemyType.RED, Vec2(), Vec2())]) is False
    assert player.hits_white([spawn_enemy(EnemyType.WHITE, Vec2(500, 0), Vec2())]) is False


def test_disabled_white_is_harmless():
    enemy = spawn_enemy(EnemyType.WHITE, Vec2(), Vec2())
    enemy.collider_enabled = False
    assert Player().hits_white([enemy]) is False


def test_cursor_center_maps_to_camera():
    world = cursor_to_world(Vec2(400, 300), Vec2(800, 600), Vec2(12, -7))
    assert world.x == pytest.approx(12.0, abs=1e-9)
    assert world.y == pytest.approx(-7.0, abs=1e-9)


def test_cursor_y_is_flipped():
    size = Vec2(800, 600)
    upper = cursor_to_world(Vec2(400, 100), size)
    lower = cursor_to_world(Vec2(400, 500), size)
    assert upper.y > lower.y
    assert math.isclose(upper.y, -lower.y)