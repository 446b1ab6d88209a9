import random

import pytest

from shapeherd.enemy import EnemyType, spawn_enemy
from shapeherd.path import (
    AnimationPhase,
    CombineAnimation,
    DrawPath,
    Path,
    PathField,
    close_path,
    find_self_intersection,
    plan_combines,
)
from shapeherd.physics import Vec2


def enemy(kind, x=0.0, y=0.0, vx=0.0, vy=0.0):
    return spawn_enemy(kind, Vec2(x, y), Vec2(vx, vy))


SQUARE = [Vec2(0, 0), Vec2(10, 0), Vec2(10, 10), Vec2(0, 10)]


def test_draw_path_activate_and_deactivate():
    pen = DrawPath()
    path = Path()
    pen.activate()
    pen.path = path
    assert pen.active
    assert pen.is_active_path(path)
    assert not pen.is_active_path(Path())
    pen.deactivate()
    assert not pen.active
    assert pen.path is None
    assert not pen.is_active_path(path)


def test_swap_remainder():
    path = Path(points=list(SQUARE), remainder=[Vec2(1, 1), Vec2(2, 2)])
    assert path.swap_remainder()
    assert path.points == [Vec2(1, 1), Vec2(2, 2)]
    assert path.remainder is None
    assert not path.swap_remainder()


def test_contains_point_interior_exterior_boundary():
    path = Path(points=list(SQUARE))
    assert path.contains_point(Vec2(5, 5))
    assert not path.contains_point(Vec2(15, 5))
    assert not path.contains_point(Vec2(0, 5))


def test_segments_pairs_consecutive_points():
    path = Path(points=list(SQUARE))
    segments = list(path.segments())
    assert len(segments) == len(SQUARE) - 1
    assert segments[0] == (SQUARE[0], SQUARE[1])


def test_find_self_intersection_cross():
    points = [Vec2(0, 0), Vec2(10, 10), Vec2(10, 0), Vec2(0, 10)]
    point, indices = find_self_intersection(points)
    assert indices == (0, 2)
    assert point.x == pytest.approx(5.0)
    assert point.y == pytest.approx(5.0)


def test_find_self_intersection_none_for_open_polyline():
    assert find_self_intersection(SQUARE) is None
    assert find_self_intersection([Vec2(0, 0), Vec2(1, 1)]) is None


def test_close_path_keeps_loop_and_marks_closed():
    points = [Vec2(-20, -20), Vec2(20, -20), Vec2(20, 20), Vec2(-20, 20), Vec2(-10, -30)]
    path = Path(points=list(points))
    assert close_path(path)
    assert path.closed
    assert path.points[:3] == points[:3]
    assert len(path.points) == 4
    assert path.remainder is None
    # the crossing lies on the first segment
    assert path.points[-1].y == pytest.approx(points[0].y)


def test_close_path_open_path_unchanged():
    path = Path(points=list(SQUARE))
    assert not close_path(path)
    assert not path.closed
    assert path.points == SQUARE


def test_plan_complements_combine_to_white():
    red = enemy(EnemyType.RED, vx=10)
    cyan = enemy(EnemyType.CYAN, vx=30)
    combines, explode = plan_combines([red, cyan])
    assert explode == []
    assert len(combines) == 1
    assert combines[0].new_type is EnemyType.WHITE
    assert {id(e) for e in combines[0].entities} == {id(red), id(cyan)}
    assert combines[0].velocity == (red.body.velocity + cyan.body.velocity) / 2


def test_plan_two_primaries_combine_pairwise():
    red = enemy(EnemyType.RED)
    green = enemy(EnemyType.GREEN)
    combines, explode = plan_combines([red, green])
    assert explode == []
    assert [c.new_type for c in combines] == [EnemyType.YELLOW]


def test_plan_three_primaries_make_white():
    kinds = [EnemyType.RED, EnemyType.GREEN, EnemyType.BLUE]
    enemies = [enemy(k, vx=i * 3.0) for i, k in enumerate(kinds)]
    combines, explode = plan_combines(enemies)
    assert explode == []
    assert len(combines) == 1
    assert combines[0].new_type is EnemyType.WHITE
    assert len(combines[0].entities) == 3


def test_plan_unmatched_enemies_explode():
    red = enemy(EnemyType.RED)
    purple = enemy(EnemyType.PURPLE)
    combines, explode = plan_combines([red, purple])
    assert combines == []
    assert [e.kind for e in explode] == [EnemyType.PURPLE, EnemyType.RED]


def test_combine_animation_runs_to_merge():
    red = enemy(EnemyType.RED, 0, 0)
    cyan = enemy(EnemyType.CYAN, 10, 0)
    enemies = [red, cyan]
    combines, explode = plan_combines(enemies)
    anim = CombineAnimation(combines, explode)
    rng = random.Random(1)

    assert anim.update(0.1, enemies, rng) == (False, 0)
    assert anim.phase is AnimationPhase.MOVE_TO_CENTER
    assert not red.collider_enabled and not cyan.collider_enabled
    assert anim.center == (red.body.position + cyan.body.position) / 2

    before = (red.body.position - anim.center).length()
    anim.update(0.6, enemies, rng)
    assert anim.phase is AnimationPhase.EJECT
    assert (red.body.position - anim.center).length() < before

    assert anim.update(0.1, enemies, rng) == (False, 0)
    assert anim.phase is AnimationPhase.DONE

    assert anim.update(0.1, enemies, rng) == (False, 1)
    assert anim.finished
    assert len(enemies) == 1
    assert enemies[0].kind is EnemyType.WHITE
    assert enemies[0].body.position == anim.center


def test_combine_animation_ejects_exploded():
    red = enemy(EnemyType.RED, 0, 0)
    purple = enemy(EnemyType.PURPLE, 4, 4)
    enemies = [red, purple]
    anim = CombineAnimation(*plan_combines(enemies))
    rng = random.Random(7)
    anim.update(0.1, enemies, rng)
    anim.update(1.0, enemies, rng)
    clear, waves = anim.update(0.1, enemies, rng)
    assert clear is True
    assert waves == 0
    for e in enemies:
        assert e.collider_enabled
        assert abs(e.body.velocity.x) <= 1000 and abs(e.body.velocity.y) <= 1000
    anim.update(0.1, enemies, rng)
    assert len(enemies) == 2
    with pytest.raises(RuntimeError):
        anim.update(0.1, enemies, rng)


def test_record_starts_and_extends_path():
    field = PathField()
    pen = DrawPath()
    field.record(pen, Vec2(0, 0))
    assert field.paths == []
    pen.activate()
    field.record(pen, Vec2(0, 0))
    assert len(field.paths) == 1
    assert pen.path is field.paths[0]
    field.record(pen, Vec2(0, 0))
    field.record(pen, Vec2(1, 0))
    assert pen.path.points == [Vec2(0, 0), Vec2(1, 0)]


def test_record_after_path_removed_starts_new_path():
    field = PathField()
    pen = DrawPath()
    pen.activate()
    field.record(pen, Vec2(0, 0))
    old = pen.path
    field.clear()
    field.record(pen, Vec2(3, 3))
    assert pen.path is not old
    assert pen.path.points == [Vec2(3, 3)]


def test_despawn_old_paths_keeps_at_most_four():
    field = PathField()
    paths = [Path(points=[Vec2(i, 0)]) for i in range(5)]
    field.paths.extend(paths)
    field.despawn_old_paths()
    assert field.paths == paths[1:]
    field.despawn_old_paths()
    assert field.paths == paths[1:]


def test_full_loop_around_enemies_starts_animation():
    field = PathField()
    pen = DrawPath()
    pen.activate()
    for p in [Vec2(-20, -20), Vec2(20, -20), Vec2(20, 20), Vec2(-20, 20), Vec2(-10, -30)]:
        field.record(pen, p)
    closed = field.find_intersections()
    assert closed == [pen.path]
    enemies = [enemy(EnemyType.RED, 15, -10), enemy(EnemyType.CYAN, 16, -12)]
    started = field.check_areas(pen, enemies)
    assert len(started) == 1
    assert field.animations == started
    waves = sum(field.animate(0.6, enemies) for _ in range(4))
    assert waves == 1
    assert field.animations == []
    assert [e.kind for e in enemies] == [EnemyType.WHITE]


def test_check_areas_empty_loop_swaps_remainder():
    field = PathField()
    pen = DrawPath()
    pen.activate()
    remainder = [Vec2(50, 50), Vec2(60, 60)]
    path = Path(points=list(SQUARE), remainder=list(remainder), closed=True)
    pen.path = path
    field.paths.append(path)
    assert field.check_areas(pen, []) == []
    assert path.points == remainder
    assert not path.closed
    assert pen.active


def test_check_areas_empty_loop_without_remainder_stops_pen():
    field = PathField()
    pen = DrawPath()
    pen.activate()
    path = Path(points=list(SQUARE), closed=True)
    pen.path = path
    field.paths.append(path)
    field.check_areas(pen, [enemy(EnemyType.RED, 50, 50)])
    assert not pen.active
    assert pen.path is None


def test_check_areas_single_enemy_stops_pen():
    field = PathField()
    pen = DrawPath()
    pen.activate()
    path = Path(points=list(SQUARE), closed=True)
    pen.path = path
    field.paths.append(path)
    assert field.check_areas(pen, [enemy(EnemyType.RED, 5, 5)]) == []
    assert not pen.active


def test_shade_active_white_and_older_darker():
    field = PathField()
    pen = DrawPath()
    old, new, active = Path(), Path(), Path()
    field.paths.extend([old, new, active])
    pen.path = active
    assert field.shade(active, pen) == (255, 255, 255)
    old_shade = field.shade(old, pen)
    new_shade = field.shade(new, pen)
    assert old_shade[0] == old_shade[1] == old_shade[2]
    assert old_shade[0] < new_shade[0] < 255