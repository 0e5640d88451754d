import dataclasses
import math

import pytest

from motion.vector import Vector2

SAMPLES = [
    Vector2(3, 4),
    Vector2(-2.5, 7.25),
    Vector2(1e-3, -1e-3),
    Vector2(-1000, 0.5),
    Vector2(0, -9.8),
]


@pytest.mark.parametrize("v", SAMPLES)
def test_normalize_unit_length(v):
    assert v.normalize().magnitude() == pytest.approx(1.0)


def test_normalize_zero_is_zero():
    assert Vector2.zero().normalize() == Vector2.zero()
    assert Vector2(1e-12, 0).normalize() == Vector2.zero()
    assert Vector2.zero().set_magnitude(5) == Vector2.zero()


@pytest.mark.parametrize("v", SAMPLES)
def test_add_subtract_round_trip(v):
    w = Vector2(0.1, -123.456)
    back = v.add(w).subtract(w)
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)


def test_operators_match_methods():
    a = Vector2(1, 2)
    b = Vector2(3, -4)
    assert a + b == a.add(b)
    assert a - b == a.subtract(b)
    assert a * 3 == 3 * a == a.multiply(3)
    assert b / 2 == Vector2(1.5, -2)
    assert -a == Vector2(-1, -2)
    assert tuple(a) == (1, 2)


def test_vectors_are_immutable():
    v = Vector2(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5  # type: ignore[misc]
    w = v.add(Vector2.zero())
    assert w == v and w is not v


def test_divide_by_zero_is_zero():
    assert Vector2(4, 4).divide(0) == Vector2.zero()


@pytest.mark.parametrize("normal", [Vector2(0, 1), Vector2(0, 5), Vector2(1, 1), Vector2(-3, 0.5)])
def test_reflect_preserves_magnitude_and_flips_normal_component(normal):
    v = Vector2(3, -4)
    r = v.reflect(normal)
    n = normal.normalize()
    assert r.magnitude() == pytest.approx(v.magnitude())
    assert r.dot(n) == pytest.approx(-v.dot(n))


def test_reflect_off_floor():
    r = Vector2(3, -4).reflect(Vector2(0, 1))
    assert r.x == pytest.approx(3)
    assert r.y == pytest.approx(4)


def test_reflect_zero_normal_is_identity():
    assert Vector2(2, 3).reflect(Vector2.zero()) == Vector2(2, 3)


def test_limit():
    assert Vector2(6, 8).limit(5).x == pytest.approx(3)
    assert Vector2(6, 8).limit(5).y == pytest.approx(4)
    short = Vector2(3, 4)
    limited = short.limit(10)
    assert limited == short and limited is not short


def test_project_and_reject():
    v = Vector2(3, 4)
    assert v.project_onto(Vector2(10, 0)) == Vector2(3, 0)
    assert v.reject_from(Vector2(10, 0)) == Vector2(0, 4)
    assert v.project_onto(Vector2.zero()) == Vector2.zero()
    assert v.reject_from(Vector2.zero()) == v


def test_angle_to_clamps_and_handles_zero():
    a = Vector2(0.1, 0.3)
    assert a.angle_to(a.multiply(7)) == pytest.approx(0.0, abs=1e-6)
    assert Vector2(1, 0).angle_to(Vector2(-2, 0)) == pytest.approx(math.pi)
    assert Vector2(1, 0).angle_to(Vector2(0, 3)) == pytest.approx(math.pi / 2)
    assert Vector2.zero().angle_to(Vector2(1, 0)) == 0.0


def test_rotate_and_from_angle():
    r = Vector2(1, 0).rotate(math.pi / 2)
    assert r.x == pytest.approx(0, abs=1e-12)
    assert r.y == pytest.approx(1)
    f = Vector2.from_angle(math.pi, 2)
    assert f.x == pytest.approx(-2)


def test_cross_dot_distance():
    a = Vector2(1, 0)
    b = Vector2(0, 1)
    assert a.cross(b) == 1
    assert b.cross(a) == -1
    assert a.dot(b) == 0
    assert Vector2(0, 0).distance(Vector2(3, 4)) == 5
    assert Vector2(0, 0).distance_squared(Vector2(3, 4)) == 25


def test_lerp_and_clamp():
    a = Vector2(0, 10)
    b = Vector2(10, 20)
    assert a.lerp(b, 0.5) == Vector2(5, 15)
    assert a.lerp(b, 0) == a
    assert Vector2(-5, 50).clamp(Vector2(0, 0), Vector2(10, 10)) == Vector2(0, 10)


def test_screen_directions():
    assert Vector2.up() == Vector2(0, -1)
    assert Vector2.down() == Vector2(0, 1)
    assert Vector2.up().angle() == pytest.approx(-math.pi / 2)


def test_random_uses_given_rng(ctx):
    v = Vector2.random(5, ctx.rng)
    assert v.magnitude() == pytest.approx(5)
