import pygame
import pytest

from motion.vector import Vector2
from motion.visuals import (
    DotVisual,
    ParticleShape,
    SquareVisual,
    StarVisual,
    TriangleVisual,
    make_visual,
)


@pytest.mark.parametrize(
    "shape,cls,size,color",
    [
        (ParticleShape.DOT, DotVisual, 3, "#ff6b6b"),
        (ParticleShape.SQUARE, SquareVisual, 6, "#4ecdc4"),
        (ParticleShape.TRIANGLE, TriangleVisual, 6, "#45b7d1"),
        (ParticleShape.STAR, StarVisual, 8, "#ffa726"),
    ],
)
def test_shape_defaults(shape, cls, size, color):
    v = make_visual(shape)
    assert isinstance(v, cls)
    assert v.size == size
    assert v.color == color


def test_make_visual_overrides_and_tags():
    v = make_visual("star", color="#123456", size=12)
    assert isinstance(v, StarVisual)
    assert (v.color, v.size) == ("#123456", 12)
    assert isinstance(make_visual(SquareVisual, size=2), SquareVisual)


def test_make_visual_injected_factory():
    seen = []

    def factory(color, size):
        seen.append((color, size))
        return DotVisual(color=color or "#000000", size=size or 1)

    v = make_visual(factory, color="#abcdef", size=2)
    assert seen == [("#abcdef", 2)]
    assert v.color == "#abcdef"


def test_unknown_shape_rejected():
    with pytest.raises(ValueError):
        make_visual("hexagon")


def test_reset_visual_only_touches_given_fields():
    v = SquareVisual(color="#111111", size=5)
    v.reset_visual(size=9)
    assert (v.color, v.size) == ("#111111", 9)
    v.reset_visual(color="#222222")
    assert (v.color, v.size) == ("#222222", 9)


def test_star_has_alternating_points():
    star = StarVisual(size=10)
    pts = star.points((0, 0))
    assert len(pts) == 10
    assert pts[0] == pytest.approx((10, 0))
    assert abs(complex(*pts[1])) == pytest.approx(4)


def test_dot_draw_centred():
    surface = pygame.Surface((40, 40))
    surface.fill((0, 0, 0))
    DotVisual(color="#00ff00", size=5).draw(surface, Vector2(20, 20), 1.0)
    assert surface.get_at((20, 20))[:3] == (0, 255, 0)
    assert surface.get_at((2, 2))[:3] == (0, 0, 0)


@pytest.mark.parametrize("cls", [DotVisual, SquareVisual, TriangleVisual, StarVisual])
def test_invisible_when_fully_faded(cls):
    surface = pygame.Surface((40, 40))
    surface.fill((0, 0, 0))
    cls(color="#ffffff", size=8).draw(surface, Vector2(20, 20), 0.0)
    assert surface.get_at((20, 20))[:3] == (0, 0, 0)
