"""Particle visual variants.

Physics and lifecycle live in ``Particle``; how a particle looks is a
pluggable variant chosen from a closed set of shapes (``ParticleShape``)
or supplied as any object honoring ``VisualVariant``:

    color / size           -> read by renderers and draw commands
    reset_visual(...)      -> called when a pooled particle is recycled
    draw(surface, pos, a)  -> paint onto a caller-owned pygame surface

Each built-in shape paints onto a small SRCALPHA scratch surface and blits
it at the particle position so the fade alpha blends with the target.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Tuple, Union

import pygame

from motion.constants import (
    DOT_DEFAULTS,
    SQUARE_DEFAULTS,
    STAR_DEFAULTS,
    STAR_INNER_RATIO,
    STAR_SPIKES,
    TRIANGLE_DEFAULTS,
)
from motion.vector import Vector2


class ParticleShape(str, Enum):
    DOT = "dot"
    SQUARE = "square"
    TRIANGLE = "triangle"
    STAR = "star"


class VisualVariant(Protocol):
    color: str
    size: float

    def reset_visual(self, color: Optional[str] = None, size: Optional[float] = None) -> None: ...

    def draw(self, surface: pygame.Surface, position: Vector2, alpha: float) -> None: ...


VisualFactory = Callable[[Optional[str], Optional[float]], VisualVariant]


@dataclass
class ShapeVisual:
    """Base for the built-in shapes: a color plus one size parameter."""

    color: str
    size: float

    shape = None  # type: Optional[ParticleShape]

    def reset_visual(self, color: Optional[str] = None, size: Optional[float] = None) -> None:
        if color is not None:
            self.color = color
        if size is not None:
            self.size = size

    def extent(self) -> float:
        """Half-width of the shape's bounding box."""
        return self.size / 2

    def points(self, center: Tuple[float, float]) -> List[Tuple[float, float]]:  # pragma: no cover - abstract
        raise NotImplementedError

    def paint(self, target: pygame.Surface, color: pygame.Color, center: Tuple[float, float]) -> None:
        pygame.draw.polygon(target, color, self.points(center))

    def draw(self, surface: pygame.Surface, position: Vector2, alpha: float) -> None:
        if alpha <= 0 or self.size <= 0:
            return
        color = pygame.Color(self.color)
        color.a = int(round(255 * min(1.0, alpha)))
        dim = int(math.ceil(self.extent() * 2)) + 2
        scratch = pygame.Surface((dim, dim), pygame.SRCALPHA)
        self.paint(scratch, color, (dim / 2, dim / 2))
        surface.blit(scratch, (int(round(position.x - dim / 2)), int(round(position.y - dim / 2))))


@dataclass
class DotVisual(ShapeVisual):
    color: str = DOT_DEFAULTS[1]
    size: float = DOT_DEFAULTS[0]

    shape = ParticleShape.DOT

    # A dot's size is its radius.
    @property
    def radius(self) -> float:
        return self.size

    def extent(self) -> float:
        return self.size

    def paint(self, target, color, center):
        pygame.draw.circle(target, color, center, self.size)


@dataclass
class SquareVisual(ShapeVisual):
    color: str = SQUARE_DEFAULTS[1]
    size: float = SQUARE_DEFAULTS[0]

    shape = ParticleShape.SQUARE

    def points(self, center):
        cx, cy = center
        h = self.size / 2
        return [(cx - h, cy - h), (cx + h, cy - h), (cx + h, cy + h), (cx - h, cy + h)]


@dataclass
class TriangleVisual(ShapeVisual):
    color: str = TRIANGLE_DEFAULTS[1]
    size: float = TRIANGLE_DEFAULTS[0]

    shape = ParticleShape.TRIANGLE

    def points(self, center):
        cx, cy = center
        h = self.size / 2
        return [(cx, cy - h), (cx - h, cy + h), (cx + h, cy + h)]


@dataclass
class StarVisual(ShapeVisual):
    color: str = STAR_DEFAULTS[1]
    size: float = STAR_DEFAULTS[0]
    spikes: int = STAR_SPIKES
    inner_ratio: float = STAR_INNER_RATIO

    shape = ParticleShape.STAR

    # Outer radius is the full size.
    def extent(self) -> float:
        return self.size

    def points(self, center):
        cx, cy = center
        pts = []
        for i in range(self.spikes * 2):
            radius = self.size if i % 2 == 0 else self.size * self.inner_ratio
            angle = i * math.pi / self.spikes
            pts.append((cx + math.cos(angle) * radius, cy + math.sin(angle) * radius))
        return pts


_registry: Dict[ParticleShape, type] = {
    ParticleShape.DOT: DotVisual,
    ParticleShape.SQUARE: SquareVisual,
    ParticleShape.TRIANGLE: TriangleVisual,
    ParticleShape.STAR: StarVisual,
}


def make_visual(
    shape: Union[ParticleShape, str, VisualFactory] = ParticleShape.DOT,
    color: Optional[str] = None,
    size: Optional[float] = None,
) -> VisualVariant:
    """Build a visual for a shape tag, or call an injected factory.

    Omitted color / size fall back to the shape's defaults.
    """
    if isinstance(shape, type) and issubclass(shape, ShapeVisual):
        cls = shape
    elif callable(shape) and not isinstance(shape, str):
        return shape(color, size)
    else:
        cls = _registry[ParticleShape(shape)]
    visual = cls()
    visual.reset_visual(color=color, size=size)
    return visual


__all__ = [
    "ParticleShape",
    "VisualVariant",
    "VisualFactory",
    "ShapeVisual",
    "DotVisual",
    "SquareVisual",
    "TriangleVisual",
    "StarVisual",
    "make_visual",
]
