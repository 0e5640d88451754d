"""2D motion core: vectors, noise, movers, particles and emitters.

Renderers and frame loops live outside this package; they drive
``ParticleEmitter.update(dt)`` and read particle state back for drawing.
"""

from .collisions import bounce_off_bounds, is_colliding, resolve_collision, wrap_around_bounds
from .mover import Mover
from .noise import PerlinNoise
from .particle import Particle
from .particle_emitter import (
    EmissionPattern,
    EmitterConfig,
    EmitterState,
    ParticleDrawCommand,
    ParticleEmitter,
    SizeRange,
    VectorRange,
)
from .particle_system import ParticleSystem
from .rng_service import RNGService
from .services import MotionContext, build_context, default_context
from .vector import Vector2
from .visuals import DotVisual, ParticleShape, SquareVisual, StarVisual, TriangleVisual, make_visual

VERSION = "0.1.0"

__all__ = [
    "Vector2",
    "PerlinNoise",
    "Mover",
    "Particle",
    "ParticleEmitter",
    "EmitterConfig",
    "EmitterState",
    "EmissionPattern",
    "VectorRange",
    "SizeRange",
    "ParticleDrawCommand",
    "ParticleSystem",
    "ParticleShape",
    "DotVisual",
    "SquareVisual",
    "TriangleVisual",
    "StarVisual",
    "make_visual",
    "RNGService",
    "MotionContext",
    "build_context",
    "default_context",
    "is_colliding",
    "resolve_collision",
    "wrap_around_bounds",
    "bounce_off_bounds",
    "VERSION",
]
