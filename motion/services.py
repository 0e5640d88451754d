"""Simulation dependencies passed to movers and emitters.

Movers depend on narrow protocol-style ports instead of process-wide
singletons:

- NoiseSource   -> coherent noise sampled by ``Mover.apply_noise_force``
- RandomSource  -> every random draw (noise offsets, emission sampling)

A ``MotionContext`` bundles both. Build one per scene (or per test) with
``build_context(seed)`` for reproducible runs; ``default_context()`` only
backs callers that pass nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from motion.noise import PerlinNoise
from motion.rng_service import RNGService

_CHILD_SEED_MAX = 2**31 - 1


# ---- Protocols ----
class NoiseSource(Protocol):
    def noise2d(self, x: float, y: float) -> float: ...

    def octave_noise2d(
        self, x: float, y: float, octaves: int = 4, persistence: float = 0.5, scale: float = 0.01
    ) -> float: ...


class RandomSource(Protocol):
    def random(self) -> float: ...
    def randint(self, a: int, b: int) -> int: ...
    def uniform(self, a: float, b: float) -> float: ...
    def lerp_sample(self, a: float, b: float) -> float: ...
    def choice(self, seq: Sequence[Any]) -> Any: ...


@dataclass
class MotionContext:
    noise: NoiseSource
    rng: RandomSource

    def spawn_child(self) -> "MotionContext":
        """Context sharing this (read-only) noise field with its own RNG.

        The child seed is drawn from this context's RNG, so a seeded parent
        yields the same sequence of children every run.
        """
        return MotionContext(noise=self.noise, rng=RNGService(self.rng.randint(0, _CHILD_SEED_MAX)))


def build_context(seed: int | None = None, noise_seed: int | None = None) -> MotionContext:
    """Fresh context with its own noise field and RNG."""
    return MotionContext(noise=PerlinNoise(noise_seed), rng=RNGService(seed))


_default: MotionContext | None = None


def default_context() -> MotionContext:
    """Lazily built fallback context around the process RNG service."""
    global _default
    if _default is None:
        _default = MotionContext(noise=PerlinNoise(), rng=RNGService.get())
    return _default


__all__ = [
    "NoiseSource",
    "RandomSource",
    "MotionContext",
    "build_context",
    "default_context",
]
