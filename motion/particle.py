"""Time-limited particle: a Mover with a lifespan and a visual variant.

Lifespan counts down in ticks of the 60 Hz baseline (``dt * 60`` per
update) whatever the real frame rate. ``is_dead`` latches the first time
the lifespan reaches zero and stays set until ``reset``.
"""

from __future__ import annotations

import math
from typing import Optional

import pygame

from motion.constants import DEFAULT_DT, DEFAULT_PARTICLE_LIFESPAN, FRAME_RATE_BASELINE
from motion.mover import Mover
from motion.services import MotionContext
from motion.vector import Vector2
from motion.visuals import ParticleShape, VisualVariant, make_visual


class Particle(Mover):
    def __init__(
        self,
        position: Vector2 | None = None,
        velocity: Vector2 | None = None,
        acceleration: Vector2 | None = None,
        mass: float = 1.0,
        max_speed: float = math.inf,
        friction: float = 0.0,
        lifespan: float = DEFAULT_PARTICLE_LIFESPAN,
        visual: VisualVariant | None = None,
        context: MotionContext | None = None,
    ):
        super().__init__(
            position=position,
            velocity=velocity,
            acceleration=acceleration,
            mass=mass,
            max_speed=max_speed,
            friction=friction,
            context=context,
        )
        self.max_lifespan = max(0.0, lifespan)
        self.lifespan = self.max_lifespan
        self.is_dead = False
        self.visual = visual if visual is not None else make_visual(ParticleShape.DOT)

    def update(self, dt: float = DEFAULT_DT) -> None:
        super().update(dt)
        self.lifespan = max(0.0, self.lifespan - dt * FRAME_RATE_BASELINE)
        if self.lifespan <= 0:
            self.is_dead = True

    # ---- Lifecycle queries ----
    def get_age(self) -> float:
        """0 when just born, 1 when expired."""
        if self.max_lifespan <= 0:
            return 1.0
        return 1 - self.lifespan / self.max_lifespan

    def get_alpha(self) -> float:
        """Fade factor for renderers."""
        if self.max_lifespan <= 0:
            return 0.0
        return max(0.0, self.lifespan / self.max_lifespan)

    def reset(
        self,
        position: Vector2 | None = None,
        velocity: Vector2 | None = None,
        acceleration: Vector2 | None = None,
        lifespan: float | None = None,
        color: Optional[str] = None,
        size: Optional[float] = None,
    ) -> None:
        """Revive for reuse from a pool.

        Only the given fields change; an omitted lifespan restarts from
        ``max_lifespan``. Mass, friction and max speed are left alone.
        """
        if position is not None:
            self.position = position
        if velocity is not None:
            self.velocity = velocity
        if acceleration is not None:
            self.acceleration = acceleration
        if lifespan is not None:
            self.max_lifespan = max(0.0, lifespan)
        self.lifespan = self.max_lifespan
        self.is_dead = False
        self.visual.reset_visual(color=color, size=size)

    # ---- Render surface ----
    @property
    def color(self) -> str:
        return self.visual.color

    @property
    def size(self) -> float:
        return self.visual.size

    radius = size

    def draw(self, surface: pygame.Surface) -> None:
        self.visual.draw(surface, self.position, self.get_alpha())

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        return f"Particle(position={self.position}, lifespan={self.lifespan:.2f}, dead={self.is_dead})"


__all__ = ["Particle"]
