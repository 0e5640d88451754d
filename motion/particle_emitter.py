"""ParticleEmitter: emission scheduling plus an in-place particle pool.

State machine (derived, see ``EmitterState``):

    ACTIVE_EMITTING -> ACTIVE_IDLE -> INACTIVE -> FINISHED

``FINISHED`` (inactive and no live particles) is terminal until
``reset()``. Per tick ``update(dt)``:

  1. Count down the emitter's own optional lifespan (``dt * 60`` ticks);
     expiry deactivates it.
  2. While active, run the pattern's emission step (BURST / CONTINUOUS /
     WAVE).
  3. For every live particle: emitter gravity first, then the particle's
     own integration step.
  4. Dead particles are revived in place while the emitter is active and
     below its cap; otherwise they are dropped from the collection.

All sampling goes through ``context.rng`` so a seeded context reproduces
an emission exactly. The emitter never blits anything itself; renderers
read ``get_draw_commands()`` or call ``draw(surface)`` which delegates to
each particle's visual variant.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Union

import pygame

from motion.constants import (
    DEFAULT_DT,
    DEFAULT_PALETTE,
    EMITTER_EMISSION_RATE,
    EMITTER_PARTICLE_COUNT,
    EMITTER_PARTICLE_LIFESPAN,
    EMITTER_SIZE_MAX,
    EMITTER_SIZE_MIN,
    EMITTER_SPREAD,
    EMITTER_VELOCITY_MAX,
    EMITTER_VELOCITY_MIN,
    FRAME_RATE_BASELINE,
    WAVE_BATCH_SIZE,
    WAVE_INTERVAL,
)
from motion.logger import get_logger
from motion.particle import Particle
from motion.services import MotionContext, default_context
from motion.vector import Vector2
from motion.visuals import ParticleShape, VisualFactory, make_visual

log = get_logger("emitter")


class EmissionPattern(str, Enum):
    BURST = "burst"
    CONTINUOUS = "continuous"
    WAVE = "wave"


class EmitterState(str, Enum):
    ACTIVE_EMITTING = "active_emitting"
    ACTIVE_IDLE = "active_idle"
    INACTIVE = "inactive"
    FINISHED = "finished"


@dataclass(frozen=True)
class VectorRange:
    """Inclusive min / max bounds for sampling a vector."""

    min: Vector2
    max: Vector2


@dataclass(frozen=True)
class SizeRange:
    min: float
    max: float


@dataclass
class ParticleDrawCommand:
    """Everything a renderer needs to paint one particle."""

    x: float
    y: float
    color: str
    size: float
    alpha: float
    shape: Optional[ParticleShape]


def _default_velocity_range() -> VectorRange:
    return VectorRange(Vector2(*EMITTER_VELOCITY_MIN), Vector2(*EMITTER_VELOCITY_MAX))


def _zero_range() -> VectorRange:
    return VectorRange(Vector2.zero(), Vector2.zero())


@dataclass
class EmitterConfig:
    """Construction surface of an emitter; every field has a default."""

    position: Vector2 = field(default_factory=Vector2.zero)
    particle_count: int = EMITTER_PARTICLE_COUNT
    emission_rate: float = EMITTER_EMISSION_RATE  # particles / second
    lifespan: float = math.inf  # emitter time-to-live in ticks
    particle_lifespan: float = EMITTER_PARTICLE_LIFESPAN  # ticks
    shape: Union[ParticleShape, VisualFactory] = ParticleShape.DOT
    velocity_range: VectorRange = field(default_factory=_default_velocity_range)
    acceleration_range: VectorRange = field(default_factory=_zero_range)
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    size_range: SizeRange = field(default_factory=lambda: SizeRange(EMITTER_SIZE_MIN, EMITTER_SIZE_MAX))
    pattern: EmissionPattern = EmissionPattern.CONTINUOUS
    spread: float = EMITTER_SPREAD  # radians
    direction: Vector2 = field(default_factory=Vector2.up)
    gravity: Vector2 = field(default_factory=Vector2.zero)
    friction: float = 0.0

    def __post_init__(self):
        self.pattern = EmissionPattern(self.pattern)
        if isinstance(self.shape, str):
            self.shape = ParticleShape(self.shape)
        self.colors = list(self.colors)
        if self.particle_count < 0:
            raise ValueError(f"particle_count must be >= 0, got {self.particle_count!r}")
        if self.emission_rate < 0:
            raise ValueError(f"emission_rate must be >= 0, got {self.emission_rate!r}")
        if self.lifespan <= 0:
            raise ValueError(f"lifespan must be positive, got {self.lifespan!r}")
        if self.particle_lifespan < 0:
            raise ValueError(f"particle_lifespan must be >= 0, got {self.particle_lifespan!r}")
        if not self.colors:
            raise ValueError("colors must not be empty")
        if self.size_range.min > self.size_range.max:
            raise ValueError(f"size_range min exceeds max: {self.size_range!r}")
        if not 0 <= self.friction <= 1:
            raise ValueError(f"friction must be within [0, 1], got {self.friction!r}")


class ParticleEmitter:
    def __init__(
        self,
        config: EmitterConfig | None = None,
        context: MotionContext | None = None,
        **options,
    ):
        if config is None:
            config = EmitterConfig(**options)
        else:
            # Private copy: later setters must not leak into the caller's config.
            config = dataclasses.replace(config, **options)
        self.config = config
        self.context = context if context is not None else default_context()
        self.position = config.position
        self.particles: List[Particle] = []
        self.is_active = True
        self.max_lifespan = config.lifespan
        self.lifespan = self.max_lifespan
        self._emission_timer = 0.0
        self._particles_emitted = 0
        self._finish_logged = False
        log.debug(f"emitter created: pattern={config.pattern.value} count={config.particle_count}")

    # --- Collection Protocol -------------------------------------------------
    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:  # pragma: no cover - trivial
        return iter(self.particles)

    # --- Simulation ----------------------------------------------------------
    def update(self, dt: float = DEFAULT_DT) -> None:
        """Advance one tick.

        Dead particles are recycled only while the emitter is active, so an
        emitter that stops emitting drains its pool and reaches FINISHED.
        """
        if self.max_lifespan < math.inf:
            self.lifespan -= dt * FRAME_RATE_BASELINE
            if self.lifespan <= 0 and self.is_active:
                self.is_active = False
                log.debug("emitter lifespan expired")

        if self.is_active:
            self._emit(dt)

        gravity = self.config.gravity
        # Walk backwards so removals do not shift unvisited particles.
        for i in range(len(self.particles) - 1, -1, -1):
            particle = self.particles[i]
            if not gravity.is_zero():
                particle.apply_gravity(gravity)
            particle.update(dt)

            if particle.is_dead:
                if self.is_active and len(self.particles) < self.config.particle_count:
                    self._recycle(particle)
                else:
                    del self.particles[i]

        if self.is_finished() and not self._finish_logged:
            self._finish_logged = True
            log.debug(f"emitter finished after {self._particles_emitted} emissions")

    def _emit(self, dt: float) -> None:
        pattern = self.config.pattern
        if pattern is EmissionPattern.BURST:
            self._emit_burst()
        elif pattern is EmissionPattern.CONTINUOUS:
            self._emit_continuous(dt)
        elif pattern is EmissionPattern.WAVE:
            self._emit_wave(dt)

    def _emit_burst(self) -> None:
        if self._particles_emitted == 0:
            for _ in range(self.config.particle_count):
                self._create_particle()
            self._particles_emitted = self.config.particle_count
            self.is_active = False

    def _emit_continuous(self, dt: float) -> None:
        count = self.config.particle_count
        rate = self.config.emission_rate
        if rate > 0:
            self._emission_timer += dt
            interval = 1 / rate
            while self._emission_timer >= interval and self._particles_emitted < count:
                self._create_particle()
                self._particles_emitted += 1
                self._emission_timer -= interval
        if self._particles_emitted >= count:
            self.is_active = False

    def _emit_wave(self, dt: float) -> None:
        count = self.config.particle_count
        self._emission_timer += dt
        if self._emission_timer >= WAVE_INTERVAL:
            batch = min(WAVE_BATCH_SIZE, count - self._particles_emitted)
            for _ in range(batch):
                self._create_particle()
                self._particles_emitted += 1
            self._emission_timer = 0.0
        if self._particles_emitted >= count:
            self.is_active = False

    # --- Sampling --------------------------------------------------------------
    def _sample_velocity(self) -> Vector2:
        cfg = self.config
        rng = self.context.rng
        vr = cfg.velocity_range
        if cfg.direction.is_zero():
            return Vector2(rng.lerp_sample(vr.min.x, vr.max.x), rng.lerp_sample(vr.min.y, vr.max.y))
        angle = cfg.direction.angle() + (rng.random() - 0.5) * cfg.spread
        speed = rng.lerp_sample(vr.min.magnitude(), vr.max.magnitude())
        return Vector2.from_angle(angle, speed)

    def _sample_acceleration(self) -> Vector2:
        ar = self.config.acceleration_range
        rng = self.context.rng
        return Vector2(rng.lerp_sample(ar.min.x, ar.max.x), rng.lerp_sample(ar.min.y, ar.max.y))

    def _sample_visual(self):
        rng = self.context.rng
        color = rng.choice(self.config.colors)
        size = rng.lerp_sample(self.config.size_range.min, self.config.size_range.max)
        return color, size

    def _create_particle(self) -> Particle | None:
        if len(self.particles) >= self.config.particle_count:
            return None
        velocity = self._sample_velocity()
        acceleration = self._sample_acceleration()
        color, size = self._sample_visual()
        particle = Particle(
            position=self.position,
            velocity=velocity,
            acceleration=acceleration,
            lifespan=self.config.particle_lifespan,
            friction=self.config.friction,
            visual=make_visual(self.config.shape, color=color, size=size),
            context=self.context,
        )
        self.particles.append(particle)
        return particle

    def _recycle(self, particle: Particle) -> None:
        velocity = self._sample_velocity()
        acceleration = self._sample_acceleration()
        color, size = self._sample_visual()
        particle.reset(
            position=self.position,
            velocity=velocity,
            acceleration=acceleration,
            lifespan=self.config.particle_lifespan,
            color=color,
            size=size,
        )
        particle.friction = self.config.friction

    # --- Queries ---------------------------------------------------------------
    def get_particle_count(self) -> int:
        return len(self.particles)

    @property
    def particles_emitted(self) -> int:
        return self._particles_emitted

    def is_finished(self) -> bool:
        return not self.is_active and not self.particles

    @property
    def state(self) -> EmitterState:
        if self.is_finished():
            return EmitterState.FINISHED
        if not self.is_active:
            return EmitterState.INACTIVE
        if len(self.particles) >= self.config.particle_count:
            return EmitterState.ACTIVE_IDLE
        return EmitterState.ACTIVE_EMITTING

    def reset(self) -> None:
        """Back to ACTIVE_EMITTING with an empty collection."""
        self.particles = []
        self.is_active = True
        self.lifespan = self.max_lifespan
        self._emission_timer = 0.0
        self._particles_emitted = 0
        self._finish_logged = False
        log.debug("emitter reset")

    # --- Configuration setters (apply to the next creation / recycle) -------
    def set_position(self, position: Vector2) -> None:
        self.position = position
        self.config.position = position

    def set_emission_count(self, count: int) -> None:
        """Change the cap; a different value restarts emission."""
        if count < 0:
            raise ValueError(f"particle_count must be >= 0, got {count!r}")
        old = self.config.particle_count
        self.config.particle_count = count
        if old != count:
            self._particles_emitted = 0
            self.is_active = True
            self._finish_logged = False
            if self.config.pattern is EmissionPattern.BURST:
                self._emit_burst()

    def set_emission_rate(self, rate: float) -> None:
        if rate < 0:
            log.warn(f"negative emission rate {rate!r} clamped to 0")
            rate = 0.0
        self.config.emission_rate = rate

    def set_velocity_range(self, velocity_range: VectorRange) -> None:
        self.config.velocity_range = velocity_range

    def set_acceleration_range(self, acceleration_range: VectorRange) -> None:
        self.config.acceleration_range = acceleration_range

    def set_spread(self, spread: float) -> None:
        self.config.spread = spread

    def set_direction(self, direction: Vector2) -> None:
        self.config.direction = direction

    def set_colors(self, colors: Sequence[str]) -> None:
        if not colors:
            raise ValueError("colors must not be empty")
        self.config.colors = list(colors)

    def set_size_range(self, size_range: SizeRange) -> None:
        if size_range.min > size_range.max:
            raise ValueError(f"size_range min exceeds max: {size_range!r}")
        self.config.size_range = size_range

    def set_gravity(self, gravity: Vector2) -> None:
        self.config.gravity = gravity

    def set_friction(self, friction: float) -> None:
        self.config.friction = min(1.0, max(0.0, friction))

    def set_particle_lifespan(self, lifespan: float) -> None:
        self.config.particle_lifespan = max(0.0, lifespan)

    # --- Rendering Data ------------------------------------------------------
    def get_draw_commands(self) -> List[ParticleDrawCommand]:
        return [
            ParticleDrawCommand(
                x=p.position.x,
                y=p.position.y,
                color=p.color,
                size=p.size,
                alpha=p.get_alpha(),
                shape=getattr(p.visual, "shape", None),
            )
            for p in self.particles
        ]

    def draw(self, surface: pygame.Surface) -> None:
        for particle in self.particles:
            particle.draw(surface)

    # --- Presets ---------------------------------------------------------------
    @classmethod
    def create_fireworks(cls, position: Vector2, context: MotionContext | None = None) -> "ParticleEmitter":
        return cls(
            EmitterConfig(
                position=position,
                particle_count=30,
                pattern=EmissionPattern.BURST,
                shape=ParticleShape.STAR,
                velocity_range=VectorRange(Vector2(-100, -150), Vector2(100, -50)),
                colors=["#ff6b6b", "#ffa726", "#ffeb3b", "#4caf50", "#2196f3"],
                size_range=SizeRange(4, 10),
                particle_lifespan=180,
                gravity=Vector2(0, 50),
                friction=0.02,
            ),
            context=context,
        )

    @classmethod
    def create_smoke(cls, position: Vector2, context: MotionContext | None = None) -> "ParticleEmitter":
        return cls(
            EmitterConfig(
                position=position,
                particle_count=20,
                emission_rate=5,
                pattern=EmissionPattern.CONTINUOUS,
                shape=ParticleShape.DOT,
                velocity_range=VectorRange(Vector2(-20, -30), Vector2(20, -10)),
                colors=["#666666", "#888888", "#aaaaaa"],
                size_range=SizeRange(3, 8),
                particle_lifespan=240,
                friction=0.01,
            ),
            context=context,
        )

    @classmethod
    def create_magic(cls, position: Vector2, context: MotionContext | None = None) -> "ParticleEmitter":
        return cls(
            EmitterConfig(
                position=position,
                particle_count=40,
                emission_rate=15,
                pattern=EmissionPattern.CONTINUOUS,
                shape=ParticleShape.TRIANGLE,
                direction=Vector2.up(),
                spread=math.pi / 3,
                velocity_range=VectorRange(Vector2(0, 30), Vector2(0, 80)),
                colors=["#9c27b0", "#e91e63", "#3f51b5", "#00bcd4"],
                size_range=SizeRange(2, 6),
                particle_lifespan=150,
            ),
            context=context,
        )


PRESETS = {
    "fireworks": ParticleEmitter.create_fireworks,
    "smoke": ParticleEmitter.create_smoke,
    "magic": ParticleEmitter.create_magic,
}

__all__ = [
    "EmissionPattern",
    "EmitterState",
    "EmitterConfig",
    "VectorRange",
    "SizeRange",
    "ParticleDrawCommand",
    "ParticleEmitter",
    "PRESETS",
]
