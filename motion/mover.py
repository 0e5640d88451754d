"""Force-accumulation physics body.

``Mover`` integrates position / velocity / acceleration with a
semi-implicit Euler step. Forces are not persistent: ``update`` zeroes the
accumulated acceleration, so callers (or the behavior helpers below)
reapply forces every tick.

Per-tick order inside ``update(dt)``:
  1. velocity += acceleration * dt
  2. friction drag: velocity += (-velocity * friction) * dt
  3. clamp |velocity| to max_speed (when finite)
  4. position += velocity * dt
  5. acceleration reset to zero
"""

from __future__ import annotations

import math

from motion.constants import (
    ATTRACT_MAX_DISTANCE,
    ATTRACT_MIN_DISTANCE,
    DEFAULT_DT,
    DEFAULT_GRAVITY,
    DEFAULT_MAX_FORCE,
    NOISE_OCTAVES,
    NOISE_OFFSET_RANGE,
    NOISE_PERSISTENCE,
    NOISE_Y_PHASE,
)
from motion.services import MotionContext, default_context
from motion.vector import Vector2


class Mover:
    def __init__(
        self,
        position: Vector2 | None = None,
        velocity: Vector2 | None = None,
        acceleration: Vector2 | None = None,
        mass: float = 1.0,
        max_speed: float = math.inf,
        friction: float = 0.0,
        context: MotionContext | None = None,
    ):
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass!r}")
        if max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {max_speed!r}")
        self.context = context if context is not None else default_context()
        self.position = position if position is not None else Vector2.zero()
        self.velocity = velocity if velocity is not None else Vector2.zero()
        self.acceleration = acceleration if acceleration is not None else Vector2.zero()
        self.last_acceleration = Vector2.zero()  # acceleration consumed by the last step
        self.mass = mass
        self.max_speed = max_speed
        self.friction = min(1.0, max(0.0, friction))

        # Random phase so movers sampling the same field do not move in lockstep.
        rng = self.context.rng
        self.noise_offset = Vector2(rng.random() * NOISE_OFFSET_RANGE, rng.random() * NOISE_OFFSET_RANGE)

    # ---- Integration ----
    def update(self, dt: float = DEFAULT_DT) -> None:
        velocity = self.velocity.add(self.acceleration.multiply(dt))

        if self.friction > 0:
            drag = velocity.multiply(-self.friction)
            velocity = velocity.add(drag.multiply(dt))

        if self.max_speed < math.inf:
            velocity = velocity.limit(self.max_speed)

        self.velocity = velocity
        self.position = self.position.add(velocity.multiply(dt))
        self.last_acceleration = self.acceleration
        self.acceleration = Vector2.zero()

    # ---- Forces ----
    def apply_force(self, force: Vector2) -> None:
        """Accumulate ``force / mass`` into this tick's acceleration."""
        self.acceleration = self.acceleration.add(force.divide(self.mass))

    def apply_gravity(self, gravity: Vector2 | None = None) -> None:
        """Gravity scaled by mass, so every body falls at the same rate."""
        if gravity is None:
            gravity = Vector2.down().multiply(DEFAULT_GRAVITY)
        self.apply_force(gravity.multiply(self.mass))

    def _desired_speed(self, offset: Vector2) -> float:
        if self.max_speed < math.inf:
            return self.max_speed
        speed = self.velocity.magnitude()
        if speed > 0:
            return speed
        # Unbounded and at rest: the target distance sets the pace.
        return offset.magnitude()

    def seek(self, target: Vector2, max_force: float = DEFAULT_MAX_FORCE) -> None:
        """Steer toward ``target`` with a force of at most ``max_force``.

        Desired speed is ``max_speed``; unbounded movers use their current
        speed, or the distance to the target when at rest.
        """
        offset = target.subtract(self.position)
        desired = offset.normalize().multiply(self._desired_speed(offset))
        self.apply_force(desired.subtract(self.velocity).limit(max_force))

    def flee(self, target: Vector2, max_force: float = DEFAULT_MAX_FORCE) -> None:
        """Mirror of ``seek``: steer directly away from ``target``."""
        offset = self.position.subtract(target)
        desired = offset.normalize().multiply(self._desired_speed(offset))
        self.apply_force(desired.subtract(self.velocity).limit(max_force))

    def attract(
        self,
        other: "Mover",
        strength: float = 1.0,
        min_distance: float = ATTRACT_MIN_DISTANCE,
        max_distance: float = ATTRACT_MAX_DISTANCE,
    ) -> None:
        """Inverse-square pull toward ``other``.

        Separation is clamped to ``min_distance`` so near-coincident bodies
        get a bounded force; exactly coincident bodies get none.
        """
        distance = self.position.distance(other.position)
        if distance > max_distance:
            return
        direction = other.position.subtract(self.position)
        if direction.is_zero():
            return
        clamped = max(distance, min_distance)
        magnitude = strength * self.mass * other.mass / (clamped * clamped)
        self.apply_force(direction.normalize().multiply(magnitude))

    def apply_noise_force(self, strength: float = 0.5, scale: float = 0.01, time: float = 0.0) -> None:
        """Organic low-frequency force sampled from the context noise field."""
        noise = self.context.noise
        t = time * scale * 0.5
        nx = noise.octave_noise2d(
            (self.position.x + self.noise_offset.x) * scale, t, NOISE_OCTAVES, NOISE_PERSISTENCE, 1
        )
        ny = noise.octave_noise2d(
            (self.position.y + self.noise_offset.y) * scale, t + NOISE_Y_PHASE, NOISE_OCTAVES, NOISE_PERSISTENCE, 1
        )
        self.apply_force(Vector2(nx, ny).multiply(strength))

    # ---- Utilities ----
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * self.velocity.magnitude_squared()

    def momentum(self) -> Vector2:
        return self.velocity.multiply(self.mass)

    def set_speed(self, speed: float) -> None:
        """Set velocity magnitude, keeping its direction."""
        self.velocity = self.velocity.set_magnitude(speed)

    def clone(self) -> "Mover":
        copy = Mover(
            position=self.position,
            velocity=self.velocity,
            acceleration=self.acceleration,
            mass=self.mass,
            max_speed=self.max_speed,
            friction=self.friction,
            context=self.context,
        )
        copy.noise_offset = self.noise_offset
        return copy

    def reset(self) -> None:
        """Stop the body: zero velocity and pending acceleration."""
        self.velocity = Vector2.zero()
        self.acceleration = Vector2.zero()

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        return f"{type(self).__name__}(position={self.position}, velocity={self.velocity}, mass={self.mass})"


__all__ = ["Mover"]
