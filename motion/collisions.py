"""Boundary and body-to-body collision helpers for movers.

These sit beside the integrator rather than inside it: demos that need
circles bouncing around a viewport call them after ``Mover.update``.
Positions and velocities are always replaced as whole vectors.
"""

from __future__ import annotations

from motion.constants import DEFAULT_RESTITUTION
from motion.mover import Mover
from motion.vector import Vector2


def is_colliding(a: Mover, radius_a: float, b: Mover, radius_b: float) -> bool:
    return a.position.distance(b.position) < radius_a + radius_b


def resolve_collision(
    a: Mover,
    radius_a: float,
    b: Mover,
    radius_b: float,
    restitution: float = DEFAULT_RESTITUTION,
) -> bool:
    """Separate two overlapping circles and exchange an impulse.

    Returns True when an overlap was found. Exactly coincident centres have
    no contact normal and are left untouched.
    """
    if not is_colliding(a, radius_a, b, radius_b):
        return False
    offset = a.position.subtract(b.position)
    if offset.is_zero():
        return False

    distance = offset.magnitude()
    normal = offset.normalize()
    overlap = (radius_a + radius_b) - distance
    separation = normal.multiply(overlap / 2)
    a.position = a.position.add(separation)
    b.position = b.position.subtract(separation)

    velocity_along_normal = a.velocity.subtract(b.velocity).dot(normal)
    if velocity_along_normal > 0:
        # Already separating.
        return True

    impulse = -(1 + restitution) * velocity_along_normal / (1 / a.mass + 1 / b.mass)
    impulse_vec = normal.multiply(impulse)
    a.velocity = a.velocity.add(impulse_vec.divide(a.mass))
    b.velocity = b.velocity.subtract(impulse_vec.divide(b.mass))
    return True


def wrap_around_bounds(mover: Mover, width: float, height: float, radius: float = 0.0) -> bool:
    """Teleport a body that fully left the area to the opposite edge."""
    x, y = mover.position.x, mover.position.y
    if x > width + radius:
        x = -radius
    elif x < -radius:
        x = width + radius
    if y > height + radius:
        y = -radius
    elif y < -radius:
        y = height + radius
    wrapped = (x, y) != (mover.position.x, mover.position.y)
    if wrapped:
        mover.position = Vector2(x, y)
    return wrapped


def bounce_off_bounds(
    mover: Mover,
    width: float,
    height: float,
    radius: float = 0.0,
    damping: float = DEFAULT_RESTITUTION,
) -> bool:
    """Keep a circle inside ``[0, width] x [0, height]``, reflecting velocity.

    The reflected component is scaled by ``damping``. Returns True on contact.
    """
    x, y = mover.position.x, mover.position.y
    vx, vy = mover.velocity.x, mover.velocity.y
    bounced = False

    if x - radius < 0:
        x = radius
        vx *= -damping
        bounced = True
    elif x + radius > width:
        x = width - radius
        vx *= -damping
        bounced = True

    if y - radius < 0:
        y = radius
        vy *= -damping
        bounced = True
    elif y + radius > height:
        y = height - radius
        vy *= -damping
        bounced = True

    if bounced:
        mover.position = Vector2(x, y)
        mover.velocity = Vector2(vx, vy)
    return bounced


__all__ = ["is_colliding", "resolve_collision", "wrap_around_bounds", "bounce_off_bounds"]
