"""Scalar motion helpers shared by the vector math and the emitters."""

from __future__ import annotations

import math


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def map_range(value: float, from_min: float, from_max: float, to_min: float, to_max: float) -> float:
    """Map ``value`` from one range to another (no clamping).

    A degenerate source range maps everything to ``to_min``.
    """
    span = from_max - from_min
    if span == 0:
        return to_min
    normalized = (value - from_min) / span
    return to_min + normalized * (to_max - to_min)


def approximately(a: float, b: float, epsilon: float = 1e-4) -> bool:
    return abs(a - b) < epsilon


def deg_to_rad(degrees: float) -> float:
    return degrees * (math.pi / 180)


def rad_to_deg(radians: float) -> float:
    return radians * (180 / math.pi)


__all__ = ["lerp", "clamp", "map_range", "approximately", "deg_to_rad", "rad_to_deg"]
