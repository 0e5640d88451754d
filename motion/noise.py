"""Coherent 2D Perlin noise.

``PerlinNoise`` is read-only after construction: sampling never mutates the
permutation table, so one field can be shared by any number of movers.
"""

from __future__ import annotations

import math
from typing import List

from motion.constants import NOISE_OCTAVES, NOISE_PERSISTENCE

# Ken Perlin's reference permutation.
_REFERENCE_PERMUTATION = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225, 140, 36, 103, 30, 69, 142,
    8, 99, 37, 240, 21, 10, 23, 190, 6, 148, 247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117,
    35, 11, 32, 57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175, 74, 165, 71,
    134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122, 60, 211, 133, 230, 220, 105, 92, 41,
    55, 46, 245, 40, 244, 102, 143, 54, 65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89,
    18, 169, 200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64, 52, 217, 226,
    250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212, 207, 206, 59, 227, 47, 16, 58, 17, 182,
    189, 28, 42, 223, 183, 170, 213, 119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43,
    172, 9, 129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104, 218, 246, 97,
    228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241, 81, 51, 145, 235, 249, 14, 239,
    107, 49, 192, 214, 31, 181, 199, 106, 157, 184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254,
    138, 236, 205, 93, 222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)  # fmt: skip

_LCG_MUL = 1664525
_LCG_INC = 1013904223
_LCG_MOD = 2**32


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad(hash_: int, x: float, y: float) -> float:
    h = hash_ & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = 0.0
    return (u if h & 1 == 0 else -u) + (v if h & 2 == 0 else -v)


class PerlinNoise:
    """2D Perlin noise field; an integer ``seed`` reshuffles the table."""

    def __init__(self, seed: int | None = None):
        permutation: List[int] = list(_REFERENCE_PERMUTATION)
        if seed is not None:
            self._shuffle(permutation, seed)
        self.seed = seed
        # Doubled so lattice lookups never wrap explicitly.
        self._p = tuple(permutation + permutation)

    @staticmethod
    def _shuffle(permutation: List[int], seed: int) -> None:
        state = seed % _LCG_MOD
        for i in range(len(permutation) - 1, 0, -1):
            state = (state * _LCG_MUL + _LCG_INC) % _LCG_MOD
            j = int(state / _LCG_MOD * (i + 1))
            permutation[i], permutation[j] = permutation[j], permutation[i]

    def noise2d(self, x: float, y: float) -> float:
        """Noise value in roughly [-1, 1]; zero on integer lattice points."""
        p = self._p
        fx = math.floor(x)
        fy = math.floor(y)
        xi = int(fx) & 255
        yi = int(fy) & 255
        x -= fx
        y -= fy
        u = _fade(x)
        v = _fade(y)

        a = p[xi] + yi
        aa = p[a]
        ab = p[a + 1]
        b = p[xi + 1] + yi
        ba = p[b]
        bb = p[b + 1]

        return _lerp(
            _lerp(_grad(p[aa], x, y), _grad(p[ba], x - 1, y), u),
            _lerp(_grad(p[ab], x, y - 1), _grad(p[bb], x - 1, y - 1), u),
            v,
        )

    def octave_noise2d(
        self,
        x: float,
        y: float,
        octaves: int = NOISE_OCTAVES,
        persistence: float = NOISE_PERSISTENCE,
        scale: float = 0.01,
    ) -> float:
        """Fractal sum of ``octaves`` layers, normalised by total amplitude."""
        value = 0.0
        amplitude = 1.0
        frequency = scale
        max_value = 0.0
        for _ in range(octaves):
            value += self.noise2d(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= 2
        if max_value == 0:
            return 0.0
        return value / max_value


__all__ = ["PerlinNoise"]
