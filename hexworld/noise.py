from __future__ import annotations

"""Seeded 2D gradient (Perlin) noise with octave summation."""

import math
from typing import List, Tuple

from .rng import SeededRandom
from .settings import ConfigurationError

TABLE_SIZE = 256


def _fade(t: float) -> float:
    """Quintic fade curve used to smooth interpolation weights."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class NoiseField:
    """
    Immutable noise function built from a seeded stream.

    Construction consumes ``rng`` in a fixed order: 256 gradient angles first,
    then a Fisher-Yates shuffle of ``0..255``. The permutation is stored twice
    so lattice lookups never wrap. Instances hold no mutable state and can be
    queried from several readers at once.
    """

    __slots__ = ("octaves", "_gradients", "_perm")

    def __init__(self, rng: SeededRandom, octaves: int = 4) -> None:
        if octaves < 1:
            raise ConfigurationError(f"noise needs at least one octave, got {octaves}")
        self.octaves = int(octaves)

        gradients: List[Tuple[float, float]] = []
        for _ in range(TABLE_SIZE):
            angle = rng() * 2.0 * math.pi
            gradients.append((math.cos(angle), math.sin(angle)))

        perm = list(range(TABLE_SIZE))
        for i in range(TABLE_SIZE - 1, 0, -1):
            j = int(rng() * (i + 1))
            perm[i], perm[j] = perm[j], perm[i]

        self._gradients: Tuple[Tuple[float, float], ...] = tuple(gradients)
        self._perm: Tuple[int, ...] = tuple(perm + perm)

    def _dot(self, index: int, dx: float, dy: float) -> float:
        gx, gy = self._gradients[index]
        return gx * dx + gy * dy

    def sample(self, x: float, y: float) -> float:
        """Single-octave lattice noise at ``(x, y)``."""
        fx = math.floor(x)
        fy = math.floor(y)
        xi = int(fx) & 255
        yi = int(fy) & 255
        xf = x - fx
        yf = y - fy
        u = _fade(xf)
        v = _fade(yf)

        p = self._perm
        aa = p[p[xi] + yi]
        ab = p[p[xi] + yi + 1]
        ba = p[p[xi + 1] + yi]
        bb = p[p[xi + 1] + yi + 1]

        bottom = _lerp(self._dot(aa, xf, yf), self._dot(ba, xf - 1, yf), u)
        top = _lerp(self._dot(ab, xf, yf - 1), self._dot(bb, xf - 1, yf - 1), u)
        return _lerp(bottom, top, v)

    def __call__(self, x: float, y: float) -> float:
        """
        Multi-octave noise at ``(x, y)``.

        Amplitude halves and frequency doubles per octave; the sum is divided by
        the total amplitude so the result stays roughly within [-1, 1].
        """
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_amplitude = 0.0
        for _ in range(self.octaves):
            total += self.sample(x * frequency, y * frequency) * amplitude
            max_amplitude += amplitude
            amplitude *= 0.5
            frequency *= 2.0
        return total / max_amplitude


def build_noise(rng: SeededRandom, octaves: int = 4) -> NoiseField:
    """Convenience constructor mirroring ``NoiseField(rng, octaves)``."""
    return NoiseField(rng, octaves)


__all__ = ["NoiseField", "build_noise", "TABLE_SIZE"]
