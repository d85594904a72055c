from __future__ import annotations

"""Deterministic linear-congruential random stream used by every generator step."""

from typing import List, Sequence, TypeVar

T = TypeVar("T")

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2 ** 32

# Per-tile stream mixing constants
TILE_Q_FACTOR = 31337
TILE_R_FACTOR = 99991


class SeededRandom:
    """
    Reproducible stream of floats in [0, 1).

    Each draw advances ``state = (state * 1664525 + 1013904223) mod 2**32`` and
    returns ``state / 2**32``. Two instances built from the same seed yield the
    same sequence; there is no shared module state.
    """

    __slots__ = ("seed", "_state")

    def __init__(self, seed: int) -> None:
        self.seed = int(seed)
        self._state = self.seed % _MODULUS

    def random(self) -> float:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    __call__ = random

    def randrange(self, n: int) -> int:
        """Return an integer in ``[0, n)`` using one draw."""
        if n <= 0:
            raise ValueError("randrange() needs a positive bound")
        return int(self.random() * n)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.randrange(len(seq))]

    def shuffle_indices(self, length: int) -> List[int]:
        """
        Fisher-Yates shuffle of ``range(length)``, walking from the last index down.
        """
        indices = list(range(length))
        for i in range(length - 1, 0, -1):
            j = self.randrange(i + 1)
            indices[i], indices[j] = indices[j], indices[i]
        return indices

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed}, state={self._state})"


def tile_seed(q: int, r: int, world_seed: int) -> int:
    """Seed of the position-derived stream for the tile at ``(q, r)``."""
    return q * TILE_Q_FACTOR + r * TILE_R_FACTOR + world_seed


def tile_rng(q: int, r: int, world_seed: int) -> SeededRandom:
    """
    Return a fresh stream that depends only on the tile position and the world seed,
    so a tile's random decisions do not depend on generation order.
    """
    return SeededRandom(tile_seed(q, r, world_seed))


__all__ = ["SeededRandom", "tile_seed", "tile_rng", "TILE_Q_FACTOR", "TILE_R_FACTOR"]
