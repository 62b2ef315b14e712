"""Coherent noise sampling for map generation.

Every logical noise layer (elevation octaves, temperature, humidity) reads
from its own channel. A channel's seed is the base seed plus a fixed
offset, so layers stay decorrelated even when they share a base seed.
"""

from enum import IntEnum
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

SEED_MASK = 0xFFFFFFFF


class NoiseChannel(IntEnum):
    """Noise channels and their seed offsets."""

    ELEVATION_BASE = 0
    ELEVATION_MID = 100
    ELEVATION_DETAIL = 200
    TEMPERATURE = 1000
    HUMIDITY = 2000


def channel_seed(seed: int, channel: NoiseChannel) -> int:
    """Derive the seed for a noise channel, wrapping to 32 bits."""
    return (seed + int(channel)) & SEED_MASK


@lru_cache(maxsize=32)
def _generator(seed: int) -> OpenSimplex:
    return OpenSimplex(seed=seed)


class NoiseField:
    """Deterministic 2D coherent noise remapped to [0, 1].

    Output is a pure function of (seed, x, y, scale).
    """

    def __init__(self, seed: int):
        self.seed = seed & SEED_MASK
        self._noise = _generator(self.seed)

    @classmethod
    def for_channel(cls, seed: int, channel: NoiseChannel) -> "NoiseField":
        """Create the field for a named channel of a base seed."""
        return cls(channel_seed(seed, channel))

    def sample(self, x: float, y: float, scale: float) -> float:
        """Sample a single point.

        Args:
            x: Cell column.
            y: Cell row.
            scale: Wavelength in cells; coordinates are divided by it.

        Returns:
            Noise value in [0, 1].
        """
        raw = self._noise.noise2(x / scale, y / scale)
        return min(max((raw + 1.0) / 2.0, 0.0), 1.0)

    def sample_grid(
        self,
        xs: NDArray[np.float64],
        ys: NDArray[np.float64],
        scale: float,
    ) -> NDArray[np.float64]:
        """Sample a rectangular block of cells.

        Args:
            xs: 1D array of cell columns.
            ys: 1D array of cell rows.
            scale: Wavelength in cells.

        Returns:
            Array of shape (len(ys), len(xs)) with values in [0, 1].
        """
        xs = np.asarray(xs, dtype=np.float64) / scale
        ys = np.asarray(ys, dtype=np.float64) / scale
        raw = self._noise.noise2array(xs, ys)
        return np.clip((raw + 1.0) / 2.0, 0.0, 1.0)
