"""Color rendering of heightmaps and biome grids."""

import numpy as np
from numpy.typing import NDArray

from .biomes import BIOME_COLORS, Biome

DEEP_WATER = (0, 0, 100)
SHALLOW_WATER = (64, 164, 223)
LOWLAND = (34, 139, 34)
HILLS = (160, 82, 45)
ROCK = (139, 137, 137)
SNOW = (255, 250, 250)

# (upper bound, relative to sea level, color), checked in order; above all is SNOW.
HEIGHT_BANDS: list[tuple[float, bool, tuple[int, int, int]]] = [
    (0.6, True, DEEP_WATER),
    (1.0, True, SHALLOW_WATER),
    (0.5, False, LOWLAND),
    (0.65, False, HILLS),
    (0.85, False, ROCK),
]


def _band_limits(sea_level: float) -> list[tuple[float, tuple[int, int, int]]]:
    return [
        (bound * sea_level if relative else bound, color)
        for bound, relative, color in HEIGHT_BANDS
    ]


def height_color(h: float, sea_level: float) -> tuple[int, int, int]:
    """Preview color for a single elevation value."""
    for limit, color in _band_limits(sea_level):
        if h < limit:
            return color
    return SNOW


def heightmap_to_rgb(
    heightmap: NDArray[np.float32],
    sea_level: float,
) -> NDArray[np.uint8]:
    """Render a heightmap with the elevation band palette.

    Args:
        heightmap: 2D elevation array.
        sea_level: Normalized sea level.

    Returns:
        Array of shape (height, width, 3).
    """
    h = np.asarray(heightmap)
    rgb = np.empty(h.shape + (3,), dtype=np.uint8)
    rgb[...] = SNOW
    # Paint from the last band backwards so earlier bands win.
    for limit, color in reversed(_band_limits(sea_level)):
        rgb[h < limit] = color
    return rgb


def heightmap_to_grayscale(heightmap: NDArray[np.float32]) -> NDArray[np.uint8]:
    """Map [0, 1] elevation to 8-bit gray levels.

    Values are scaled by 255 and truncated, so only 1.0 reaches 255.
    """
    h = np.clip(np.asarray(heightmap, dtype=np.float64) * 255.0, 0.0, 255.0)
    return h.astype(np.uint8)


def biomes_to_rgb(biomes: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Render a biome grid with the biome palette.

    Args:
        biomes: 2D array of Biome codes.

    Returns:
        Array of shape (height, width, 3).
    """
    palette = np.array([BIOME_COLORS[biome] for biome in Biome], dtype=np.uint8)
    return palette[np.asarray(biomes, dtype=np.intp)]
