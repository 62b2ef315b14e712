"""Biome classification from elevation, slope and climate noise."""

import math

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from .biomes import Biome, BiomeRule, CellState, biome_rules
from .config import BiomeConfig, GenerationConfig
from .grids import as_grid
from .noise import NoiseChannel, NoiseField
from .parallel import map_row_bands

logger = structlog.get_logger()

# One cell is one meter on a map one kilometer across.
SLOPE_SCALE = 1000.0


class ClimateRange:
    """Normalized temperature and humidity bounds for a biome config.

    Temperature maps -10..40 C onto [0, 1], humidity 0..100 % onto [0, 1].
    """

    def __init__(self, config: BiomeConfig):
        avg_temp = _unit((config.base_temperature + 10.0) / 50.0)
        avg_hum = _unit(config.base_humidity / 100.0)
        temp_var = _unit(config.temperature_variation / 100.0)
        hum_var = _unit(config.humidity_variation / 100.0)

        self.min_temperature = avg_temp - temp_var
        self.max_temperature = avg_temp + temp_var
        self.min_humidity = avg_hum - hum_var
        self.max_humidity = avg_hum + hum_var

    def temperature(self, noise: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map [0, 1] noise onto the temperature range."""
        return noise * (self.max_temperature - self.min_temperature) + self.min_temperature

    def humidity(self, noise: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map [0, 1] noise onto the humidity range."""
        return noise * (self.max_humidity - self.min_humidity) + self.min_humidity


def _unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def compute_slope(elevation: NDArray[np.float32]) -> NDArray[np.float32]:
    """Normalized steepness per cell.

    For interior cells, the mean absolute difference to the four axis
    neighbours is scaled by SLOPE_SCALE and mapped through
    atan(slope) / (pi/2). Boundary cells have zero slope.

    Args:
        elevation: 2D elevation array.

    Returns:
        2D array of steepness values in [0, 1].
    """
    elevation = np.asarray(elevation, dtype=np.float32)
    height, width = elevation.shape
    slope = np.zeros((height, width), dtype=np.float32)
    if height < 3 or width < 3:
        return slope

    center = elevation[1:-1, 1:-1]
    diff = (
        np.abs(elevation[1:-1, :-2] - center)
        + np.abs(elevation[1:-1, 2:] - center)
        + np.abs(elevation[:-2, 1:-1] - center)
        + np.abs(elevation[2:, 1:-1] - center)
    ) / 4.0

    angle = np.arctan(diff * SLOPE_SCALE) / (math.pi / 2.0)
    slope[1:-1, 1:-1] = np.clip(angle, 0.0, 1.0)
    return slope


def classify_cells(
    state: CellState,
    rules: tuple[BiomeRule, ...],
) -> NDArray[np.uint8]:
    """Apply the rule list to arrays of cell inputs.

    Args:
        state: CellState whose fields are equally shaped arrays (sea level
            may be a scalar).
        rules: Ordered rules; the first match wins per cell.

    Returns:
        Array of Biome codes, shaped like the elevation field.
    """
    shape = np.shape(state.elevation)
    labels = np.zeros(shape, dtype=np.uint8)
    assigned = np.zeros(shape, dtype=bool)

    for rule in rules:
        hit = np.broadcast_to(rule.predicate(state), shape) & ~assigned
        labels[hit] = int(rule.biome)
        assigned |= hit
        if assigned.all():
            break

    return labels


def classify_biomes(
    config: GenerationConfig,
    biome_config: BiomeConfig,
    heightmap: ArrayLike,
    seed: int,
    workers: int | None = None,
) -> NDArray[np.uint8]:
    """Classify every cell of a heightmap into a biome.

    Args:
        config: Generation config (dimensions and sea level).
        biome_config: Climate parameters.
        heightmap: Elevation grid, flat or (height, width).
        seed: Resolved climate seed.
        workers: Number of row-band threads (None = default).

    Returns:
        Array of shape (height, width), dtype uint8, holding Biome codes.

    Raises:
        GridShapeError: If the heightmap shape doesn't match the config.
    """
    width, height = config.width, config.height
    elevation = as_grid(heightmap, width, height)
    sea_level = _unit(config.sea_level)

    climate = ClimateRange(biome_config)
    rules = biome_rules(biome_config.slope_rules)
    temperature_field = NoiseField.for_channel(seed, NoiseChannel.TEMPERATURE)
    humidity_field = NoiseField.for_channel(seed, NoiseChannel.HUMIDITY)

    if biome_config.slope_rules:
        slope = compute_slope(elevation)
    else:
        slope = np.zeros((height, width), dtype=np.float32)

    xs = np.arange(width, dtype=np.float64)
    biomes = np.empty((height, width), dtype=np.uint8)

    def fill_rows(start: int, stop: int) -> None:
        ys = np.arange(start, stop, dtype=np.float64)
        temperature = climate.temperature(
            temperature_field.sample_grid(xs, ys, biome_config.scale)
        )
        humidity = climate.humidity(
            humidity_field.sample_grid(xs, ys, biome_config.scale)
        )
        state = CellState(
            elevation=elevation[start:stop],
            sea_level=sea_level,
            slope=slope[start:stop],
            temperature=temperature,
            humidity=humidity,
        )
        biomes[start:stop] = classify_cells(state, rules)

    map_row_bands(height, fill_rows, workers)

    _log_biome_stats(biomes)
    return biomes


def _log_biome_stats(biomes: NDArray[np.uint8]) -> None:
    """Log the share of each biome."""
    counts = np.bincount(biomes.ravel(), minlength=len(Biome))
    total = biomes.size
    shares = {
        biome.name.lower(): round(float(counts[biome]) / total, 4)
        for biome in Biome
        if counts[biome]
    }
    logger.info("biomes_classified", cells=total, shares=shares)
