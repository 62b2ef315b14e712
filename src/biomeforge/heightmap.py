"""Heightmap synthesis from three noise octaves."""

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from .config import GenerationConfig
from .grids import as_grid, matches_dimensions
from .island import island_falloff
from .noise import NoiseChannel, NoiseField
from .parallel import map_row_bands

logger = structlog.get_logger()

# Blending is skipped when the fresh map would carry essentially full weight.
OVERLAY_FULL_STRENGTH = 0.999


def max_amplitude(config: GenerationConfig) -> float:
    """Theoretical maximum of the unnormalized octave sum."""
    return (
        (1.5**config.mountainous - 0.5) * config.amp_base
        + config.amp_mid
        + config.amp_detail
    )


def overlay_strength(config: GenerationConfig) -> float:
    """Weight of the fresh map in an overlay blend, in [0, 1]."""
    return float(np.clip(config.overlay / 100.0, 0.0, 1.0))


def combine_octaves(
    base: NDArray[np.float64],
    mid: NDArray[np.float64],
    detail: NDArray[np.float64],
    config: GenerationConfig,
    max_amp: float,
) -> NDArray[np.float64]:
    """Combine octave samples into normalized elevation.

    Args:
        base: Base octave samples in [0, 1].
        mid: Mid octave samples in [0, 1].
        detail: Detail octave samples in [0, 1].
        config: Generation parameters.
        max_amp: Result of max_amplitude(config).

    Returns:
        Elevation clamped to [0, 1]. All zeros if max_amp is not positive.
    """
    if max_amp <= 0:
        return np.zeros_like(base)
    h = (base + 0.5) ** config.mountainous
    h = (h - 0.5) * config.amp_base
    h += config.amp_mid * mid
    h += config.amp_detail * detail
    return np.clip(h / max_amp, 0.0, 1.0)


def generate_heightmap(
    config: GenerationConfig,
    seed: int,
    previous: ArrayLike | None = None,
    workers: int | None = None,
) -> NDArray[np.float32]:
    """Generate a normalized elevation grid.

    Args:
        config: Generation parameters.
        seed: Resolved base seed for this call.
        previous: Optional earlier heightmap to blend with. Ignored unless
            it is flat with width*height cells or shaped (height, width),
            and the overlay is below 100.
        workers: Number of row-band threads (None = default).

    Returns:
        Array of shape (height, width), dtype float32, values in [0, 1].
    """
    width, height = config.width, config.height

    base_field = NoiseField.for_channel(seed, NoiseChannel.ELEVATION_BASE)
    mid_field = NoiseField.for_channel(seed, NoiseChannel.ELEVATION_MID)
    detail_field = NoiseField.for_channel(seed, NoiseChannel.ELEVATION_DETAIL)

    max_amp = max_amplitude(config)
    strength = overlay_strength(config)

    previous_grid = None
    if strength < OVERLAY_FULL_STRENGTH:
        if matches_dimensions(previous, width, height):
            previous_grid = as_grid(previous, width, height, dtype=np.float64)
        elif previous is not None:
            logger.warning(
                "overlay_disabled",
                reason="dimension_mismatch",
                previous_shape=np.shape(previous),
                expected_shape=(height, width),
            )

    xs = np.arange(width, dtype=np.float64)
    heightmap = np.empty((height, width), dtype=np.float32)

    def fill_rows(start: int, stop: int) -> None:
        ys = np.arange(start, stop, dtype=np.float64)

        base = base_field.sample_grid(xs, ys, config.scale_base)
        mid = mid_field.sample_grid(xs, ys, config.scale_mid)
        detail = detail_field.sample_grid(xs, ys, config.scale_detail)
        h = combine_octaves(base, mid, detail, config, max_amp)

        if config.island_mode:
            h *= island_falloff(
                xs, ys, width, height, config.island_border, config.island_curve
            )

        if previous_grid is not None:
            h = h * strength + previous_grid[start:stop] * (1.0 - strength)

        heightmap[start:stop] = h

    map_row_bands(height, fill_rows, workers)

    logger.info(
        "heightmap_generated",
        width=width,
        height=height,
        seed=seed,
        island=config.island_mode,
        blended=previous_grid is not None,
    )
    return heightmap
