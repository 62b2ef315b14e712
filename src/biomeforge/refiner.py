"""Heightmap refinement: offset, scale, exponent and renormalization."""

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from .config import GenerationConfig, RefinerConfig
from .grids import as_grid

logger = structlog.get_logger()


def transform_heights(
    heights: NDArray[np.float64],
    config: RefinerConfig,
) -> NDArray[np.float64]:
    """Apply `((v + offset) * coeff) ** exponent` to every cell.

    With a non-integer exponent, negative bases are clamped to zero before
    the power so the result stays real.

    Args:
        heights: Elevation values.
        config: Refiner parameters.

    Returns:
        Transformed values (not normalized).
    """
    values = (heights + config.height_offset) * config.height_coeff
    exponent = config.height_exponent
    if not float(exponent).is_integer():
        values = np.maximum(values, 0.0)
    return np.power(values, exponent)


def renormalize(values: NDArray[np.float64]) -> NDArray[np.float64]:
    """Stretch values to [0, 1]. A flat grid is returned unchanged."""
    low = values.min()
    high = values.max()
    if high > low:
        return (values - low) / (high - low)
    return values


def refine_heightmap(
    heightmap: ArrayLike,
    refiner: RefinerConfig,
    config: GenerationConfig,
) -> NDArray[np.float32]:
    """Refine an existing heightmap.

    Args:
        heightmap: Elevation grid, flat or (height, width).
        refiner: Transform parameters.
        config: Generation config, used for dimensions only.

    Returns:
        New array of shape (height, width), dtype float32. Values are in
        [0, 1] unless the transformed grid is flat.

    Raises:
        GridShapeError: If the heightmap shape doesn't match the config.
    """
    grid = as_grid(heightmap, config.width, config.height, dtype=np.float64)

    _log_reserved_options(refiner)

    refined = renormalize(transform_heights(grid, refiner))

    logger.info(
        "heightmap_refined",
        offset=refiner.height_offset,
        coeff=refiner.height_coeff,
        exponent=refiner.height_exponent,
    )
    return refined.astype(np.float32)


def _log_reserved_options(refiner: RefinerConfig) -> None:
    """Note refiner options that are accepted but have no effect."""
    reserved = {
        "smoothness": refiner.smoothness > 0,
        "curve_points": bool(refiner.curve_points),
        "paint_map_overlay": refiner.paint_map_overlay is not None,
    }
    ignored = [name for name, is_set in reserved.items() if is_set]
    if ignored:
        logger.debug("refiner_options_ignored", options=ignored)
