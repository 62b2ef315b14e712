"""Post-generation checks on heightmaps and biome grids."""

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy import ndimage

from .biomes import Biome
from .config import GenerationConfig

logger = structlog.get_logger()


class ValidationResult:
    """Result of map validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_world(
    heightmap: NDArray[np.float32],
    biomes: NDArray[np.uint8] | None,
    config: GenerationConfig,
) -> ValidationResult:
    """Validate generated grids against the map contract.

    Args:
        heightmap: Elevation grid.
        biomes: Biome grid, or None to check the heightmap only.
        config: Generation configuration.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()
    expected_shape = (config.height, config.width)

    _check_shape("heightmap", heightmap, expected_shape, result)
    _check_height_range(heightmap, result)
    _check_land(heightmap, config.sea_level, result)

    if biomes is not None:
        _check_shape("biome grid", biomes, expected_shape, result)
        _check_biome_codes(biomes, result)

    if result.passed:
        logger.info("validation_passed", warnings=len(result.warnings))
    else:
        logger.warning("validation_failed", errors=result.errors)

    for warning in result.warnings:
        logger.warning("validation_warning", message=warning)

    return result


def _check_shape(
    name: str,
    grid: NDArray,
    expected: tuple[int, int],
    result: ValidationResult,
) -> None:
    """Check a grid has the configured dimensions."""
    if np.shape(grid) != expected:
        result.add_error(f"{name} has shape {np.shape(grid)}, expected {expected}")


def _check_height_range(heightmap: NDArray[np.float32], result: ValidationResult) -> None:
    """Check all elevations are finite and within [0, 1]."""
    h = np.asarray(heightmap)
    if not np.all(np.isfinite(h)):
        result.add_error("Heightmap contains non-finite values")
        return

    outside = int(np.sum((h < 0.0) | (h > 1.0)))
    if outside:
        result.add_error(f"{outside} heightmap cells outside [0, 1]")


def _check_land(
    heightmap: NDArray[np.float32],
    sea_level: float,
    result: ValidationResult,
) -> None:
    """Warn when the map has no land or it is split into many pieces."""
    land_mask = np.asarray(heightmap) >= sea_level

    structure = ndimage.generate_binary_structure(2, 2)  # 8-connected
    labeled, num_features = ndimage.label(land_mask, structure=structure)

    if num_features == 0:
        result.add_warning("No land above sea level")
    elif num_features > 1:
        sizes = ndimage.sum(land_mask, labeled, range(1, num_features + 1))
        largest_frac = float(np.max(sizes) / np.sum(land_mask))
        if largest_frac < 0.9:
            result.add_warning(
                f"Fragmented land: {num_features} landmasses, "
                f"largest is {largest_frac:.1%} of land"
            )


def _check_biome_codes(biomes: NDArray[np.uint8], result: ValidationResult) -> None:
    """Check every code is a known Biome."""
    unknown = int(np.sum(np.asarray(biomes) >= len(Biome)))
    if unknown:
        result.add_error(f"{unknown} biome cells hold unknown codes")
