"""Map persistence: save/load generated grids and export them."""

import json
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import structlog
from numpy.typing import NDArray
from PIL import Image

from .config import GenerationConfig
from .exceptions import MapFileError

logger = structlog.get_logger()

MAP_FORMAT_VERSION = 1
NODATA_VALUE = -9999


def save_map(
    path: Path,
    heightmap: NDArray[np.float32],
    biomes: NDArray[np.uint8] | None,
    config: GenerationConfig,
    seed: int,
) -> None:
    """Save generated grids to disk.

    Uses numpy's compressed .npz format.

    Args:
        path: Output path (should end with .npz).
        heightmap: Elevation grid.
        biomes: Biome grid, or None if not classified yet.
        config: Generation configuration used.
        seed: Resolved seed the heightmap was generated with.
    """
    metadata = {
        "version": MAP_FORMAT_VERSION,
        "seed": seed,
        "width": config.width,
        "height": config.height,
        "sea_level": config.sea_level,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    arrays = {
        "heightmap": np.asarray(heightmap, dtype=np.float32),
        "metadata": np.frombuffer(json.dumps(metadata).encode("utf-8"), dtype=np.uint8),
    }
    if biomes is not None:
        arrays["biomes"] = np.asarray(biomes, dtype=np.uint8)

    np.savez_compressed(path, **arrays)

    file_size = path.stat().st_size / 1024
    logger.info("map_saved", path=str(path), size_kb=round(file_size, 1))


def load_map(
    path: Path,
) -> tuple[NDArray[np.float32], NDArray[np.uint8] | None, dict]:
    """Load grids saved by save_map.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (heightmap, biomes or None, metadata dict).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MapFileError: If the heightmap array is missing.
    """
    if not path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")

    with np.load(path) as data:
        if "heightmap" not in data:
            raise MapFileError(f"Invalid map file {path}: missing 'heightmap' array")
        heightmap = data["heightmap"]
        biomes = data["biomes"] if "biomes" in data else None

        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        else:
            metadata = {}

    logger.info(
        "map_loaded",
        path=str(path),
        width=heightmap.shape[1],
        height=heightmap.shape[0],
    )
    return heightmap, biomes, metadata


def export_ascii_grid(
    path: Path,
    heightmap: NDArray[np.float32],
    min_elevation: float = 0.0,
    max_elevation: float = 1000.0,
) -> None:
    """Write a heightmap as an ESRI ASCII grid.

    Normalized values are scaled into [min_elevation, max_elevation].

    Args:
        path: Output path (usually .asc).
        heightmap: 2D elevation array in [0, 1].
        min_elevation: Elevation written for 0.
        max_elevation: Elevation written for 1.
    """
    grid = np.asarray(heightmap, dtype=np.float64)
    nrows, ncols = grid.shape
    elevations = min_elevation + grid * (max_elevation - min_elevation)

    with open(path, "w", encoding="ascii") as f:
        f.write(f"ncols         {ncols}\n")
        f.write(f"nrows         {nrows}\n")
        f.write("xllcorner     0.0\n")
        f.write("yllcorner     0.0\n")
        f.write("cellsize      1.0\n")
        f.write(f"NODATA_value  {NODATA_VALUE}\n")
        for row in elevations:
            f.write(" ".join(f"{value:.2f}" for value in row))
            f.write("\n")

    logger.info("ascii_grid_exported", path=str(path), ncols=ncols, nrows=nrows)


def export_png(path: Path, pixels: NDArray[np.uint8]) -> None:
    """Write an 8-bit grayscale (2D) or RGB (3D) array as a PNG."""
    pixels = np.asarray(pixels, dtype=np.uint8)
    Image.fromarray(pixels).save(path, format="PNG")
    logger.info("png_exported", path=str(path), shape=pixels.shape)
