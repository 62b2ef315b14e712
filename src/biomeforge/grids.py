"""Helpers for accepting heightmaps in flat or 2D form."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import GridShapeError


def _accepted_shape(shape: tuple[int, ...], width: int, height: int) -> bool:
    """Flat width*height, or exactly (height, width)."""
    return shape == (width * height,) or shape == (height, width)


def matches_dimensions(data: ArrayLike | None, width: int, height: int) -> bool:
    """Whether `data` is a flat width*height sequence or a (height, width) grid."""
    if data is None:
        return False
    return _accepted_shape(np.shape(data), width, height)


def as_grid(
    data: ArrayLike,
    width: int,
    height: int,
    dtype: type = np.float32,
) -> NDArray:
    """View row-major cell data as a (height, width) array.

    Args:
        data: Flat sequence of width*height values, or a (height, width) array.
        width: Grid width.
        height: Grid height.
        dtype: Element type of the returned array.

    Returns:
        Array of shape (height, width). May share memory with `data`.

    Raises:
        GridShapeError: If the shape is neither flat width*height nor
            (height, width).
    """
    array = np.asarray(data, dtype=dtype)
    if not _accepted_shape(array.shape, width, height):
        raise GridShapeError(
            f"Grid has shape {array.shape}, expected ({height}, {width}) "
            f"or ({width * height},)"
        )
    return array.reshape(height, width)
