"""Island shaping: border falloff that pulls elevation toward zero."""

import numpy as np
from numpy.typing import NDArray

MIN_BORDER = 0.01
MAX_BORDER = 0.5
MIN_CURVE = 1.0
MAX_CURVE = 10.0


def axis_edge_strength(
    coords: NDArray[np.float64],
    size: int,
    border: float,
) -> NDArray[np.float64]:
    """Edge strength along one axis.

    Zero in the interior, rising linearly to 1 at the outer edge of the
    border band.

    Args:
        coords: Cell indices along the axis.
        size: Axis length in cells.
        border: Border band as a fraction of the axis length.

    Returns:
        Edge strength per coordinate, in [0, 1].
    """
    frac = np.asarray(coords, dtype=np.float64) / size
    strength = np.zeros_like(frac)

    near = frac < border
    far = frac > 1.0 - border
    strength[near] = 1.0 - frac[near] / border
    strength[far] = (frac[far] - (1.0 - border)) / border
    return strength


def island_falloff(
    xs: NDArray[np.float64],
    ys: NDArray[np.float64],
    width: int,
    height: int,
    island_border: float,
    island_curve: float,
) -> NDArray[np.float64]:
    """Multiplicative falloff for a block of cells.

    The two axis strengths are summed, raised to the curve exponent and
    subtracted from one. The factor is clamped at zero, since the summed
    strength reaches 2 in the corners.

    Args:
        xs: 1D array of cell columns.
        ys: 1D array of cell rows.
        width: Map width.
        height: Map height.
        island_border: Border fraction, clamped to [0.01, 0.5].
        island_curve: Curve exponent, clamped to [1, 10].

    Returns:
        Array of shape (len(ys), len(xs)) with factors in [0, 1].
    """
    border = float(np.clip(island_border, MIN_BORDER, MAX_BORDER))
    curve = float(np.clip(island_curve, MIN_CURVE, MAX_CURVE))

    edge_x = axis_edge_strength(xs, width, border)
    edge_y = axis_edge_strength(ys, height, border)
    edge = edge_y[:, np.newaxis] + edge_x[np.newaxis, :]

    return np.maximum(1.0 - edge**curve, 0.0)
