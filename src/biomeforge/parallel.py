"""Row-band fan-out for per-cell grid computations.

Each band is a contiguous, disjoint range of rows. A band callback owns its
rows of the output exclusively, so no locking is needed.
"""

import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

MIN_ROWS_PER_BAND = 16


def default_workers() -> int:
    """Worker count used when the caller doesn't specify one."""
    return min(8, os.cpu_count() or 1)


def row_bands(height: int, workers: int) -> list[tuple[int, int]]:
    """Split [0, height) into at most `workers` contiguous bands.

    Bands are never smaller than MIN_ROWS_PER_BAND rows unless the whole
    grid is.

    Args:
        height: Number of rows.
        workers: Desired number of bands.

    Returns:
        List of (start, stop) row ranges covering every row exactly once.
    """
    if height <= 0:
        return []
    count = max(1, min(workers, height // MIN_ROWS_PER_BAND or 1))
    step, extra = divmod(height, count)
    bands = []
    start = 0
    for i in range(count):
        stop = start + step + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


def map_row_bands(
    height: int,
    fill_rows: Callable[[int, int], None],
    workers: int | None = None,
) -> None:
    """Run `fill_rows(start, stop)` over disjoint row bands.

    Args:
        height: Number of rows in the output grid.
        fill_rows: Callback that computes and writes rows [start, stop).
        workers: Thread count; 1 runs inline, None uses default_workers().

    Raises:
        Exception: Whatever a band callback raised.
    """
    workers = default_workers() if workers is None else max(1, workers)
    bands = row_bands(height, workers)

    if len(bands) <= 1:
        for start, stop in bands:
            fill_rows(start, stop)
        return

    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures = [pool.submit(fill_rows, start, stop) for start, stop in bands]
        for future in futures:
            future.result()
