"""Bilinear height queries over a Heightfield."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from heightfield.grid import Heightfield


def sample_height(heightfield: Heightfield, column: float, row: float) -> float:
    """
    Height at a fractional (column, row) position.

    Coordinates are clamped to the grid. On the last column the value is
    interpolated along the row axis only, on the last row along the column
    axis only, and the bottom-right corner returns the stored value as is.

    Args:
        heightfield: Populated grid (never modified).
        column: Fractional x position.
        row: Fractional y position.

    Returns:
        Interpolated height.

    """
    cols = heightfield.columns
    rows = heightfield.rows
    data = heightfield.array

    # Ограничиваем координаты границами сетки
    column = max(0.0, min(float(column), cols - 1.0))
    row = max(0.0, min(float(row), rows - 1.0))

    x1 = int(column)
    y1 = int(row)
    x2 = x1 + 1
    y2 = y1 + 1
    x_factor = column - x1
    y_factor = row - y1
    x_factor_i = 1.0 - x_factor
    y_factor_i = 1.0 - y_factor

    def at(x: int, y: int) -> float:
        return float(data[x + y * cols])

    if x2 >= cols and y2 >= rows:
        return at(x1, y1)
    if x2 >= cols:
        return at(x1, y1) * y_factor_i + at(x1, y2) * y_factor
    if y2 >= rows:
        return at(x1, y1) * x_factor_i + at(x2, y1) * x_factor

    a = x_factor_i * y_factor_i
    b = x_factor_i * y_factor
    c = x_factor * y_factor
    d = x_factor * y_factor_i
    return at(x1, y1) * a + at(x1, y2) * b + at(x2, y2) * c + at(x2, y1) * d


def sample_heights(
    heightfield: Heightfield,
    columns: ArrayLike,
    rows: ArrayLike,
) -> np.ndarray:
    """
    Vectorised sample_height over arrays of coordinates.

    Neighbour indices past the last column/row are clamped back onto it;
    their weight is zero there, so results match the scalar boundary policy.

    Returns:
        float64 array broadcast from ``columns`` and ``rows``.

    """
    cols = heightfield.columns
    n_rows = heightfield.rows
    grid = heightfield.as_grid().astype(np.float64, copy=False)

    col = np.clip(np.asarray(columns, dtype=np.float64), 0.0, cols - 1.0)
    row = np.clip(np.asarray(rows, dtype=np.float64), 0.0, n_rows - 1.0)
    col, row = np.broadcast_arrays(col, row)

    x1 = np.floor(col).astype(np.intp)
    y1 = np.floor(row).astype(np.intp)
    x2 = np.minimum(x1 + 1, cols - 1)
    y2 = np.minimum(y1 + 1, n_rows - 1)
    xf = col - x1
    yf = row - y1

    v11 = grid[y1, x1]
    v12 = grid[y2, x1]
    v22 = grid[y2, x2]
    v21 = grid[y1, x2]

    return (
        v11 * ((1.0 - xf) * (1.0 - yf))
        + v12 * ((1.0 - xf) * yf)
        + v22 * (xf * yf)
        + v21 * (xf * (1.0 - yf))
    )
