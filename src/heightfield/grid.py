"""Owned elevation buffer with fixed grid dimensions."""

from __future__ import annotations

import numpy as np

from heightfield.sampler import sample_height
from shared.constants import HEIGHT_DTYPE


class Heightfield:
    """
    Dense row-major grid of elevations.

    Element (x, y) lives at ``array[x + y * columns]``; row 0 is the top
    row of the terrain. Dimensions are fixed for the lifetime of the
    instance and the buffer is never shared with another Heightfield.

    Usage:
        hf = Heightfield(columns=4, rows=3)
        hf.array[:] = 1.0
        h = hf.height(1.5, 0.25)
    """

    __slots__ = ('_array', '_cols', '_rows')

    def __init__(
        self,
        columns: int,
        rows: int,
        data: np.ndarray | None = None,
    ) -> None:
        """
        Allocate a zero-filled grid, or copy ``data`` into a new one.

        Args:
            columns: Number of columns (>= 1).
            rows: Number of rows (>= 1).
            data: Optional elevations, any shape with columns*rows elements
                in row-major order.

        """
        columns = int(columns)
        rows = int(rows)
        if columns < 1 or rows < 1:
            msg = f'Heightfield dimensions must be >= 1, got {columns}x{rows}'
            raise ValueError(msg)
        self._cols = columns
        self._rows = rows
        if data is None:
            self._array = np.zeros(columns * rows, dtype=HEIGHT_DTYPE)
        else:
            flat = np.array(data, dtype=HEIGHT_DTYPE).reshape(-1)
            if flat.size != columns * rows:
                msg = (
                    f'Expected {columns * rows} elevations for '
                    f'{columns}x{rows} grid, got {flat.size}'
                )
                raise ValueError(msg)
            self._array = flat

    @property
    def columns(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def array(self) -> np.ndarray:
        """Raw 1-D buffer; writes go straight into the grid."""
        return self._array

    def column_count(self) -> int:
        return self._cols

    def row_count(self) -> int:
        return self._rows

    def as_grid(self) -> np.ndarray:
        """2-D ``(rows, columns)`` view over the same buffer."""
        return self._array.reshape(self._rows, self._cols)

    def height(self, column: float, row: float) -> float:
        """Bilinearly interpolated height at a fractional grid position."""
        return sample_height(self, column, row)

    def __repr__(self) -> str:
        return f'Heightfield(columns={self._cols}, rows={self._rows})'
