"""Tests for heightfield.grid module."""

import numpy as np
import pytest

from heightfield.grid import Heightfield


class TestHeightfieldConstruction:
    """Tests for Heightfield allocation."""

    def test_zero_filled_buffer(self):
        """Direct-size construction allocates columns*rows zeros."""
        hf = Heightfield(4, 3)
        assert hf.array.shape == (12,)
        assert hf.array.dtype == np.float32
        assert not hf.array.any()

    def test_dimensions(self):
        """Accessors report the construction dimensions."""
        hf = Heightfield(5, 2)
        assert hf.columns == 5
        assert hf.rows == 2
        assert hf.column_count() == 5
        assert hf.row_count() == 2

    def test_from_data_copies(self):
        """Data passed in is copied, not aliased."""
        src = np.arange(6, dtype=np.float32)
        hf = Heightfield(3, 2, src)
        src[0] = 99.0
        assert hf.array[0] == 0.0

    def test_from_2d_data(self):
        """2-D data is flattened row-major."""
        hf = Heightfield(2, 2, [[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_array_equal(hf.array, [1.0, 2.0, 3.0, 4.0])

    def test_wrong_data_size(self):
        """Data with the wrong number of elements is rejected."""
        with pytest.raises(ValueError):
            Heightfield(3, 3, np.zeros(8))

    @pytest.mark.parametrize(('columns', 'rows'), [(0, 1), (1, 0), (-2, 3)])
    def test_invalid_dimensions(self, columns, rows):
        """Dimensions below 1 raise ValueError."""
        with pytest.raises(ValueError):
            Heightfield(columns, rows)

    def test_buffers_not_shared(self):
        """Two heightfields built from the same data own separate buffers."""
        data = np.ones(4)
        a = Heightfield(2, 2, data)
        b = Heightfield(2, 2, data)
        a.array[0] = 5.0
        assert b.array[0] == 1.0


class TestHeightfieldAccess:
    """Tests for buffer access."""

    def test_index_layout(self):
        """Element (x, y) is stored at x + y*columns."""
        hf = Heightfield(3, 2)
        hf.array[1 + 1 * 3] = 7.0
        assert hf.as_grid()[1, 1] == 7.0

    def test_as_grid_is_view(self):
        """as_grid writes through to the buffer."""
        hf = Heightfield(3, 2)
        grid = hf.as_grid()
        assert grid.shape == (2, 3)
        grid[0, 2] = 4.5
        assert hf.array[2] == 4.5

    def test_repr(self):
        """repr shows the dimensions."""
        assert repr(Heightfield(2, 3)) == 'Heightfield(columns=2, rows=3)'
