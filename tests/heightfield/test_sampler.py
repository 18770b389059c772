"""Tests for heightfield.sampler module."""

import numpy as np
import pytest

from heightfield.grid import Heightfield
from heightfield.sampler import sample_height, sample_heights


def make_grid(rows):
    """Heightfield from a list of rows (top row first)."""
    return Heightfield(len(rows[0]), len(rows), np.array(rows, dtype=np.float32))


@pytest.fixture
def grid_3x2():
    # 3 columns, 2 rows
    return make_grid([[0.0, 10.0, 20.0], [30.0, 40.0, 50.0]])


class TestSampleHeightGridPoints:
    """Integer coordinates return stored values."""

    def test_every_grid_point_exact(self, grid_3x2):
        """Each in-bounds integer coordinate equals the stored element."""
        for y in range(grid_3x2.rows):
            for x in range(grid_3x2.columns):
                stored = float(grid_3x2.array[x + y * grid_3x2.columns])
                assert sample_height(grid_3x2, x, y) == stored

    def test_exact_with_non_representable_values(self):
        """Exactness holds for values that are not round numbers."""
        hf = make_grid([[0.1, 0.7, 1.3], [2.9, 3.3, 4.1], [5.5, 6.6, 7.7]])
        assert sample_height(hf, 1, 1) == float(np.float32(3.3))
        assert sample_height(hf, 2, 2) == float(np.float32(7.7))

    def test_method_on_heightfield(self, grid_3x2):
        """Heightfield.height delegates to the sampler."""
        assert grid_3x2.height(1, 1) == 40.0


class TestSampleHeightInterpolation:
    """Bilinear interpolation inside the grid."""

    def test_cell_center(self, grid_3x2):
        """Centre of a cell is the mean of its four corners."""
        assert sample_height(grid_3x2, 0.5, 0.5) == pytest.approx(20.0)

    def test_along_column_axis(self, grid_3x2):
        """Fractional column on an integer row interpolates horizontally."""
        assert sample_height(grid_3x2, 0.25, 0.0) == pytest.approx(2.5)

    def test_along_row_axis(self, grid_3x2):
        """Fractional row on an integer column interpolates vertically."""
        assert sample_height(grid_3x2, 1.0, 0.75) == pytest.approx(32.5)

    def test_weights(self):
        """Weights follow (1-xf)(1-yf), (1-xf)yf, xf*yf, xf(1-yf)."""
        xf, yf = 0.3, 0.6
        expected = (
            1.0 * (1 - xf) * (1 - yf)
            + 3.0 * (1 - xf) * yf
            + 5.0 * xf * yf
            + 2.0 * xf * (1 - yf)
        )
        wide = make_grid([[1.0, 2.0, 0.0], [3.0, 5.0, 0.0], [0.0, 0.0, 0.0]])
        assert sample_height(wide, xf, yf) == pytest.approx(expected)


class TestSampleHeightBoundaries:
    """Boundary policy: no wraparound, no extrapolation."""

    def test_bottom_right_corner_exact(self, grid_3x2):
        """Last column and last row returns the stored value."""
        assert sample_height(grid_3x2, 2.0, 1.0) == 50.0

    def test_last_column_interpolates_rows_only(self, grid_3x2):
        """On the last column only the row fraction matters."""
        assert sample_height(grid_3x2, 2.0, 0.5) == pytest.approx(35.0)

    def test_last_row_interpolates_columns_only(self, grid_3x2):
        """On the last row only the column fraction matters."""
        assert sample_height(grid_3x2, 1.5, 1.0) == pytest.approx(45.0)

    @pytest.mark.parametrize(
        ('outside', 'inside'),
        [
            ((-5.0, -5.0), (0.0, 0.0)),
            ((10.0, 0.5), (2.0, 0.5)),
            ((0.5, 99.0), (0.5, 1.0)),
            ((-1.0, 0.25), (0.0, 0.25)),
            ((7.0, 7.0), (2.0, 1.0)),
        ],
    )
    def test_clamped_equals_nearest_inside(self, grid_3x2, outside, inside):
        """Out-of-range coordinates behave as the nearest in-range ones."""
        assert sample_height(grid_3x2, *outside) == sample_height(grid_3x2, *inside)

    def test_single_cell_grid(self):
        """1x1 grid returns its only value everywhere."""
        hf = make_grid([[42.0]])
        assert sample_height(hf, 0.0, 0.0) == 42.0
        assert sample_height(hf, 3.7, -2.0) == 42.0

    def test_single_row_grid(self):
        """A single row interpolates along columns only."""
        hf = make_grid([[0.0, 100.0]])
        assert sample_height(hf, 0.5, 0.9) == pytest.approx(50.0)

    def test_does_not_mutate(self, grid_3x2):
        """Sampling leaves the buffer untouched."""
        before = grid_3x2.array.copy()
        sample_height(grid_3x2, 0.7, 0.2)
        sample_height(grid_3x2, -1.0, 9.0)
        np.testing.assert_array_equal(grid_3x2.array, before)


class TestSampleHeights:
    """Vectorised sampling matches scalar sampling."""

    def test_matches_scalar(self):
        """Random and boundary coordinates give the scalar results."""
        rng = np.random.default_rng(7)
        hf = Heightfield(5, 4, rng.uniform(-20.0, 80.0, size=20))
        cols = np.concatenate([rng.uniform(-1.0, 5.0, 50), [0.0, 4.0, 4.0, 2.5]])
        rows = np.concatenate([rng.uniform(-1.0, 4.0, 50), [3.0, 3.0, 1.5, 3.0]])
        result = sample_heights(hf, cols, rows)
        expected = [sample_height(hf, c, r) for c, r in zip(cols, rows)]
        np.testing.assert_allclose(result, expected, rtol=1e-12, atol=1e-9)

    def test_broadcasts(self, grid_3x2):
        """Scalar row broadcasts against an array of columns."""
        result = sample_heights(grid_3x2, [0.0, 1.0, 2.0], 0.0)
        np.testing.assert_allclose(result, [0.0, 10.0, 20.0])
