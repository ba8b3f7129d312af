"""
Tests for two dimensional grid interpolation.

Tests both interpolation types with focus on:
- Exact reproduction at grid points
- Bilinear extrapolation from the edge cells
- Degenerate single row and single column grids
- Sensitivities to the grid values
"""

import pytest
import numpy as np
from lagcurves.market.curves.interpolator_2d import Interpolator2D
from lagcurves.utils.global_types import Interp2DTypes
from lagcurves.utils.error import LibError


XS = [1.0, 2.0, 3.0]
YS = [0.1, 0.2]
# a plane: z = x + 30 * (y - 0.1)
ZS = [[1.0, 2.0, 3.0],
      [4.0, 5.0, 6.0]]


@pytest.fixture
def bilinear():
    return Interpolator2D(Interp2DTypes.BILINEAR).fit(XS, YS, ZS)


@pytest.fixture
def bicubic():
    return Interpolator2D(Interp2DTypes.BICUBIC).fit(XS, YS, ZS)


class TestBilinear:
    """Test bilinear interpolation"""

    def test_grid_points(self, bilinear):
        """Test exact values at grid points"""
        for j, y in enumerate(YS):
            for i, x in enumerate(XS):
                assert bilinear.interpolate(x, y) == ZS[j][i]

    def test_inside_cell(self, bilinear):
        """Test a point inside a cell"""
        assert bilinear.interpolate(1.5, 0.15) == pytest.approx(3.0)
        assert bilinear(2.5, 0.1) == pytest.approx(2.5)

    def test_outside_grid_raises(self, bilinear):
        """Test that extrapolation must be allowed"""
        with pytest.raises(LibError):
            bilinear.interpolate(4.0, 0.1)
        with pytest.raises(LibError):
            bilinear.interpolate(2.0, 0.05)

    def test_extrapolation_from_edge_cells(self, bilinear):
        """Test linear extension of the edge cells"""
        assert bilinear.interpolate(4.0, 0.1, True) == pytest.approx(4.0)
        assert bilinear.interpolate(0.0, 0.1, True) == pytest.approx(0.0)
        assert bilinear.interpolate(1.0, 0.3, True) == pytest.approx(7.0)

    def test_single_row_is_flat_in_y(self):
        """Test a grid with one y value"""
        interp = Interpolator2D().fit([1.0, 2.0], [0.5], [[1.0, 3.0]])
        assert interp.interpolate(1.5, 0.5) == pytest.approx(2.0)
        assert interp.interpolate(1.5, 0.9, True) == pytest.approx(2.0)

    def test_single_column_is_flat_in_x(self):
        """Test a grid with one x value"""
        interp = Interpolator2D().fit([2.0], [0.1, 0.3], [[1.0], [3.0]])
        assert interp.interpolate(2.0, 0.2) == pytest.approx(2.0)
        assert interp.interpolate(5.0, 0.2, True) == pytest.approx(2.0)


class TestBicubic:
    """Test bicubic spline interpolation"""

    def test_grid_points(self, bicubic):
        """Test values at grid points"""
        for j, y in enumerate(YS):
            for i, x in enumerate(XS):
                assert bicubic.interpolate(x, y) == pytest.approx(ZS[j][i])

    def test_reproduces_plane(self, bicubic):
        """Test that a plane is interpolated exactly"""
        assert bicubic.interpolate(1.5, 0.15) == pytest.approx(3.0)

    def test_extrapolation_is_flat(self, bicubic):
        """Test that edge values hold outside the grid"""
        assert bicubic.interpolate(2.0, 0.5, True) == pytest.approx(5.0)
        assert bicubic.interpolate(4.0, 0.1, True) == pytest.approx(3.0)


    def test_needs_two_points_each_way(self):
        """Test that degenerate grids raise"""
        with pytest.raises(LibError):
            Interpolator2D(Interp2DTypes.BICUBIC).fit([1.0, 2.0], [0.5],
                                                      [[1.0, 3.0]])

    def test_interp_type(self, bicubic):
        """Test the type accessor"""
        assert bicubic.interp_type() == Interp2DTypes.BICUBIC


class TestSensitivities:
    """Test derivatives with respect to grid values"""

    def test_cell_centre(self, bilinear):
        """Test equal weights at the centre of a cell"""
        sens = bilinear.sensitivities(1.5, 0.15)

        assert sens.shape == (2, 3)
        assert sens.sum() == pytest.approx(1.0)
        for j, i in [(0, 0), (0, 1), (1, 0), (1, 1)]:
            assert sens[j, i] == pytest.approx(0.25)
        assert sens[0, 2] == 0.0
        assert sens[1, 2] == 0.0

    def test_grid_point(self, bilinear):
        """Test that a grid point depends on its own value only"""
        sens = bilinear.sensitivities(2.0, 0.2)

        expected = np.zeros((2, 3))
        expected[1, 1] = 1.0
        np.testing.assert_allclose(sens, expected, atol=1e-12)

    def test_matches_bump(self, bilinear):
        """Test sensitivities against bumping a grid value"""
        sens = bilinear.sensitivities(2.3, 0.17)

        bumped = np.array(ZS)
        bumped[1, 2] += 1e-4
        bumped_interp = Interpolator2D().fit(XS, YS, bumped)

        diff = (bumped_interp.interpolate(2.3, 0.17) -
                bilinear.interpolate(2.3, 0.17)) / 1e-4
        assert sens[1, 2] == pytest.approx(diff, rel=1e-6)

    def test_bicubic_sensitivities_raise(self, bicubic):
        """Test that sensitivities are bilinear only"""
        with pytest.raises(LibError):
            bicubic.sensitivities(1.5, 0.15)


class TestValidation:
    """Test invalid grids"""

    def test_not_fitted(self):
        """Test evaluation before fitting"""
        with pytest.raises(LibError):
            Interpolator2D().interpolate(1.0, 1.0)

    def test_shape_mismatch(self):
        """Test values that do not match the grid"""
        with pytest.raises(LibError):
            Interpolator2D().fit(XS, YS, [[1.0, 2.0], [3.0, 4.0]])

    def test_non_increasing_grid(self):
        """Test that grid coordinates must increase"""
        with pytest.raises(LibError):
            Interpolator2D().fit([1.0, 3.0, 2.0], YS, ZS)

    def test_empty_grid(self):
        """Test an empty grid"""
        with pytest.raises(LibError):
            Interpolator2D().fit([], YS, np.zeros((2, 0)))
