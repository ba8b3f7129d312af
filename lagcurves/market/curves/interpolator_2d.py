##############################################################################

##############################################################################

import jax
import jax.numpy as jnp
from numba import njit
import numpy as np
from scipy.interpolate import RectBivariateSpline

from ...utils.error import LibError
from ...utils.global_vars import g_small
from ...utils.global_types import Interp2DTypes

jax.config.update("jax_enable_x64", True)

###############################################################################


@njit(fastmath=True, cache=True)
def _locate(x, xs):
    """ Index i of the grid cell [xs[i], xs[i+1]] used for x. Points
    outside the grid use the first or last cell. """

    n = xs.size

    if n == 1 or x <= xs[0]:
        return 0

    if x >= xs[n - 1]:
        return n - 2

    i = 0
    while xs[i + 1] < x:
        i = i + 1

    return i

###############################################################################


@njit(cache=True)
def _bilinear(x, y, xs, ys, zs):
    """ Bilinear interpolation of zs[j, i] given at (xs[i], ys[j]). Outside
    the grid the edge cells are extended linearly. A dimension with a
    single point is flat. """

    i0 = _locate(x, xs)
    j0 = _locate(y, ys)

    if xs.size == 1:
        i1 = i0
        wx = 0.0
    else:
        i1 = i0 + 1
        wx = (x - xs[i0]) / (xs[i1] - xs[i0])

    if ys.size == 1:
        j1 = j0
        wy = 0.0
    else:
        j1 = j0 + 1
        wy = (y - ys[j0]) / (ys[j1] - ys[j0])

    return (1.0 - wx) * (1.0 - wy) * zs[j0, i0] \
        + wx * (1.0 - wy) * zs[j0, i1] \
        + (1.0 - wx) * wy * zs[j1, i0] \
        + wx * wy * zs[j1, i1]

###############################################################################


def _axis_weights_ad(v, grid):
    n = grid.shape[0]
    if n == 1:
        return 0, 0, 0.0
    i = jnp.clip(jnp.searchsorted(grid, v, side="right") - 1, 0, n - 2)
    w = (v - grid[i]) / (grid[i + 1] - grid[i])
    return i, i + 1, w


def _bilinear_ad(zs, x, y, xs, ys):
    """ Same bilinear scheme as _bilinear written with jax so that it can
    be differentiated with respect to the grid values. """
    i0, i1, wx = _axis_weights_ad(x, xs)
    j0, j1, wy = _axis_weights_ad(y, ys)
    return (1.0 - wx) * (1.0 - wy) * zs[j0, i0] \
        + wx * (1.0 - wy) * zs[j0, i1] \
        + (1.0 - wx) * wy * zs[j1, i0] \
        + wx * wy * zs[j1, i1]

###############################################################################


class Interpolator2D():
    """ Interpolation of values on a rectangular grid. The grid is given by
    increasing xs and ys and a matrix zs where zs[j][i] is the value at
    (xs[i], ys[j]). fit() returns the interpolator itself so that it can
    be built and evaluated in one expression. """

    def __init__(self,
                 interpolator_type: Interp2DTypes = Interp2DTypes.BILINEAR):

        self._interp_type = interpolator_type
        self._interp_fn = None
        self._xs = None
        self._ys = None
        self._zs = None

    ###########################################################################

    def fit(self,
            xs: np.ndarray,
            ys: np.ndarray,
            zs: np.ndarray):

        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        zs = np.asarray(zs, dtype=np.float64)

        if xs.size == 0 or ys.size == 0:
            raise LibError("Cannot fit an interpolator on an empty grid")

        if zs.shape != (ys.size, xs.size):
            raise LibError(f"Grid values have shape {zs.shape}, expected "
                           f"({ys.size}, {xs.size})")

        if np.any(np.diff(xs) <= 0.0) or np.any(np.diff(ys) <= 0.0):
            raise LibError("Grid coordinates must be strictly increasing")

        self._xs = xs
        self._ys = ys
        self._zs = zs
        self._interp_fn = None

        if self._interp_type == Interp2DTypes.BICUBIC:

            if xs.size < 2 or ys.size < 2:
                raise LibError("Bicubic interpolation needs at least 2 "
                               f"points in each direction, got "
                               f"{xs.size} x {ys.size}")

            self._interp_fn = RectBivariateSpline(ys, xs, zs,
                                                  kx=min(3, ys.size - 1),
                                                  ky=min(3, xs.size - 1))

        elif self._interp_type != Interp2DTypes.BILINEAR:
            raise LibError(f"Unknown interpolation type "
                           f"{self._interp_type}")

        return self

    ###########################################################################

    def is_in_range(self, x: float, y: float):
        return (self._xs[0] - g_small <= x <= self._xs[-1] + g_small and
                self._ys[0] - g_small <= y <= self._ys[-1] + g_small)

    def interpolate(self,
                    x: float,
                    y: float,
                    allow_extrapolation: bool = False):
        """ Interpolated value at (x, y). Points outside the grid raise a
        LibError unless allow_extrapolation is True. Bilinear grids
        extrapolate linearly from the edge cells; bicubic grids hold the
        edge values flat. """

        if self._zs is None:
            raise LibError("Interpolator grid has not been set.")

        x = float(x)
        y = float(y)

        if not allow_extrapolation and not self.is_in_range(x, y):
            raise LibError(f"Interpolation range is [{self._xs[0]}, "
                           f"{self._xs[-1]}] x [{self._ys[0]}, "
                           f"{self._ys[-1]}]: extrapolation at "
                           f"({x}, {y}) not allowed")

        if self._interp_type == Interp2DTypes.BICUBIC:
            return float(self._interp_fn.ev(y, x))

        return float(_bilinear(x, y, self._xs, self._ys, self._zs))

    def __call__(self,
                 x: float,
                 y: float,
                 allow_extrapolation: bool = False):
        return self.interpolate(x, y, allow_extrapolation)

    ###########################################################################

    def sensitivities(self,
                      x: float,
                      y: float):
        """ Derivatives of the interpolated value at (x, y) with respect to
        every grid value, as a matrix shaped like zs. Only available for
        bilinear interpolation. """

        if self._interp_type != Interp2DTypes.BILINEAR:
            raise LibError(f"Sensitivities not available for "
                           f"{self._interp_type}")

        if self._zs is None:
            raise LibError("Interpolator grid has not been set.")

        grad_fn = jax.grad(_bilinear_ad)
        grads = grad_fn(jnp.asarray(self._zs),
                        float(x),
                        float(y),
                        jnp.asarray(self._xs),
                        jnp.asarray(self._ys))

        return np.asarray(grads)

    ###########################################################################

    def interp_type(self):
        return self._interp_type

###############################################################################
