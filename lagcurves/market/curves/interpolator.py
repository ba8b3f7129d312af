##############################################################################

##############################################################################

from numba import njit
import numpy as np
from scipy.interpolate import PchipInterpolator
from scipy.interpolate import CubicSpline

from ...utils.error import LibError
from ...utils.global_types import InterpTypes

###############################################################################


@njit(fastmath=True, cache=True)
def _uinterpolate(t, times, values, method):
    """ Return the interpolated value at time t given a vector of times and
    values. The times must be monotonic and increasing. Method 1 is flat
    (left step), any other value is linear. Both extrapolate beyond the
    nodes, flat holding the end values and linear using the end segments. """

    num_points = times.size

    if num_points == 1:
        return values[0]

    if t <= times[0]:
        if method == 1:
            return values[0]
        i = 1
    elif t >= times[num_points - 1]:
        if method == 1:
            return values[num_points - 1]
        i = num_points - 1
    else:
        i = 1
        while times[i] < t:
            i = i + 1

    if method == 1:
        if t == times[i]:
            return values[i]
        return values[i - 1]

    dt = times[i] - times[i - 1]
    return ((times[i] - t) * values[i - 1] + (t - times[i - 1]) * values[i]) / dt

###############################################################################


class Interpolator():
    """ Interpolation of rates in time. The interpolator is fitted to node
    times and rates and then evaluated at single times or arrays of times.
    All schemes extrapolate beyond the first and last node. """

    def __init__(self,
                 interpolator_type: InterpTypes):

        self._interp_type = interpolator_type
        self._interp_fn = None
        self._times = None
        self._values = None

    ###########################################################################

    def fit(self,
            times: np.ndarray,
            values: np.ndarray):

        times = np.asarray(times, dtype=np.float64)
        values = np.asarray(values, dtype=np.float64)

        if len(times) != len(values):
            raise LibError(f"Number of times ({len(times)}) and values "
                           f"({len(values)}) must match")

        if len(times) == 0:
            raise LibError("Cannot fit an interpolator with no points")

        if np.any(np.diff(times) <= 0.0):
            raise LibError("Interpolation times must be strictly increasing")

        self._times = times
        self._values = values
        self._interp_fn = None

        if len(times) == 1:
            return

        if self._interp_type == InterpTypes.PCHIP:

            self._interp_fn = PchipInterpolator(self._times, self._values,
                                                extrapolate=True)

        elif self._interp_type == InterpTypes.NATCUBIC:

            """ Second derivatives are clamped to zero at end points """
            self._interp_fn = CubicSpline(self._times, self._values,
                                          bc_type='natural',
                                          extrapolate=True)

    ###########################################################################

    def interpolate(self,
                    t: (float, np.ndarray)):
        """ Interpolated value at time t. The value of t can be an array so
        that the function is vectorised. """

        if self._values is None:
            raise LibError("Interpolator values have not been set.")

        if isinstance(t, np.ndarray):
            return np.array([self.interpolate(float(x)) for x in t])

        if not isinstance(t, (int, float, np.floating, np.integer)):
            raise LibError(f"t is not a recognized type: {type(t)}")

        t = float(t)

        if self._interp_fn is not None:
            return float(self._interp_fn(t))

        if self._interp_type == InterpTypes.FLAT:
            method = 1
        else:
            method = 2

        return float(_uinterpolate(t, self._times, self._values, method))

    ###########################################################################

    def interp_type(self):
        return self._interp_type

###############################################################################
