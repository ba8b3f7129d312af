"""
Global type enumerations for curves and surfaces.

Enumerations:
- InterpTypes: one-dimensional interpolation of curve rates in time
- Interp2DTypes: two-dimensional interpolation of surface values in
  (time, loss level)

Interpolation types include:
- FLAT: piecewise constant, each node value holds until the next node
- LINEAR: linear in the rate, linear extrapolation beyond the nodes
- PCHIP: monotonic piecewise cubic Hermite on the rates
- NATCUBIC: natural cubic spline on the rates
- BILINEAR: bilinear on the grid, linear extrapolation from edge cells
- BICUBIC: bicubic spline on the grid, edge values held flat outside it

Example:
    >>> curve = InterpolatedZeroInflationCurve(
    ...     reference_dt, dates, rates, "3M", FrequencyTypes.MONTHLY,
    ...     interp_type=InterpTypes.LINEAR)
    >>> surface = BaseCorrelationTermStructure(
    ...     tenors, loss_levels, quotes, reference_dt=reference_dt,
    ...     interp_type=Interp2DTypes.BICUBIC)
"""

from enum import Enum


class InterpTypes(Enum):
    FLAT = 1
    LINEAR = 2
    PCHIP = 3
    NATCUBIC = 4

class Interp2DTypes(Enum):
    BILINEAR = 1
    BICUBIC = 2
