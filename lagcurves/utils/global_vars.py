"""Shared numeric constants used across the lagcurves package."""

gDaysInYear = 365.0  #: Standard number of days in a year
g_small = 1e-12       #: Small epsilon value for numerical checks
g_seasonality_tol = 1e-5  #: Tolerance when comparing seasonality factors
g_default_observation_lag = "3M"  #: Observation lag of inflation curves
