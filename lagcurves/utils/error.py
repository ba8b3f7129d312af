"""
Custom exception class for lagcurves library errors.

Provides a specialized exception type to distinguish errors originating
from the lagcurves library from other Python exceptions. Every validation
failure in the library (bad tenors, bad loss levels, out of range lookups,
inconsistent seasonality) is raised as a LibError.

Example:
    >>> from lagcurves.utils.error import LibError
    >>>
    >>> # Raise library-specific error
    >>> if loss_level > 1.0:
    ...     raise LibError("Loss level larger than 100%")
    >>>
    >>> # Catch library errors specifically
    >>> try:
    ...     curve.zero_rate(invalid_date)
    ... except LibError as e:
    ...     print(f"lagcurves error: {e._message}")
"""

class LibError(Exception):
    """ Class to understand if the error is coming from this library """

    def __init__(self,
                 message: str):
        """ Create error object """
        super().__init__(message)
        self._message = message
