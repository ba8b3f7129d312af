"""
lagcurves - observation-lagged inflation term structures and base
correlation surfaces.
"""

__version__ = "0.1.0"
