##############################################################################

##############################################################################

import sys
import numpy as np
from typing import Union
from prettytable import PrettyTable

from .date import Date
from .global_vars import gDaysInYear
from .error import LibError
from .day_count import DayCountTypes, DayCount


###############################################################################


def _func_name():
    """ Extract calling function name - using a protected method is not that
    advisable but calling inspect.stack is so slow it must be avoided. """
    ff = sys._getframe().f_back.f_code.co_name
    return ff

###############################################################################


def ordinal(n: int):
    """ English ordinal of a positive integer: 1st, 2nd, 3rd, 4th, 11th. """

    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")

    return f"{n}{suffix}"

###############################################################################


def times_from_dates(dt: (Date, list),
                     value_dt: Date,
                     day_count_type: DayCountTypes = None):
    """ If a single date is passed in then return the year from valuation date
    but if a whole vector of dates is passed in then convert to a vector of
    times from the valuation date. Dates before the valuation date give
    negative times. """

    if isinstance(value_dt, Date) is False:
        raise LibError("Valuation date is not a Date")

    if day_count_type is None:
        dc_counter = None
    else:
        dc_counter = DayCount(day_count_type)

    def _time(d):
        if dc_counter is None:
            return (d - value_dt) / gDaysInYear
        return dc_counter.year_frac(value_dt, d)[0]

    if isinstance(dt, Date):
        return _time(dt)

    elif isinstance(dt, (list, tuple)) and len(dt) > 0 \
            and isinstance(dt[0], Date):
        return np.array([_time(d) for d in dt])

    elif isinstance(dt, np.ndarray):
        raise LibError("You passed an ndarray instead of dates.")
    else:
        raise LibError("Times can only be computed from dates.")

###############################################################################


def label_to_string(label: str,
                    value: (float, str),
                    separator: str = "\n",
                    list_format: bool = False):
    """ Format label/value pairs for a unified formatting. """
    # Format option for lists such that all values are aligned:
    # Label: value1
    #        value2
    #        ...
    label = str(label)

    if list_format and type(value) is list and len(value) > 0:
        s = label + ": "
        labelSpacing = " " * len(s)
        s += str(value[0])

        for v in value[1:]:
            s += "\n" + labelSpacing + str(v)
        s += separator

        return s
    else:
        return f"{label}: {value}{separator}"

###############################################################################


def format_table(header: (list, tuple),
                 rows: (list, tuple)):
    """ Format a 2D array into a table-like string using a wrapper
    around PrettyTable to get a nice formatting. """

    t = PrettyTable(header)
    num_cols = len(header)

    if len(rows) == 0:
        return ""

    for row in rows:
        if len(row) != num_cols:
            raise ValueError("Header and Row Size must match!")

        t.add_row(row)

    return t

###############################################################################


def to_usable_type(t):
    """ Convert a type such that it can be used with `isinstance` """
    if hasattr(t, '__origin__'):
        origin = t.__origin__
        # t comes from the `typing` module
        if origin is list:
            return (list, np.ndarray)
        elif origin is Union:
            types = t.__args__
            flat = []
            for tp in types:
                usable = to_usable_type(tp)
                if isinstance(usable, tuple):
                    flat.extend(usable)
                else:
                    flat.append(usable)
            return tuple(flat)
    else:
        # t is a normal type
        if t is float:
            return (int, float, np.floating, np.integer)
        if t is int:
            return (int, np.integer)
        if isinstance(t, tuple):
            flat = []
            for tp in t:
                usable = to_usable_type(tp)
                if isinstance(usable, tuple):
                    flat.extend(usable)
                else:
                    flat.append(usable)
            return tuple(flat)

    return t


###############################################################################


def check_argument_types(func, values):
    """ Check that all values passed into a function are of the same type
    as the function annotations. If a value has not been annotated, it
    will not be checked. """
    for value_name, annotation_type in func.__annotations__.items():

        if value_name == "return" or value_name not in values:
            continue

        value = values[value_name]
        usable_type = to_usable_type(annotation_type)

        if not isinstance(value, usable_type):
            raise LibError(
                f"Argument Type Error in {func.__qualname__}: argument "
                f">> {value_name} << is {value!r} of type {type(value)}, "
                f"allowed types are {usable_type}")

###############################################################################
