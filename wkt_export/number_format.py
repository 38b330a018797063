"""
Coordinate and number formatting for Well-Known Text.
"""

import math
from typing import Optional

import numpy as np

from .config import (
    DEFAULT_OPTIONS,
    NAN_LITERAL,
    NEGATIVE_INFINITY_LITERAL,
    POSITIVE_INFINITY_LITERAL,
    NonFinitePolicy,
    WriterOptions,
)
from .errors import NonFiniteOrdinateError
from .geometry import Point


def _non_finite_literal(value: float) -> str:
    if math.isnan(value):
        return NAN_LITERAL
    return POSITIVE_INFINITY_LITERAL if value > 0 else NEGATIVE_INFINITY_LITERAL


def format_number(
    value: float,
    precision: Optional[int] = None,
    non_finite: NonFinitePolicy = NonFinitePolicy.RAISE,
) -> str:
    """
    Convert a number to a plain decimal string, never in scientific notation.

    The output does not depend on the host locale: the decimal point is always
    "." and there is no digit grouping. Without a precision the result is the
    shortest string that reads back to the same double, so integral values
    come out bare ("15", not "15.0").

    Args:
        value: The ordinate to format.
        precision: Maximum digits after the decimal point, or None for exact output.
        non_finite: Policy for NaN and infinite values.

    Returns:
        The formatted number.
    """
    value = float(value)
    if not math.isfinite(value):
        if non_finite is NonFinitePolicy.LITERAL:
            return _non_finite_literal(value)
        raise NonFiniteOrdinateError(value)

    return np.format_float_positional(
        value, precision=precision, unique=True, trim="-"
    )


def format_coordinate(point: Point, options: WriterOptions = DEFAULT_OPTIONS) -> str:
    """Ordinates of one point, separated by single spaces."""
    return " ".join(
        format_number(ordinate, options.precision, options.non_finite)
        for ordinate in point.ordinates
    )
