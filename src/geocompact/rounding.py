"""
Coordinate precision rounding.

Numbers are rounded with a decimal shift: multiply by 10**precision, round
half away from zero, divide back.
"""

import math
from typing import Any, Union

Number = Union[int, float]

# Above this magnitude a float has no fractional bits left to round.
_MAX_EXACT = 2 ** 52


def is_number(value: Any) -> bool:
    """True for ints and floats, False for bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def round_coordinate(value: Number, precision: int = 6) -> Number:
    """
    Round a number to `precision` decimal places.

    Ties go away from zero. NaN and infinities are returned unchanged, they
    are not sanitized here. Integers are returned unchanged, and a rounded
    float with no fractional part comes back as an int so it serializes
    without a trailing ".0".
    """
    if isinstance(value, int):
        return value
    if not math.isfinite(value):
        return value

    multiplier = 10 ** precision
    scaled = value * multiplier
    if not math.isfinite(scaled) or abs(scaled) >= _MAX_EXACT:
        return value

    # floor(x + 0.5) would round 0.49999999999999994 up
    magnitude = abs(scaled)
    rounded = math.floor(magnitude)
    if magnitude - rounded >= 0.5:
        rounded += 1
    if value < 0:
        rounded = -rounded
    if rounded == 0:
        return 0

    result = rounded / multiplier
    if precision == 0 or result.is_integer():
        return int(result)
    return result


def round_coordinates(coords: Any, precision: int = 6) -> Any:
    """Round every number in a nested list of coordinates."""
    if is_number(coords):
        return round_coordinate(coords, precision)
    if isinstance(coords, list):
        return [round_coordinates(c, precision) for c in coords]
    return coords
