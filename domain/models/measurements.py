"""
Measurement rules shared by the workout entities.

Weights, durations and rest periods are logged in quarter units
(0.25 lb, 0.25 min). Counts such as sets, reps and rounds have inclusive
ranges. Both helpers treat ``None`` as valid so optional fields pass.
"""

from typing import Optional, Union

Number = Union[int, float]

QUARTER = 0.25


def is_quarter_increment(value: Optional[Number]) -> bool:
    """
    Check that a value is non-negative and a multiple of 0.25.

    Examples:
        >>> is_quarter_increment(135.25)
        True
        >>> is_quarter_increment(135.3)
        False
        >>> is_quarter_increment(None)
        True
    """
    if value is None:
        return True
    if value < 0:
        return False
    return float(value * 4).is_integer()


def is_in_range(value: Optional[int], minimum: int, maximum: int) -> bool:
    """Check ``minimum <= value <= maximum``; ``None`` passes."""
    if value is None:
        return True
    return minimum <= value <= maximum
