"""Percentage helpers."""
import math


def percent(part: int, whole: int) -> int:
    """
    Whole-number percentage of ``part`` in ``whole``, rounded half-up.

    Returns 0 when ``whole`` is 0.

    Examples:
        >>> percent(1, 8)
        13
        >>> percent(5, 0)
        0
    """
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)
