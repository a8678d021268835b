from __future__ import annotations


def percent(part: int, whole: int) -> int:
    """Whole-number percentage; 0 when there is nothing to divide by."""
    if whole <= 0:
        return 0
    return int(round(part * 100.0 / whole))


def growth(current: int, previous: int) -> int:
    """Relative change in percent between two counts."""
    if previous <= 0:
        return 0
    return int(round((current - previous) * 100.0 / previous))
