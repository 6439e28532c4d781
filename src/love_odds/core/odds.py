"""Odds arithmetic and display helpers for analysis results."""

import math
from typing import Iterable, Optional, Union

from love_odds.core.models.analysis import Condition

INCALCULABLE = "incalculable"

_BUCKETS = (
    (1_000_000_000, " billion"),
    (1_000_000, " million"),
    (1_000, "k"),
)


def _is_usable(x: Optional[float]) -> bool:
    return x is not None and math.isfinite(x) and x > 0


def combine(conditions: Iterable[Union[Condition, float]]) -> float:
    """
    Multiply the odds of independent conditions.
    An empty sequence is certain and yields 1.
    """
    return math.prod(
        c.one_in_x if isinstance(c, Condition) else float(c) for c in conditions
    )


def format_odds(x: Optional[float]) -> str:
    """Render odds as "1 in 2.5 million" style text."""
    if not _is_usable(x):
        return INCALCULABLE

    x = max(x, 1.0)
    for threshold, unit in _BUCKETS:
        if x >= threshold:
            return f"1 in {x / threshold:.1f}{unit}"
    return f"1 in {math.floor(x + 0.5)}"


def progress_fraction(one_in_x: Optional[float]) -> float:
    """Width of a probability bar, always within [0, 1]."""
    if not _is_usable(one_in_x):
        return 0.0
    return min(1.0, 1.0 / one_in_x)


def format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes}:{secs:02d}"
