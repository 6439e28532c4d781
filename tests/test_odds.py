import math

import pytest

from love_odds.core.models.analysis import Condition
from love_odds.core.odds import (
    INCALCULABLE,
    combine,
    format_duration,
    format_odds,
    progress_fraction,
)


@pytest.mark.parametrize(
    "one_in_x, expected",
    [
        (1, "1 in 1"),
        (42.4, "1 in 42"),
        (42.5, "1 in 43"),
        (999, "1 in 999"),
        (1_000, "1 in 1.0k"),
        (1_500, "1 in 1.5k"),
        (600_000, "1 in 600.0k"),
        (1_000_000, "1 in 1.0 million"),
        (2_500_000, "1 in 2.5 million"),
        (3_200_000_000, "1 in 3.2 billion"),
    ],
)
def test_format_odds_buckets(one_in_x, expected):
    assert format_odds(one_in_x) == expected


def test_format_odds_clamps_below_one():
    assert format_odds(0.25) == "1 in 1"


@pytest.mark.parametrize("value", [None, 0, -3, math.inf, math.nan])
def test_format_odds_incalculable(value):
    assert format_odds(value) == INCALCULABLE


def test_combine_multiplies_conditions():
    conditions = [
        Condition(description="Same coffee shop", oneInX=50),
        Condition(description="Same morning", oneInX=30),
    ]
    assert combine(conditions) == 1500
    assert format_odds(combine(conditions)) == "1 in 1.5k"


def test_combine_accepts_plain_numbers():
    assert combine([2, 3.5, 4]) == 28


def test_combine_empty_is_certain():
    assert combine([]) == 1


def test_combined_odds_never_drop_below_one():
    conditions = [Condition(description="Likely", oneInX=0.4) for _ in range(5)]
    assert combine(conditions) == 1


@pytest.mark.parametrize(
    "one_in_x, expected",
    [
        (1, 1.0),
        (0.5, 1.0),
        (4, 0.25),
        (1_000_000, 1e-6),
        (None, 0.0),
        (0, 0.0),
        (math.nan, 0.0),
    ],
)
def test_progress_fraction(one_in_x, expected):
    fraction = progress_fraction(one_in_x)
    assert 0.0 <= fraction <= 1.0
    assert fraction == pytest.approx(expected)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00"), (7, "0:07"), (65, "1:05"), (600, "10:00"), (-3, "0:00")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
