"""Unit tests for the EMI ceiling table"""

import pytest
from visaloan_gateway.domain.thresholds import blue_ceiling, yellow_ceiling
from visaloan_gateway.domain.rates import LOAN_AMOUNTS


@pytest.mark.parametrize(
    "amount,expected",
    [
        (2_000_000, 650_000),
        (8_000_000, 650_000),  # bounds are inclusive
        (8_500_000, 670_000),
        (10_000_000, 700_000),  # 10 falls in the <=11 bracket
        (12_000_000, 730_000),
        (13_000_000, 730_000),  # duplicate bracket kept as-is
        (14_000_000, 790_000),
        (21_000_000, 880_000),
        (28_000_000, 891_000),
        (35_000_000, 938_000),
        (40_000_000, 984_000),
    ],
)
def test_yellow_ceiling_brackets(amount, expected):
    assert yellow_ceiling(amount) == expected


def test_yellow_ceiling_above_table_uses_default():
    """Test amounts past the last bracket get the 1,000,000 default"""
    assert yellow_ceiling(41_000_000) == 1_000_000
    assert yellow_ceiling(40_000_001) == 1_000_000
    assert blue_ceiling(41_000_000) == 1_200_000


def test_yellow_ceiling_non_decreasing_over_grid():
    ceilings = [yellow_ceiling(amount) for amount in LOAN_AMOUNTS]
    assert ceilings == sorted(ceilings)


def test_blue_ceiling_is_twenty_percent_above_yellow():
    for amount in LOAN_AMOUNTS + [0, 500_000, 41_000_000]:
        assert blue_ceiling(amount) == pytest.approx(yellow_ceiling(amount) * 1.2)
    assert blue_ceiling(10_000_000) == pytest.approx(840_000)
