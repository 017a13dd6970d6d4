"""Monthly-payment ceilings per loan-amount bracket

The "yellow" ceiling is the largest EMI still recommended for a loan of a given
size; the "blue" ceiling (1.2x yellow) bounds the medium-risk band. Brackets are
manually curated by the credit team and keyed by amount in millions of won.
"""

from typing import List, Tuple

# (inclusive upper bound in millions, yellow ceiling in won), tested in order.
# 12 and 13 intentionally share a ceiling, as do 17/18 and 20/25.
YELLOW_BRACKETS: List[Tuple[int, int]] = [
    (8, 650_000),
    (9, 670_000),
    (11, 700_000),
    (12, 730_000),
    (13, 730_000),
    (14, 790_000),
    (15, 800_000),
    (16, 820_000),
    (17, 840_000),
    (18, 840_000),
    (19, 860_000),
    (20, 880_000),
    (25, 880_000),
    (27, 890_000),
    (28, 891_000),
    (29, 900_000),
    (30, 905_000),
    (31, 910_000),
    (32, 920_000),
    (33, 925_000),
    (34, 930_000),
    (35, 938_000),
    (36, 950_000),
    (37, 955_000),
    (38, 970_000),
    (39, 975_000),
    (40, 984_000),
]

# Ceiling for loans above the last bracket
DEFAULT_YELLOW_CEILING = 1_000_000

BLUE_MULTIPLIER = 1.2


def yellow_ceiling(amount: int) -> int:
    """Recommended-band EMI ceiling for a loan amount"""
    millions = amount / 1_000_000
    for upper_bound, ceiling in YELLOW_BRACKETS:
        if millions <= upper_bound:
            return ceiling
    return DEFAULT_YELLOW_CEILING


def blue_ceiling(amount: int) -> float:
    """Medium-risk-band EMI ceiling for a loan amount"""
    return yellow_ceiling(amount) * BLUE_MULTIPLIER
