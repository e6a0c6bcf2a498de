"""
Range expressions for numeric search tokens.

Grammar (N, A, B are non-negative integers):
    N, =N        exactly N
    N+, >=N, >N  N or more
    N-, <=N, <N  N or less
    A-B, A~B     A through B

Comparison operators are inclusive.
"""

import math
import re
from dataclasses import dataclass

_EXACT = re.compile(r"^=*(\d+)$")
_AT_LEAST = (re.compile(r"^>=*(\d+)\+?$"), re.compile(r"^(\d+)\+$"))
_AT_MOST = (re.compile(r"^<=*(\d+)-?$"), re.compile(r"^(\d+)-$"))
_BETWEEN = re.compile(r"^(\d+)[-~](\d+)$")


@dataclass(frozen=True, slots=True)
class NumericRange:
    """Closed interval; unbounded ends are +/- infinity."""

    low: float
    high: float

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, (int, float)):
            return False
        return self.low <= value <= self.high

    @property
    def is_bounded_below_ten(self) -> bool:
        """True if every finite bound is below 10 (reads as a level, not power)."""
        return all(math.isinf(bound) or bound < 10 for bound in (self.low, self.high))


def parse_range(text: str) -> NumericRange | None:
    """
    Parse a range expression.

    Returns None if the text is not a range expression.
    """
    match = _EXACT.match(text)
    if match:
        value = int(match.group(1))
        return NumericRange(value, value)

    for pattern in _AT_LEAST:
        match = pattern.match(text)
        if match:
            return NumericRange(int(match.group(1)), math.inf)

    for pattern in _AT_MOST:
        match = pattern.match(text)
        if match:
            return NumericRange(-math.inf, int(match.group(1)))

    match = _BETWEEN.match(text)
    if match:
        return NumericRange(int(match.group(1)), int(match.group(2)))

    return None
