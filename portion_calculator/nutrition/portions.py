"""Portion count controls.

Portion counts are clamped rather than rejected: whatever the user types,
the control snaps back to a whole number in range.
"""
import re
import sys
from dataclasses import dataclass
from typing import Optional, Union

DEFAULT_PORTIONS = 4
MIN_PORTIONS = 1
MAX_DESIRED_PORTIONS = 20

_INTEGER_PREFIX = re.compile(r"\s*[+-]?\d+")
# Digit runs longer than this clamp as unbounded
_MAX_PORTION_DIGITS = 18

PortionInput = Union[int, float, str, None]


def _parse_portions(value: PortionInput) -> Optional[int]:
    """Coerce a portion input to an integer, truncating toward zero.

    Strings are read up to the first non-digit ("3.7" -> 3, "12 people" -> 12).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)

    match = _INTEGER_PREFIX.match(str(value))
    if match is None:
        return None
    text = match.group(0).strip()
    negative = text.startswith("-")
    digits = text.lstrip("+-").lstrip("0")
    if len(digits) > _MAX_PORTION_DIGITS:
        return -sys.maxsize if negative else sys.maxsize
    portions = int(digits or "0")
    return -portions if negative else portions


def clamp_original_portions(value: PortionInput) -> int:
    """Clamp the original recipe yield to a whole number of at least 1.

    Non-numeric input, zero and negatives all become 1. No upper bound.
    """
    portions = _parse_portions(value)
    if not portions:
        return MIN_PORTIONS
    return max(MIN_PORTIONS, portions)


def clamp_desired_portions(
    value: PortionInput, maximum: int = MAX_DESIRED_PORTIONS
) -> int:
    """Clamp the desired portion count to the closed range [1, maximum]."""
    portions = _parse_portions(value)
    if not portions:
        return MIN_PORTIONS
    return min(maximum, max(MIN_PORTIONS, portions))


@dataclass(frozen=True)
class RecipeScale:
    """Original and desired portion counts of a recipe."""

    original_portions: int = DEFAULT_PORTIONS
    desired_portions: int = DEFAULT_PORTIONS

    @property
    def scale_ratio(self) -> float:
        return self.desired_portions / self.original_portions

    @classmethod
    def from_inputs(
        cls,
        original: PortionInput,
        desired: PortionInput,
        max_desired: int = MAX_DESIRED_PORTIONS,
    ) -> "RecipeScale":
        """Build a scale from raw control values, clamping both."""
        return cls(
            original_portions=clamp_original_portions(original),
            desired_portions=clamp_desired_portions(desired, max_desired),
        )
