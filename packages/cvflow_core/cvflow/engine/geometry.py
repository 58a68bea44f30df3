"""Geometry primitives and unit helpers for page calculations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    def __add__(self, other: "Margins") -> "Margins":
        """Add two margins together (sum corresponding sides).

        Args:
            other: Another Margins object

        Returns:
            New Margins with summed values
        """
        return Margins(
            top=self.top + other.top,
            bottom=self.bottom + other.bottom,
            left=self.left + other.left,
            right=self.right + other.right,
        )


def mm_to_points(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) * POINTS_PER_INCH / MM_PER_INCH


PAGE_SIZES: Dict[str, Size] = {
    "a4": Size(mm_to_points(210), mm_to_points(297)),
    "letter": Size(8.5 * POINTS_PER_INCH, 11 * POINTS_PER_INCH),
}
