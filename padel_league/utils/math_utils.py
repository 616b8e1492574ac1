"""
Numeric helpers shared by the rating engine and the reports.
"""

import math


class MathUtils:
    """Utilities for rounding and rates."""

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
        return int(math.floor(value + 0.5))

    @staticmethod
    def percentage(part: int, total: int) -> int:
        """Return part/total as a rounded whole percentage, 0 when total is 0."""
        if total <= 0:
            return 0
        return MathUtils.round_half_up(part * 100 / total)
