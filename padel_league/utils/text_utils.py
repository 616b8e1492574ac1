"""
Text processing utilities for the padel league system.
"""

import math
import re
from typing import Any


class TextUtils:
    """Utilities for text processing and normalization."""

    @staticmethod
    def clean_name(name: Any) -> str:
        """Trim a display name and collapse inner whitespace."""
        if name is None:
            return ""
        return re.sub(r'\s+', ' ', str(name)).strip()

    @staticmethod
    def normalize_name(name: Any) -> str:
        """Normalize a name for consistent comparison."""
        return TextUtils.clean_name(name).casefold()

    @staticmethod
    def is_blank(value: Any) -> bool:
        """Check whether a form value is missing or only whitespace."""
        if value is None:
            return True
        # empty spreadsheet cells arrive as NaN
        if isinstance(value, float) and math.isnan(value):
            return True
        return not str(value).strip()
