"""
Utilities package for the padel league system.
"""

from .csv_utils import CsvUtils
from .math_utils import MathUtils
from .text_utils import TextUtils

__all__ = ['CsvUtils', 'MathUtils', 'TextUtils']
