"""
Reports package for the padel league system.
"""

from .report_generator import ReportGenerator

__all__ = ['ReportGenerator']
