"""
Configuration package for the padel league system.
"""

from .config_manager import ConfigManager

__all__ = ['ConfigManager']
