"""
Configuration management for the padel league system.
"""

import copy
import logging
import yaml
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: Optional[str]) -> Dict[str, Any]:
        """Load configuration from YAML file, merged over the defaults."""
        defaults = ConfigManager.get_default_config()
        if not config_file:
            return defaults
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except FileNotFoundError:
            logger.warning(f"Configuration file '{config_file}' not found. Using default configuration.")
            return defaults
        except yaml.YAMLError as e:
            logger.warning(f"Error parsing configuration file: {e}. Using default configuration.")
            return defaults

        if loaded is None:
            return defaults
        if not isinstance(loaded, dict):
            logger.warning(f"Configuration file '{config_file}' is not a mapping. Using default configuration.")
            return defaults
        return ConfigManager.merge_config(defaults, loaded)

    @staticmethod
    def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge override values into a copy of base."""
        merged = copy.deepcopy(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = ConfigManager.merge_config(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return {
            'database': {
                'path': 'padel_league.db'
            },
            'rating': {
                'initial_rating': 1000,
                'k_factor': 40,
                'margin_step': 0.10,
                'rating_scale': 400,
                'min_winning_score': 4
            },
            'points': {
                'win_bonus': 2,
                'tournament_winner_bonus': 5
            },
            'logging': {
                'level': 'INFO',
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
            'seed_players': []
        }
