"""
Ranking package for the padel league system.
"""

from .rating_engine import RatingEngine, calculate_rating_change
from .standings_calculator import StandingsCalculator
from .match_validator import MatchValidator
from .ranking_processor import RankingProcessor

__all__ = [
    'RatingEngine', 'calculate_rating_change', 'StandingsCalculator',
    'MatchValidator', 'RankingProcessor'
]
