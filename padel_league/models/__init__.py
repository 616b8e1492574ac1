"""
Models package for the padel league system.

This package contains all data models and dataclasses used throughout the system.
"""

from .player import Player, INITIAL_RATING
from .match import Match, MatchSubmission, TEAM1, TEAM2
from .tournament import Tournament
from .standing import Standing, LeagueSummary

__all__ = [
    'Player', 'INITIAL_RATING', 'Match', 'MatchSubmission', 'TEAM1', 'TEAM2',
    'Tournament', 'Standing', 'LeagueSummary'
]
