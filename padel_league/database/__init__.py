"""
Database package for the padel league system.
"""

from .database_manager import DatabaseManager
from .player_manager import PlayerManager
from .match_manager import MatchManager
from .tournament_manager import TournamentManager

__all__ = ['DatabaseManager', 'PlayerManager', 'MatchManager', 'TournamentManager']
