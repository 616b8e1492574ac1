"""
Derived ranking models for the padel league system.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Standing:
    """Cumulative tournament points for one participant."""
    player_id: str
    name: str
    total_points: int = 0
    games_played: int = 0
    games_won: int = 0
    total_scored: int = 0


@dataclass
class LeagueSummary:
    """Headline numbers for the league."""
    active_players: int
    matches_played: int
    champion: Optional[str] = None
