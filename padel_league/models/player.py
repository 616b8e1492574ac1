"""
Player data models for the padel league system.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from padel_league.utils.math_utils import MathUtils

INITIAL_RATING = 1000


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Player:
    """Player identity and rating statistics."""
    id: str
    name: str
    rating: int = INITIAL_RATING
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    games_won: int = 0
    games_lost: int = 0
    created_at: Optional[str] = field(default=None, compare=False)

    @classmethod
    def create(cls, name: str, rating: int = INITIAL_RATING) -> "Player":
        """Create a new player with zeroed statistics."""
        return cls(id=new_id(), name=name, rating=rating, created_at=utc_timestamp())

    @property
    def win_rate(self) -> int:
        return MathUtils.percentage(self.wins, self.matches_played)

    @property
    def game_win_rate(self) -> int:
        return MathUtils.percentage(self.games_won, self.games_won + self.games_lost)

    @property
    def record(self) -> str:
        """Win-loss record such as '3W-1L'."""
        return f"{self.wins}W-{self.losses}L"
