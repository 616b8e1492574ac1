"""
Tournament models for the padel league system.
"""

from dataclasses import dataclass, replace
from typing import Optional

from padel_league.exceptions import TournamentStateError
from .player import new_id, utc_timestamp


@dataclass
class Tournament:
    """A tournament owning a set of games; completed once a winner is marked."""
    id: str
    name: str
    is_active: bool = True
    winner: Optional[str] = None
    completed_at: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def create(cls, name: str) -> "Tournament":
        return cls(id=new_id(), name=name, created_at=utc_timestamp())

    def mark_winner(self, player_id: str, completed_at: Optional[str] = None) -> "Tournament":
        """
        Return the completed tournament with its winner set.
        The transition is one-way; a completed tournament cannot be marked again.
        """
        if not self.is_active:
            raise TournamentStateError(f"Tournament '{self.name}' is already completed")
        return replace(
            self,
            is_active=False,
            winner=player_id,
            completed_at=completed_at or utc_timestamp(),
        )
