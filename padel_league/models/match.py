"""
Match and game data models for the padel league system.

A match pairs two teams of two players. The same record shape is used for
rating matches (no tournament) and for tournament games.
"""

from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Dict, Optional, Tuple

from .player import new_id, utc_timestamp

TEAM1 = "team1"
TEAM2 = "team2"


@dataclass
class MatchSubmission:
    """Raw match form input before validation."""
    team1_player1: Any = None
    team1_player2: Any = None
    team2_player1: Any = None
    team2_player2: Any = None
    team1_score: Any = None
    team2_score: Any = None
    date: Optional[str] = None
    tournament_id: Optional[str] = None

    @property
    def participants(self) -> Tuple[Any, Any, Any, Any]:
        return (self.team1_player1, self.team1_player2, self.team2_player1, self.team2_player2)


@dataclass(frozen=True)
class Match:
    """A recorded result between two teams of two players."""
    id: str
    team1: Tuple[str, str]
    team2: Tuple[str, str]
    team1_score: int
    team2_score: int
    winner: str
    date: Optional[str] = None
    created_at: Optional[str] = None
    tournament_id: Optional[str] = None
    # applied deltas by player id; compared but not hashed
    rating_changes: Dict[str, int] = field(default_factory=dict, hash=False)

    @classmethod
    def create(cls, team1: Tuple[str, str], team2: Tuple[str, str], team1_score: int,
               team2_score: int, date: Optional[str] = None,
               tournament_id: Optional[str] = None) -> "Match":
        """Create a new match; the winner is fixed here and never recomputed."""
        return cls(
            id=new_id(),
            team1=tuple(team1),
            team2=tuple(team2),
            team1_score=team1_score,
            team2_score=team2_score,
            winner=TEAM1 if team1_score > team2_score else TEAM2,
            date=date or date_type.today().isoformat(),
            created_at=utc_timestamp(),
            tournament_id=tournament_id,
        )

    @property
    def participants(self) -> Tuple[str, str, str, str]:
        return self.team1 + self.team2

    @property
    def score(self) -> str:
        return f"{self.team1_score}-{self.team2_score}"

    @property
    def score_difference(self) -> int:
        return abs(self.team1_score - self.team2_score)

    def team_of(self, player_id: str) -> Optional[str]:
        """Return 'team1', 'team2' or None if the player did not take part."""
        if player_id in self.team1:
            return TEAM1
        if player_id in self.team2:
            return TEAM2
        return None

    def won(self, player_id: str) -> bool:
        return self.team_of(player_id) == self.winner

    def scores_for(self, player_id: str) -> Tuple[int, int]:
        """Return (own score, opponent score) from the player's side of the net."""
        if self.team_of(player_id) == TEAM1:
            return self.team1_score, self.team2_score
        return self.team2_score, self.team1_score
