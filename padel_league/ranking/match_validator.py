"""
Validation rules for match submissions.
"""

from typing import Any, Collection, Optional, Tuple

from padel_league.exceptions import (
    DuplicatePlayerError,
    IncompleteMatchError,
    InsufficientScoreError,
    InvalidScoreError,
    TiedScoreError,
    UnknownPlayerError,
)
from padel_league.models.match import MatchSubmission
from padel_league.utils.text_utils import TextUtils

MIN_WINNING_SCORE = 4


class MatchValidator:
    """Rejects malformed match submissions before any engine sees them."""

    def __init__(self, min_winning_score: int = MIN_WINNING_SCORE):
        self.min_winning_score = min_winning_score

    def validate(self, submission: MatchSubmission, require_min_score: bool = True,
                 known_player_ids: Optional[Collection[str]] = None) -> Tuple[int, int]:
        """
        Check a submission and return its parsed (team1, team2) scores.

        Rules are checked in order and the first failure is raised:
        missing fields, repeated players, unparseable or tied scores, a
        winning score below the threshold (rating matches only), and finally
        players that are not on the roster.
        """
        participants = [self._clean(value) for value in submission.participants]
        if any(not value for value in participants) or \
                TextUtils.is_blank(submission.team1_score) or TextUtils.is_blank(submission.team2_score):
            raise IncompleteMatchError("Please fill in all four players and both scores")

        if len(set(participants)) != 4:
            raise DuplicatePlayerError("All players must be different")

        score1 = self._parse_score(submission.team1_score)
        score2 = self._parse_score(submission.team2_score)
        if score1 == score2:
            raise TiedScoreError("Matches cannot end in a tie")

        if require_min_score and max(score1, score2) < self.min_winning_score:
            raise InsufficientScoreError(f"Winner must score at least {self.min_winning_score} games")

        if known_player_ids is not None:
            unknown = [value for value in participants if value not in known_player_ids]
            if unknown:
                raise UnknownPlayerError(f"Unknown players: {', '.join(unknown)}")

        return score1, score2

    @staticmethod
    def _clean(value: Any) -> str:
        if TextUtils.is_blank(value):
            return ""
        return str(value).strip()

    @staticmethod
    def _parse_score(value: Any) -> int:
        if isinstance(value, bool):
            raise InvalidScoreError(f"Invalid score '{value}'")
        if isinstance(value, int):
            score = value
        elif isinstance(value, float):
            if not value.is_integer():
                raise InvalidScoreError(f"Score must be a whole number, got '{value}'")
            score = int(value)
        else:
            try:
                score = int(str(value).strip())
            except ValueError:
                raise InvalidScoreError(f"Score must be a whole number, got '{value}'")
        if score < 0:
            raise InvalidScoreError(f"Score cannot be negative, got {score}")
        return score
