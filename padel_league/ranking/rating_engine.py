"""
Team Elo rating engine for doubles matches.

Each match updates the four participants by one shared amount: the Elo change
between the two team averages, scaled up by the score margin. Winners gain it,
losers lose it. Applying a match and reversing it restores the exact previous
player records.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from padel_league.exceptions import MissingPlayerError, UnknownPlayerError
from padel_league.models.match import Match, TEAM1
from padel_league.models.player import Player
from padel_league.utils.math_utils import MathUtils

logger = logging.getLogger(__name__)

K_FACTOR = 40
RATING_SCALE = 400
MARGIN_STEP = 0.10


def calculate_rating_change(winner_rating: float, loser_rating: float,
                            k_factor: int = K_FACTOR, rating_scale: int = RATING_SCALE) -> int:
    """Return the Elo points the winner takes from the loser."""
    expected_win = 1 / (1 + 10 ** ((loser_rating - winner_rating) / rating_scale))
    return MathUtils.round_half_up(k_factor * (1 - expected_win))


class RatingEngine:
    """Applies and reverses the rating effect of single matches."""

    def __init__(self, k_factor: int = K_FACTOR, margin_step: float = MARGIN_STEP,
                 rating_scale: int = RATING_SCALE):
        self.k_factor = k_factor
        self.margin_step = margin_step
        self.rating_scale = rating_scale

    @classmethod
    def from_config(cls, config: Dict) -> "RatingEngine":
        rating_config = config.get('rating', {})
        return cls(
            k_factor=rating_config.get('k_factor', K_FACTOR),
            margin_step=rating_config.get('margin_step', MARGIN_STEP),
            rating_scale=rating_config.get('rating_scale', RATING_SCALE),
        )

    def margin_multiplier(self, match: Match) -> float:
        return 1 + self.margin_step * match.score_difference

    def team_averages(self, players_by_id: Dict[str, Player], match: Match) -> Tuple[float, float]:
        """Mean rating of each team, read before anyone is updated."""
        team1_avg = sum(players_by_id[pid].rating for pid in match.team1) / len(match.team1)
        team2_avg = sum(players_by_id[pid].rating for pid in match.team2) / len(match.team2)
        return team1_avg, team2_avg

    def final_change(self, players_by_id: Dict[str, Player], match: Match) -> int:
        """The unsigned rating change every participant receives for this match."""
        team1_avg, team2_avg = self.team_averages(players_by_id, match)
        if match.winner == TEAM1:
            winning_avg, losing_avg = team1_avg, team2_avg
        else:
            winning_avg, losing_avg = team2_avg, team1_avg
        base_change = calculate_rating_change(winning_avg, losing_avg, self.k_factor, self.rating_scale)
        return MathUtils.round_half_up(base_change * self.margin_multiplier(match))

    def compute_rating_changes(self, players: Sequence[Player], match: Match) -> Dict[str, int]:
        """Signed rating delta for each participant, keyed by player id."""
        players_by_id = self._index_participants(players, match, UnknownPlayerError)
        change = self.final_change(players_by_id, match)
        return {
            player_id: change if match.won(player_id) else -change
            for player_id in match.participants
        }

    def apply_match(self, players: Sequence[Player], match: Match) -> Tuple[List[Player], Match]:
        """
        Apply a validated match to the roster.

        Returns the updated roster, in the same order, and the match with the
        applied rating deltas recorded on it. Only the four participants change.
        The input players are not mutated.
        """
        changes = self.compute_rating_changes(players, match)

        updated = []
        for player in players:
            delta = changes.get(player.id)
            if delta is None:
                updated.append(player)
                continue
            own_score, opponent_score = match.scores_for(player.id)
            won = match.won(player.id)
            updated.append(replace(
                player,
                rating=player.rating + delta,
                matches_played=player.matches_played + 1,
                wins=player.wins + (1 if won else 0),
                losses=player.losses + (0 if won else 1),
                games_won=player.games_won + own_score,
                games_lost=player.games_lost + opponent_score,
            ))

        logger.debug(f"Applied match {match.id} ({match.score}): {changes}")
        return updated, replace(match, rating_changes=changes)

    def reverse_match(self, players: Sequence[Player], match: Match) -> List[Player]:
        """
        Undo a previously applied match.

        Matches carrying their applied deltas are reversed exactly. Matches
        without them are reversed by recomputing the change from the current
        ratings, which is only exact if no later match involving any of these
        players is still applied.
        """
        players_by_id = self._index_participants(players, match, MissingPlayerError)
        if match.rating_changes:
            changes = dict(match.rating_changes)
        else:
            logger.warning(f"Match {match.id} has no stored rating changes, reconstructing from current ratings")
            change = self.final_change(players_by_id, match)
            changes = {
                player_id: change if match.won(player_id) else -change
                for player_id in match.participants
            }

        restored = []
        for player in players:
            if player.id not in changes:
                restored.append(player)
                continue
            own_score, opponent_score = match.scores_for(player.id)
            won = match.won(player.id)
            restored.append(replace(
                player,
                rating=player.rating - changes[player.id],
                matches_played=max(0, player.matches_played - 1),
                wins=max(0, player.wins - (1 if won else 0)),
                losses=max(0, player.losses - (0 if won else 1)),
                games_won=max(0, player.games_won - own_score),
                games_lost=max(0, player.games_lost - opponent_score),
            ))

        logger.debug(f"Reversed match {match.id} ({match.score}): {changes}")
        return restored

    @staticmethod
    def rank_players(players: Sequence[Player]) -> List[Player]:
        """Players with at least one match, highest rating first."""
        active = [player for player in players if player.matches_played > 0]
        return sorted(active, key=lambda player: player.rating, reverse=True)

    @staticmethod
    def _index_participants(players: Sequence[Player], match: Match, error_class) -> Dict[str, Player]:
        players_by_id = {player.id: player for player in players}
        missing = [pid for pid in match.participants if pid not in players_by_id]
        if missing:
            raise error_class(f"Match {match.id} references unknown players: {', '.join(missing)}")
        return players_by_id
