"""
Cumulative points standings for a tournament.

Standings are never stored: they are folded from the tournament's games every
time they are requested, so deleting a game needs no bookkeeping.
"""

from typing import Dict, Iterable, List, Optional

from padel_league.models.match import Match, TEAM1, TEAM2
from padel_league.models.standing import Standing

WIN_BONUS = 2
TOURNAMENT_WINNER_BONUS = 5


class StandingsCalculator:
    """Computes per-player cumulative points from a list of games."""

    def __init__(self, win_bonus: int = WIN_BONUS,
                 tournament_winner_bonus: int = TOURNAMENT_WINNER_BONUS):
        self.win_bonus = win_bonus
        self.tournament_winner_bonus = tournament_winner_bonus

    @classmethod
    def from_config(cls, config: Dict) -> "StandingsCalculator":
        points_config = config.get('points', {})
        return cls(
            win_bonus=points_config.get('win_bonus', WIN_BONUS),
            tournament_winner_bonus=points_config.get('tournament_winner_bonus', TOURNAMENT_WINNER_BONUS),
        )

    def compute_standings(self, games: Iterable[Match], winner_id: Optional[str] = None,
                          player_names: Optional[Dict[str, str]] = None) -> List[Standing]:
        """
        Compute standings for one tournament.

        Every member of a team is credited with the team's score; members of
        the winning team also get the win bonus. The tournament winner, if
        marked, gets the tournament bonus once. Players are sorted by total
        points, highest first; ties stay in the order the players first
        appear in the games.
        """
        player_names = player_names or {}
        stats: Dict[str, Standing] = {}

        for game in games:
            for team_key, team, score in ((TEAM1, game.team1, game.team1_score),
                                          (TEAM2, game.team2, game.team2_score)):
                won = game.winner == team_key
                for player_id in team:
                    standing = stats.get(player_id)
                    if standing is None:
                        standing = Standing(player_id=player_id, name=player_names.get(player_id, player_id))
                        stats[player_id] = standing
                    standing.games_played += 1
                    standing.total_scored += score
                    standing.total_points += score
                    if won:
                        standing.games_won += 1
                        standing.total_points += self.win_bonus

        if winner_id and winner_id in stats:
            stats[winner_id].total_points += self.tournament_winner_bonus

        played = [standing for standing in stats.values() if standing.games_played > 0]
        return sorted(played, key=lambda standing: standing.total_points, reverse=True)
