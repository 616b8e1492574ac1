"""
Ranking processor for the padel league system.

Ties the validator and both ranking engines to the database: every operation
reads the current records, computes the new ones, and commits them in one
transaction, so a failure leaves the stored league untouched.
"""

import logging
from typing import Any, Dict, List, Optional
from padel_league.database.database_manager import DatabaseManager
from padel_league.database.player_manager import PlayerManager
from padel_league.database.match_manager import MatchManager
from padel_league.database.tournament_manager import TournamentManager
from padel_league.exceptions import (
    DuplicatePlayerNameError,
    InvalidPlayerNameError,
    LeagueError,
    MatchNotFoundError,
    PlayerInUseError,
    PlayerNotFoundError,
    TournamentNotFoundError,
    TournamentStateError,
)
from padel_league.models.match import Match, MatchSubmission
from padel_league.models.player import Player, INITIAL_RATING
from padel_league.models.standing import LeagueSummary, Standing
from padel_league.models.tournament import Tournament
from padel_league.ranking.match_validator import MatchValidator, MIN_WINNING_SCORE
from padel_league.ranking.rating_engine import RatingEngine
from padel_league.ranking.standings_calculator import StandingsCalculator
from padel_league.utils.csv_utils import CsvUtils
from padel_league.utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

MATCH_CSV_COLUMNS = [
    'team1_player1', 'team1_player2', 'team2_player1', 'team2_player2',
    'team1_score', 'team2_score'
]


class RankingProcessor:
    """Records results and computes rankings for the league."""

    def __init__(self, db_path: Optional[str] = None, config_file: Optional[str] = "config.yaml",
                 config: Optional[Dict[str, Any]] = None):
        self.db = DatabaseManager(db_path, config_file, config=config)
        self.player_manager = PlayerManager(self.db)
        self.match_manager = MatchManager(self.db)
        self.tournament_manager = TournamentManager(self.db)

        rating_config = self.db.config.get('rating', {})
        self.initial_rating = rating_config.get('initial_rating', INITIAL_RATING)
        self.validator = MatchValidator(rating_config.get('min_winning_score', MIN_WINNING_SCORE))
        self.rating_engine = RatingEngine.from_config(self.db.config)
        self.standings_calculator = StandingsCalculator.from_config(self.db.config)
        self.rejected_rows: List[Dict[str, Any]] = []

    # ========== Players ==========

    def add_player(self, name: str) -> Player:
        """Add a player to the roster with the initial rating."""
        clean_name = TextUtils.clean_name(name)
        if not clean_name:
            raise InvalidPlayerNameError("Player name cannot be empty")
        if self.player_manager.find_player_by_name(clean_name):
            raise DuplicatePlayerNameError(f"A player named '{clean_name}' already exists")
        return self.player_manager.add_player(Player.create(clean_name, rating=self.initial_rating))

    def remove_player(self, player_id: str) -> None:
        """Remove a player who has never played a recorded match."""
        player = self.get_player(player_id)
        if player.matches_played > 0 or self.player_manager.count_match_references(player_id) > 0:
            raise PlayerInUseError(f"Player '{player.name}' has recorded matches and cannot be removed")
        self.player_manager.delete_player(player_id)

    def get_player(self, player_id: str) -> Player:
        player = self.player_manager.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")
        return player

    def get_players(self) -> List[Player]:
        return self.player_manager.get_all_players()

    def find_player_by_name(self, name: str) -> Optional[Player]:
        return self.player_manager.find_player_by_name(name)

    def seed_players_from_config(self) -> int:
        """Add the configured starting roster to an empty league."""
        if self.player_manager.get_all_players():
            logger.debug("Roster already populated, skipping seed players")
            return 0
        added = 0
        for name in self.db.config.get('seed_players') or []:
            self.add_player(name)
            added += 1
        if added:
            logger.info(f"Seeded {added} players from configuration")
        return added

    def load_players_from_csv(self, csv_file: str) -> int:
        """
        Add players listed in a CSV file.
        Returns the number of players added; duplicates are logged and skipped.
        """
        added = 0
        for name in self.player_manager.read_player_names_from_csv(csv_file):
            try:
                self.add_player(name)
                added += 1
            except DuplicatePlayerNameError as e:
                logger.warning(f"Skipping player: {e}")
        logger.info(f"Processed {added} players from CSV")
        return added

    # ========== Rating matches ==========

    def add_match(self, submission: MatchSubmission) -> Match:
        """Validate a match, apply its rating effect and store it."""
        players = self.player_manager.get_all_players()
        score1, score2 = self.validator.validate(
            submission,
            require_min_score=True,
            known_player_ids={player.id for player in players},
        )
        match = self._build_match(submission, score1, score2)
        updated_players, stored_match = self.rating_engine.apply_match(players, match)
        participants = set(match.participants)
        self.match_manager.record_match(
            stored_match,
            [player for player in updated_players if player.id in participants]
        )
        return stored_match

    def delete_match(self, match_id: str) -> None:
        """Delete a rating match and reverse its effect on the four players."""
        match = self.match_manager.get_match(match_id)
        if match is None or match.tournament_id is not None:
            raise MatchNotFoundError(f"Match {match_id} not found")
        players = self.player_manager.get_all_players()
        restored_players = self.rating_engine.reverse_match(players, match)
        participants = set(match.participants)
        self.match_manager.remove_match(
            match,
            [player for player in restored_players if player.id in participants]
        )

    def get_matches(self) -> List[Match]:
        """Rating matches, newest first."""
        return self.match_manager.get_matches()

    def get_ranking(self) -> List[Player]:
        return self.rating_engine.rank_players(self.player_manager.get_all_players())

    def get_league_summary(self) -> LeagueSummary:
        players = self.player_manager.get_all_players()
        ranking = self.rating_engine.rank_players(players)
        return LeagueSummary(
            active_players=len(players),
            matches_played=self.match_manager.count_matches(),
            champion=ranking[0].name if ranking else None
        )

    def import_matches_from_csv(self, csv_file: str) -> int:
        """
        Import rating matches from a CSV file that names players by display name.

        Rows are applied in file order. Rejected rows are logged and collected
        in ``rejected_rows``. Returns the number of matches imported.
        An unreadable file or one missing required columns is rejected as a
        whole before any row is applied.
        """
        df = CsvUtils.read_csv(csv_file, MATCH_CSV_COLUMNS)

        imported = 0
        for index, row in df.iterrows():
            try:
                submission = MatchSubmission(
                    team1_player1=self._player_id_for_name(row['team1_player1']),
                    team1_player2=self._player_id_for_name(row['team1_player2']),
                    team2_player1=self._player_id_for_name(row['team2_player1']),
                    team2_player2=self._player_id_for_name(row['team2_player2']),
                    team1_score=row['team1_score'],
                    team2_score=row['team2_score'],
                    date=row.get('date') or None,
                )
                self.add_match(submission)
                imported += 1
            except LeagueError as e:
                logger.warning(f"Rejected match in row {index + 2}: {e}")
                self.rejected_rows.append({**row.to_dict(), 'row': index + 2, 'error': str(e)})

        logger.info(f"Imported {imported} matches from {csv_file}")
        return imported

    def _player_id_for_name(self, name: str) -> str:
        if TextUtils.is_blank(name):
            return ""
        player = self.player_manager.find_player_by_name(name)
        if player is None:
            raise PlayerNotFoundError(f"No player named '{TextUtils.clean_name(name)}'")
        return player.id

    # ========== Tournaments ==========

    def create_tournament(self, name: str) -> Tournament:
        clean_name = TextUtils.clean_name(name)
        if not clean_name:
            raise InvalidPlayerNameError("Tournament name cannot be empty")
        return self.tournament_manager.add_tournament(Tournament.create(clean_name))

    def get_tournament(self, tournament_id: str) -> Tournament:
        tournament = self.tournament_manager.get_tournament(tournament_id)
        if tournament is None:
            raise TournamentNotFoundError(f"Tournament {tournament_id} not found")
        return tournament

    def get_tournaments(self) -> List[Tournament]:
        return self.tournament_manager.get_all_tournaments()

    def add_game(self, tournament_id: str, submission: MatchSubmission) -> Match:
        """Record a game in an active tournament. Games carry no minimum score."""
        tournament = self.get_tournament(tournament_id)
        if not tournament.is_active:
            raise TournamentStateError(f"Tournament '{tournament.name}' is completed, no more games can be added")
        players = self.player_manager.get_all_players()
        score1, score2 = self.validator.validate(
            submission,
            require_min_score=False,
            known_player_ids={player.id for player in players},
        )
        game = self._build_match(submission, score1, score2, tournament_id=tournament.id)
        self.match_manager.add_game(game)
        return game

    def delete_game(self, game_id: str) -> None:
        game = self.match_manager.get_match(game_id)
        if game is None or game.tournament_id is None:
            raise MatchNotFoundError(f"Game {game_id} not found")
        self.match_manager.delete_game(game_id)

    def get_games(self, tournament_id: str) -> List[Match]:
        self.get_tournament(tournament_id)
        return self.match_manager.get_games(tournament_id)

    def mark_tournament_winner(self, tournament_id: str, player_id: str) -> Tournament:
        """Complete a tournament by naming its winner. This cannot be undone."""
        tournament = self.get_tournament(tournament_id)
        winner = self.get_player(player_id)
        completed = tournament.mark_winner(winner.id)
        self.tournament_manager.complete_tournament(completed)
        return completed

    def get_standings(self, tournament_id: str) -> List[Standing]:
        """Recompute the tournament's standings from its games."""
        tournament = self.get_tournament(tournament_id)
        games = self.match_manager.get_games(tournament_id)
        return self.standings_calculator.compute_standings(games, tournament.winner, self.get_player_names())

    def get_player_names(self) -> Dict[str, str]:
        return {player.id: player.name for player in self.player_manager.get_all_players()}

    @staticmethod
    def _build_match(submission: MatchSubmission, score1: int, score2: int,
                     tournament_id: Optional[str] = None) -> Match:
        team1_player1, team1_player2, team2_player1, team2_player2 = (
            str(value).strip() for value in submission.participants
        )
        return Match.create(
            team1=(team1_player1, team1_player2),
            team2=(team2_player1, team2_player2),
            team1_score=score1,
            team2_score=score2,
            date=submission.date,
            tournament_id=tournament_id,
        )
