"""
Match and game storage for the padel league database.
"""

import json
import sqlite3
import logging
from typing import List, Optional, Sequence
from padel_league.models.match import Match
from padel_league.models.player import Player
from padel_league.database.player_manager import PlayerManager

logger = logging.getLogger(__name__)

MATCH_COLUMNS = """
    id, tournament_id, team1_player1, team1_player2, team2_player1, team2_player2,
    team1_score, team2_score, winner, match_date, created_at, rating_changes
"""


class MatchManager:
    """Manages match-related database operations."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    def record_match(self, match: Match, updated_players: Sequence[Player]) -> None:
        """Store a rating match together with the updated participant records."""
        with self.db_manager.connection() as conn:
            self._insert_match(conn, match)
            PlayerManager.write_player_stats(conn, updated_players)
        logger.info(f"Recorded match {match.score} between {' & '.join(match.team1)} and {' & '.join(match.team2)}")

    def remove_match(self, match: Match, restored_players: Sequence[Player]) -> None:
        """Delete a rating match and store the restored participant records."""
        with self.db_manager.connection() as conn:
            PlayerManager.write_player_stats(conn, restored_players)
            conn.execute("DELETE FROM matches WHERE id = ?", (match.id,))
        logger.info(f"Deleted match {match.id}")

    def add_game(self, game: Match) -> None:
        """Store a tournament game. Games do not touch player statistics."""
        with self.db_manager.connection() as conn:
            self._insert_match(conn, game)
        logger.info(f"Recorded game {game.score} in tournament {game.tournament_id}")

    def delete_game(self, game_id: str) -> None:
        with self.db_manager.connection() as conn:
            conn.execute("DELETE FROM matches WHERE id = ? AND tournament_id IS NOT NULL", (game_id,))
        logger.info(f"Deleted game {game_id}")

    def get_match(self, match_id: str) -> Optional[Match]:
        with self.db_manager.connection() as conn:
            row = conn.execute(f"SELECT {MATCH_COLUMNS} FROM matches WHERE id = ?", (match_id,)).fetchone()
            return self._row_to_match(row) if row else None

    def get_matches(self) -> List[Match]:
        """Get all rating matches, newest first."""
        with self.db_manager.connection() as conn:
            rows = conn.execute(f"""
                SELECT {MATCH_COLUMNS} FROM matches
                WHERE tournament_id IS NULL
                ORDER BY created_at DESC, rowid DESC
            """).fetchall()
            return [self._row_to_match(row) for row in rows]

    def get_games(self, tournament_id: str) -> List[Match]:
        """Get the games of a tournament in the order they were played."""
        with self.db_manager.connection() as conn:
            rows = conn.execute(f"""
                SELECT {MATCH_COLUMNS} FROM matches
                WHERE tournament_id = ?
                ORDER BY created_at, rowid
            """, (tournament_id,)).fetchall()
            return [self._row_to_match(row) for row in rows]

    def count_matches(self) -> int:
        with self.db_manager.connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM matches WHERE tournament_id IS NULL").fetchone()[0]

    @staticmethod
    def _insert_match(conn: sqlite3.Connection, match: Match) -> None:
        conn.execute("""
            INSERT INTO matches (
                id, tournament_id, team1_player1, team1_player2, team2_player1, team2_player2,
                team1_score, team2_score, winner, match_date, created_at, rating_changes
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            match.id, match.tournament_id, match.team1[0], match.team1[1],
            match.team2[0], match.team2[1], match.team1_score, match.team2_score,
            match.winner, match.date, match.created_at,
            json.dumps(match.rating_changes) if match.rating_changes else None
        ))

    @staticmethod
    def _row_to_match(row: sqlite3.Row) -> Match:
        rating_changes = json.loads(row['rating_changes']) if row['rating_changes'] else {}
        return Match(
            id=row['id'],
            team1=(row['team1_player1'], row['team1_player2']),
            team2=(row['team2_player1'], row['team2_player2']),
            team1_score=row['team1_score'],
            team2_score=row['team2_score'],
            winner=row['winner'],
            date=row['match_date'],
            created_at=row['created_at'],
            tournament_id=row['tournament_id'],
            rating_changes={player_id: int(delta) for player_id, delta in rating_changes.items()}
        )
