"""
Player management for the padel league database.
"""

import sqlite3
import logging
from typing import Iterable, List, Optional
from padel_league.exceptions import DuplicatePlayerNameError, MissingPlayerError
from padel_league.models.player import Player
from padel_league.utils.csv_utils import CsvUtils
from padel_league.utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

PLAYER_COLUMNS = """
    id, name, rating, matches_played, wins, losses, games_won, games_lost, created_at
"""


class PlayerManager:
    """Manages player-related database operations."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    def add_player(self, player: Player) -> Player:
        """Insert a new player. Names must be unique after normalization."""
        try:
            with self.db_manager.connection() as conn:
                conn.execute("""
                    INSERT INTO players (
                        id, name, name_key, rating, matches_played, wins, losses,
                        games_won, games_lost, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    player.id, player.name, TextUtils.normalize_name(player.name), player.rating,
                    player.matches_played, player.wins, player.losses,
                    player.games_won, player.games_lost, player.created_at
                ))
        except sqlite3.IntegrityError as e:
            raise DuplicatePlayerNameError(f"A player named '{player.name}' already exists") from e

        logger.info(f"Added new player {player.name}")
        return player

    def delete_player(self, player_id: str) -> None:
        with self.db_manager.connection() as conn:
            conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
        logger.info(f"Removed player {player_id}")

    @staticmethod
    def write_player_stats(conn: sqlite3.Connection, players: Iterable[Player]) -> None:
        """Store rating statistics for players inside the caller's transaction."""
        for player in players:
            cursor = conn.execute("""
                UPDATE players SET
                    rating = ?, matches_played = ?, wins = ?, losses = ?,
                    games_won = ?, games_lost = ?
                WHERE id = ?
            """, (
                player.rating, player.matches_played, player.wins, player.losses,
                player.games_won, player.games_lost, player.id
            ))
            if cursor.rowcount != 1:
                raise MissingPlayerError(f"Player {player.id} does not exist")

    def get_all_players(self) -> List[Player]:
        """Get all players in the order they were added."""
        with self.db_manager.connection() as conn:
            rows = conn.execute(f"SELECT {PLAYER_COLUMNS} FROM players ORDER BY rowid").fetchall()
            return [self._row_to_player(row) for row in rows]

    def get_player(self, player_id: str) -> Optional[Player]:
        with self.db_manager.connection() as conn:
            row = conn.execute(f"SELECT {PLAYER_COLUMNS} FROM players WHERE id = ?", (player_id,)).fetchone()
            return self._row_to_player(row) if row else None

    def find_player_by_name(self, name: str) -> Optional[Player]:
        """Find a player by display name, ignoring case and extra whitespace."""
        with self.db_manager.connection() as conn:
            row = conn.execute(
                f"SELECT {PLAYER_COLUMNS} FROM players WHERE name_key = ?",
                (TextUtils.normalize_name(name),)
            ).fetchone()
            return self._row_to_player(row) if row else None

    def count_match_references(self, player_id: str) -> int:
        """Count stored matches and games the player took part in."""
        with self.db_manager.connection() as conn:
            row = conn.execute("""
                SELECT COUNT(*) FROM matches
                WHERE team1_player1 = ? OR team1_player2 = ?
                   OR team2_player1 = ? OR team2_player2 = ?
            """, (player_id, player_id, player_id, player_id)).fetchone()
            return row[0]

    def read_player_names_from_csv(self, csv_file: str) -> List[str]:
        """
        Read player names from a CSV file with a 'name' column.
        Blank names are skipped.
        """
        df = CsvUtils.read_csv(csv_file, ['name'])

        names = []
        for value in df['name']:
            name = TextUtils.clean_name(value)
            if name:
                names.append(name)
        return names

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            id=row['id'],
            name=row['name'],
            rating=row['rating'],
            matches_played=row['matches_played'],
            wins=row['wins'],
            losses=row['losses'],
            games_won=row['games_won'],
            games_lost=row['games_lost'],
            created_at=row['created_at']
        )
