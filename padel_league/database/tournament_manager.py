"""
Tournament storage for the padel league database.
"""

import sqlite3
import logging
from typing import List, Optional
from padel_league.exceptions import TournamentStateError
from padel_league.models.tournament import Tournament

logger = logging.getLogger(__name__)


class TournamentManager:
    """Manages tournament-related database operations."""

    def __init__(self, database_manager):
        self.db_manager = database_manager

    def add_tournament(self, tournament: Tournament) -> Tournament:
        with self.db_manager.connection() as conn:
            conn.execute("""
                INSERT INTO tournaments (id, name, is_active, winner, completed_at, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                tournament.id, tournament.name, int(tournament.is_active),
                tournament.winner, tournament.completed_at, tournament.created_at
            ))
        logger.info(f"Created tournament {tournament.name}")
        return tournament

    def complete_tournament(self, tournament: Tournament) -> None:
        """Store the winner of a tournament; only an active row is updated."""
        with self.db_manager.connection() as conn:
            cursor = conn.execute("""
                UPDATE tournaments SET is_active = 0, winner = ?, completed_at = ?
                WHERE id = ? AND is_active = 1
            """, (tournament.winner, tournament.completed_at, tournament.id))
            if cursor.rowcount != 1:
                raise TournamentStateError(f"Tournament '{tournament.name}' is already completed")
        logger.info(f"Tournament {tournament.name} completed, winner {tournament.winner}")

    def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        with self.db_manager.connection() as conn:
            row = conn.execute("SELECT * FROM tournaments WHERE id = ?", (tournament_id,)).fetchone()
            return self._row_to_tournament(row) if row else None

    def get_all_tournaments(self) -> List[Tournament]:
        """Get all tournaments, newest first."""
        with self.db_manager.connection() as conn:
            rows = conn.execute("SELECT * FROM tournaments ORDER BY created_at DESC, rowid DESC").fetchall()
            return [self._row_to_tournament(row) for row in rows]

    @staticmethod
    def _row_to_tournament(row: sqlite3.Row) -> Tournament:
        return Tournament(
            id=row['id'],
            name=row['name'],
            is_active=bool(row['is_active']),
            winner=row['winner'],
            completed_at=row['completed_at'],
            created_at=row['created_at']
        )
