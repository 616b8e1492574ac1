"""
Core database management for the padel league system.
"""

import sqlite3
import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Any
from padel_league.config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages core database operations and initialization."""

    def __init__(self, db_path: Optional[str] = None, config_file: Optional[str] = "config.yaml",
                 config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else ConfigManager.load_config(config_file)
        self.db_path = db_path or self.config.get('database', {}).get('path', 'padel_league.db')
        self.init_database()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Open a connection wrapped in a single transaction.
        Everything done inside the block is committed together or rolled back together.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def init_database(self) -> None:
        """Initialize the database with required tables."""
        with self.connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    name_key TEXT NOT NULL UNIQUE,
                    rating INTEGER NOT NULL,
                    matches_played INTEGER NOT NULL DEFAULT 0,
                    wins INTEGER NOT NULL DEFAULT 0,
                    losses INTEGER NOT NULL DEFAULT 0,
                    games_won INTEGER NOT NULL DEFAULT 0,
                    games_lost INTEGER NOT NULL DEFAULT 0,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    CHECK (matches_played >= 0 AND wins >= 0 AND losses >= 0),
                    CHECK (games_won >= 0 AND games_lost >= 0)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS tournaments (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    winner TEXT,
                    completed_at TIMESTAMP,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS matches (
                    id TEXT PRIMARY KEY,
                    tournament_id TEXT,
                    team1_player1 TEXT NOT NULL,
                    team1_player2 TEXT NOT NULL,
                    team2_player1 TEXT NOT NULL,
                    team2_player2 TEXT NOT NULL,
                    team1_score INTEGER NOT NULL,
                    team2_score INTEGER NOT NULL,
                    winner TEXT NOT NULL,
                    match_date TEXT,
                    created_at TIMESTAMP NOT NULL,
                    rating_changes TEXT,
                    CHECK (winner IN ('team1', 'team2')),
                    CHECK (team1_score >= 0 AND team2_score >= 0 AND team1_score != team2_score),
                    FOREIGN KEY (tournament_id) REFERENCES tournaments(id) ON DELETE CASCADE,
                    FOREIGN KEY (team1_player1) REFERENCES players(id),
                    FOREIGN KEY (team1_player2) REFERENCES players(id),
                    FOREIGN KEY (team2_player1) REFERENCES players(id),
                    FOREIGN KEY (team2_player2) REFERENCES players(id)
                )
            """)

            cursor.execute("CREATE INDEX IF NOT EXISTS idx_matches_tournament ON matches(tournament_id)")
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_matches_created ON matches(created_at)")

        logger.info("Database initialized successfully")

    def get_database_stats(self) -> Dict[str, int]:
        """Get basic database statistics."""
        with self.connection() as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT COUNT(*) FROM players")
            players = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM matches WHERE tournament_id IS NULL")
            matches = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM matches WHERE tournament_id IS NOT NULL")
            games = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM tournaments")
            tournaments = cursor.fetchone()[0]

            return {
                'players': players,
                'matches': matches,
                'games': games,
                'tournaments': tournaments
            }
