#!/usr/bin/env python3
"""
Test suite for the padel league database layer.

This test suite covers:
- Database initialization and configuration loading
- Player, match and tournament storage
- Atomic multi-record commits
"""

import os
import shutil
import sqlite3
import tempfile
import unittest
from dataclasses import replace

import yaml

from padel_league.config.config_manager import ConfigManager
from padel_league.database import DatabaseManager, MatchManager, PlayerManager, TournamentManager
from padel_league.exceptions import DuplicatePlayerNameError, MissingPlayerError, TournamentStateError
from padel_league.models.match import Match
from padel_league.models.player import Player
from padel_league.models.tournament import Tournament


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_config_path = os.path.join(self.test_dir, "test_config.yaml")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_partial_config_is_merged_over_defaults(self):
        with open(self.test_config_path, 'w') as f:
            yaml.dump({'rating': {'k_factor': 32}, 'seed_players': ['Alex', 'Maria']}, f)

        config = ConfigManager.load_config(self.test_config_path)
        self.assertEqual(config['rating']['k_factor'], 32)
        self.assertEqual(config['rating']['initial_rating'], 1000)
        self.assertEqual(config['points']['win_bonus'], 2)
        self.assertEqual(config['seed_players'], ['Alex', 'Maria'])

    def test_missing_file_falls_back_to_defaults(self):
        with self.assertLogs('padel_league.config.config_manager', level='WARNING'):
            config = ConfigManager.load_config(os.path.join(self.test_dir, "nonexistent.yaml"))
        self.assertEqual(config, ConfigManager.get_default_config())

    def test_invalid_yaml_falls_back_to_defaults(self):
        with open(self.test_config_path, 'w') as f:
            f.write("rating: [unclosed\n")
        with self.assertLogs('padel_league.config.config_manager', level='WARNING'):
            config = ConfigManager.load_config(self.test_config_path)
        self.assertEqual(config['rating']['k_factor'], 40)

    def test_non_mapping_falls_back_to_defaults(self):
        with open(self.test_config_path, 'w') as f:
            f.write("- just\n- a list\n")
        with self.assertLogs('padel_league.config.config_manager', level='WARNING'):
            config = ConfigManager.load_config(self.test_config_path)
        self.assertEqual(config, ConfigManager.get_default_config())

    def test_empty_file(self):
        open(self.test_config_path, 'w').close()
        self.assertEqual(ConfigManager.load_config(self.test_config_path), ConfigManager.get_default_config())

    def test_merge_does_not_modify_base(self):
        base = ConfigManager.get_default_config()
        merged = ConfigManager.merge_config(base, {'points': {'win_bonus': 3}})
        self.assertEqual(base['points']['win_bonus'], 2)
        self.assertEqual(merged['points']['win_bonus'], 3)
        self.assertEqual(merged['points']['tournament_winner_bonus'], 5)


class TestDatabaseManager(unittest.TestCase):
    """Test cases for the database managers."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.test_db_path = os.path.join(self.test_dir, "test_league.db")
        self.test_config_path = os.path.join(self.test_dir, "test_config.yaml")

        with open(self.test_config_path, 'w') as f:
            yaml.dump({'database': {'path': self.test_db_path}}, f)

        self.db = DatabaseManager(config_file=self.test_config_path)
        self.player_manager = PlayerManager(self.db)
        self.match_manager = MatchManager(self.db)
        self.tournament_manager = TournamentManager(self.db)

        self.players = [self.player_manager.add_player(Player.create(name))
                        for name in ("Alex", "Maria", "Carlos", "Sofia")]

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _match(self, tournament_id=None):
        ids = [player.id for player in self.players]
        return Match.create(team1=(ids[0], ids[1]), team2=(ids[2], ids[3]), team1_score=6, team2_score=2,
                            tournament_id=tournament_id)

    def test_database_initialization(self):
        """Test database initialization and table creation."""
        self.assertEqual(self.db.db_path, self.test_db_path)
        with sqlite3.connect(self.test_db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in cursor.fetchall()}
            self.assertTrue({'players', 'matches', 'tournaments'} <= tables)

            cursor.execute("SELECT name FROM sqlite_master WHERE type='index'")
            indexes = [row[0] for row in cursor.fetchall()]
            self.assertIn('idx_matches_tournament', indexes)
            self.assertIn('idx_matches_created', indexes)

    def test_reinitialization_keeps_data(self):
        DatabaseManager(config_file=self.test_config_path)
        self.assertEqual(len(self.player_manager.get_all_players()), 4)

    def test_players_round_trip(self):
        stored = self.player_manager.get_all_players()
        self.assertEqual([player.name for player in stored], ["Alex", "Maria", "Carlos", "Sofia"])
        self.assertEqual(stored[0], self.players[0])
        self.assertEqual(stored[0].rating, 1000)

    def test_duplicate_name_rejected_by_database(self):
        with self.assertRaises(DuplicatePlayerNameError):
            self.player_manager.add_player(Player.create("  alex "))

    def test_find_player_by_name(self):
        self.assertEqual(self.player_manager.find_player_by_name("CARLOS").id, self.players[2].id)
        self.assertIsNone(self.player_manager.find_player_by_name("Diego"))

    def test_record_match_stores_changes_and_players(self):
        match = replace(self._match(), rating_changes={self.players[0].id: 24})
        updated = replace(self.players[0], rating=1024, matches_played=1)
        self.match_manager.record_match(match, [updated])

        stored_match = self.match_manager.get_match(match.id)
        self.assertEqual(stored_match, match)
        self.assertEqual(self.player_manager.get_player(updated.id).rating, 1024)
        self.assertEqual(self.player_manager.count_match_references(updated.id), 1)

    def test_record_match_is_atomic(self):
        """A failing player update rolls back the inserted match."""
        match = self._match()
        ghost = Player(id="missing", name="Ghost")
        with self.assertRaises(MissingPlayerError):
            self.match_manager.record_match(match, [ghost])
        self.assertIsNone(self.match_manager.get_match(match.id))
        self.assertEqual(self.match_manager.count_matches(), 0)

    def test_matches_and_games_are_separate(self):
        tournament = self.tournament_manager.add_tournament(Tournament.create("Spring Cup"))
        self.match_manager.record_match(self._match(), [])
        game = self._match(tournament_id=tournament.id)
        self.match_manager.add_game(game)

        self.assertEqual(self.match_manager.count_matches(), 1)
        self.assertEqual([g.id for g in self.match_manager.get_games(tournament.id)], [game.id])
        self.assertEqual(self.db.get_database_stats(),
                         {'players': 4, 'matches': 1, 'games': 1, 'tournaments': 1})

        self.match_manager.delete_game(game.id)
        self.assertEqual(self.match_manager.get_games(tournament.id), [])

    def test_matches_newest_first(self):
        first = self._match()
        self.match_manager.record_match(first, [])
        second = self._match()
        self.match_manager.record_match(second, [])
        self.assertEqual([match.id for match in self.match_manager.get_matches()], [second.id, first.id])

    def test_complete_tournament_only_once(self):
        tournament = self.tournament_manager.add_tournament(Tournament.create("Spring Cup"))
        completed = tournament.mark_winner(self.players[0].id)
        self.tournament_manager.complete_tournament(completed)

        stored = self.tournament_manager.get_tournament(tournament.id)
        self.assertFalse(stored.is_active)
        self.assertEqual(stored.winner, self.players[0].id)

        with self.assertRaises(TournamentStateError):
            self.tournament_manager.complete_tournament(tournament.mark_winner(self.players[1].id))
        self.assertEqual(self.tournament_manager.get_tournament(tournament.id).winner, self.players[0].id)

    def test_unknown_player_reference_rejected(self):
        match = Match.create(team1=("x1", "x2"), team2=("x3", "x4"), team1_score=6, team2_score=2)
        with self.assertRaises(sqlite3.IntegrityError):
            self.match_manager.record_match(match, [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
