#!/usr/bin/env python3
"""
Test suite for CSV report generation and the command line application.
"""

import os
import shutil
import tempfile
import unittest

import pandas as pd
import yaml

from padel_league.config.config_manager import ConfigManager
from padel_league.league_main import main
from padel_league.models.match import MatchSubmission
from padel_league.ranking.ranking_processor import RankingProcessor
from padel_league.reports.report_generator import ReportGenerator


class TestReportGenerator(unittest.TestCase):
    """Test cases for ReportGenerator."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        config = ConfigManager.merge_config(
            ConfigManager.get_default_config(),
            {'database': {'path': os.path.join(self.test_dir, "test_league.db")}}
        )
        self.processor = RankingProcessor(config=config)
        self.players = [self.processor.add_player(name) for name in ("Alex", "Maria", "Carlos", "Sofia", "Diego")]
        self.generator = ReportGenerator(self.processor)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _submission(self, team1_score, team2_score):
        alex, maria, carlos, sofia = self.players[:4]
        return MatchSubmission(alex.id, maria.id, carlos.id, sofia.id, team1_score, team2_score)

    def test_ranking_report(self):
        self.processor.add_match(self._submission(4, 0))
        output_file = os.path.join(self.test_dir, "ranking.csv")

        self.assertEqual(self.generator.generate_ranking_report(output_file), 4)

        df = pd.read_csv(output_file)
        self.assertEqual(list(df['Rank']), [1, 2, 3, 4])
        self.assertEqual(list(df['Rating']), [1028, 1028, 972, 972])
        self.assertNotIn('Diego', list(df['Name']))
        self.assertEqual(list(df['Win Rate %']), [100, 100, 0, 0])
        self.assertEqual(list(df['Game Win Rate %']), [100, 100, 0, 0])

    def test_ranking_report_without_matches(self):
        output_file = os.path.join(self.test_dir, "ranking.csv")
        with self.assertLogs('padel_league.reports.report_generator', level='WARNING'):
            self.assertEqual(self.generator.generate_ranking_report(output_file), 0)
        self.assertFalse(os.path.exists(output_file))

    def test_match_history_report(self):
        self.processor.add_match(self._submission(4, 0))
        self.processor.add_match(self._submission(3, 6))
        output_file = os.path.join(self.test_dir, "history.csv")

        self.assertEqual(self.generator.generate_match_history_report(output_file), 2)

        df = pd.read_csv(output_file)
        self.assertEqual(list(df['Score']), ['3-6', '4-0'])
        self.assertEqual(df['Team 1'][0], 'Alex & Maria')
        self.assertEqual(df['Rating Change'][1], 28)

    def test_all_reports(self):
        self.processor.add_match(self._submission(6, 2))
        tournament = self.processor.create_tournament("Spring Cup")
        self.processor.add_game(tournament.id, self._submission(2, 1))
        output_dir = os.path.join(self.test_dir, "reports")

        results = self.generator.generate_all_reports(output_dir)

        self.assertEqual(results['ranking'], 4)
        self.assertEqual(results['match_history'], 1)
        self.assertEqual(results[f'standings_spring_cup_{tournament.id[:8]}'], 4)
        standings_files = [name for name in os.listdir(output_dir) if name.startswith('standings_')]
        self.assertEqual(len(standings_files), 1)
        df = pd.read_csv(os.path.join(output_dir, standings_files[0]))
        self.assertEqual(list(df['Points']), [4, 4, 1, 1])

    def test_tournaments_with_same_name_get_separate_reports(self):
        first = self.processor.create_tournament("Club Night")
        second = self.processor.create_tournament("Club Night")
        self.processor.add_game(first.id, self._submission(2, 1))

        results = self.generator.generate_all_reports(os.path.join(self.test_dir, "reports"))

        standings = {key: count for key, count in results.items() if key.startswith('standings_')}
        self.assertEqual(len(standings), 2)
        self.assertEqual(standings[f'standings_club_night_{first.id[:8]}'], 4)
        self.assertEqual(standings[f'standings_club_night_{second.id[:8]}'], 0)


class TestCommandLine(unittest.TestCase):
    """Test cases for the command line entry point."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_config_path = os.path.join(self.test_dir, "config.yaml")
        self.test_db_path = os.path.join(self.test_dir, "league.db")
        with open(self.test_config_path, 'w') as f:
            yaml.dump({
                'database': {'path': self.test_db_path},
                'logging': {'level': 'WARNING'},
                'seed_players': ['Alex', 'Maria', 'Carlos', 'Sofia'],
            }, f)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def run_cli(self, *args):
        return main(['--config', self.test_config_path, *args])

    def test_record_match_by_name(self):
        self.assertEqual(self.run_cli('add-match', 'Alex', 'Maria', 'Carlos', 'Sofia', '--score', '4', '0'), 0)

        processor = RankingProcessor(self.test_db_path, config_file=self.test_config_path)
        self.assertEqual(processor.find_player_by_name('alex').rating, 1028)
        self.assertEqual(processor.get_league_summary().matches_played, 1)

    def test_league_error_exit_code(self):
        self.assertEqual(self.run_cli('add-match', 'Alex', 'Maria', 'Carlos', 'Sofia', '--score', '2', '2'), 1)
        self.assertEqual(self.run_cli('add-player', 'alex'), 1)
        self.assertEqual(self.run_cli('remove-player', 'Nobody'), 1)

    def test_import_without_required_columns_fails(self):
        csv_file = os.path.join(self.test_dir, "matches.csv")
        pd.DataFrame({'a': ['1'], 'b': ['2']}).to_csv(csv_file, index=False)
        self.assertEqual(self.run_cli('import-matches', csv_file), 1)

    def test_import_missing_file_fails(self):
        missing = os.path.join(self.test_dir, "nope.csv")
        self.assertEqual(self.run_cli('import-matches', missing), 1)
        self.assertEqual(self.run_cli('import-players', missing), 1)

    def test_tournament_commands(self):
        self.assertEqual(self.run_cli('create-tournament', 'Spring Cup'), 0)
        processor = RankingProcessor(self.test_db_path, config_file=self.test_config_path)
        tournament_id = processor.get_tournaments()[0].id

        self.assertEqual(self.run_cli('add-game', tournament_id, 'Alex', 'Maria', 'Carlos', 'Sofia',
                                      '--score', '2', '1'), 0)
        self.assertEqual(self.run_cli('mark-winner', tournament_id, 'Carlos'), 0)
        self.assertEqual(self.run_cli('mark-winner', tournament_id, 'Alex'), 1)
        self.assertEqual(self.run_cli('standings', tournament_id), 0)

        standings = processor.get_standings(tournament_id)
        self.assertEqual(standings[0].name, 'Carlos')
        self.assertEqual(standings[0].total_points, 6)


if __name__ == '__main__':
    unittest.main(verbosity=2)
