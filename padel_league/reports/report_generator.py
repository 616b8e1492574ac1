"""
Report generator for the padel league system.
"""

import os
import pandas as pd
import logging
from typing import Dict
from padel_league.ranking.ranking_processor import RankingProcessor

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generates CSV reports for the league."""

    def __init__(self, ranking_processor: RankingProcessor):
        self.ranking_processor = ranking_processor

    def generate_ranking_report(self, output_file: str) -> int:
        """
        Generate the rating leaderboard.
        Returns the number of ranked players in the report.
        """
        ranking = self.ranking_processor.get_ranking()
        if not ranking:
            logger.warning("No ranked players found for report generation")
            return 0

        data = []
        for position, player in enumerate(ranking, 1):
            data.append({
                'Rank': position,
                'Name': player.name,
                'Rating': player.rating,
                'Matches': player.matches_played,
                'Wins': player.wins,
                'Losses': player.losses,
                'Win Rate %': player.win_rate,
                'Games Won': player.games_won,
                'Games Lost': player.games_lost,
                'Game Win Rate %': player.game_win_rate
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated ranking report with {len(ranking)} players: {output_file}")
        return len(ranking)

    def generate_match_history_report(self, output_file: str) -> int:
        """Generate the list of rating matches, newest first."""
        matches = self.ranking_processor.get_matches()
        if not matches:
            logger.info("No matches found for report")
            return 0

        names = self.ranking_processor.get_player_names()
        data = []
        for match in matches:
            data.append({
                'Date': match.date,
                'Team 1': ' & '.join(names.get(pid, pid) for pid in match.team1),
                'Team 2': ' & '.join(names.get(pid, pid) for pid in match.team2),
                'Score': match.score,
                'Winner': match.winner,
                'Rating Change': abs(next(iter(match.rating_changes.values()), 0))
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated match history report with {len(matches)} matches: {output_file}")
        return len(matches)

    def generate_standings_report(self, tournament_id: str, output_file: str) -> int:
        """Generate the cumulative points standings of one tournament."""
        standings = self.ranking_processor.get_standings(tournament_id)
        if not standings:
            logger.warning(f"No games found for tournament {tournament_id}")
            return 0

        df = pd.DataFrame([{
            'Rank': position,
            'Name': standing.name,
            'Points': standing.total_points,
            'Games Played': standing.games_played,
            'Games Won': standing.games_won,
            'Total Scored': standing.total_scored
        } for position, standing in enumerate(standings, 1)])
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated standings report with {len(standings)} players: {output_file}")
        return len(standings)

    def generate_all_reports(self, output_directory: str = "reports") -> Dict[str, int]:
        """Generate all available reports in the specified directory."""
        os.makedirs(output_directory, exist_ok=True)

        report_results = {}

        ranking_report = os.path.join(output_directory, "ranking_report.csv")
        report_results['ranking'] = self.generate_ranking_report(ranking_report)

        history_report = os.path.join(output_directory, "match_history_report.csv")
        report_results['match_history'] = self.generate_match_history_report(history_report)

        for tournament in self.ranking_processor.get_tournaments():
            safe_name = "".join(c for c in tournament.name if c.isalnum() or c in (' ', '-', '_')).strip()
            safe_name = safe_name.replace(' ', '_').lower() or tournament.id
            report_key = f"standings_{safe_name}_{tournament.id[:8]}"
            standings_report = os.path.join(output_directory, f"{report_key}.csv")
            report_results[report_key] = self.generate_standings_report(tournament.id, standings_report)

        logger.info(f"Generated all reports in directory: {output_directory}")
        return report_results
