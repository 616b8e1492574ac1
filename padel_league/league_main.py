"""
Command line application for the padel league system.
"""

import argparse
import logging
import sys
import traceback
from typing import List, Optional

from padel_league.config.config_manager import ConfigManager
from padel_league.exceptions import LeagueError, PlayerNotFoundError
from padel_league.models.match import MatchSubmission
from padel_league.ranking.ranking_processor import RankingProcessor
from padel_league.reports.report_generator import ReportGenerator

logger = logging.getLogger(__name__)


def configure_logging(config: dict) -> None:
    """Configure logging from the 'logging' section of the configuration."""
    logging_config = config.get('logging', {})
    logging.basicConfig(
        level=getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO),
        format=logging_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="padel-league", description="Padel league rankings")
    parser.add_argument("--config", default="config.yaml", help="YAML configuration file")
    parser.add_argument("--db", default=None, help="SQLite database file (overrides the configuration)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_player = subparsers.add_parser("add-player", help="Add a player to the roster")
    add_player.add_argument("name")

    remove_player = subparsers.add_parser("remove-player", help="Remove a player without matches")
    remove_player.add_argument("name")

    subparsers.add_parser("players", help="List the roster")

    for command, help_text in (("add-match", "Record a rating match"),
                               ("add-game", "Record a tournament game")):
        sub = subparsers.add_parser(command, help=help_text)
        if command == "add-game":
            sub.add_argument("tournament_id")
        sub.add_argument("team1", nargs=2, metavar="TEAM1_PLAYER")
        sub.add_argument("team2", nargs=2, metavar="TEAM2_PLAYER")
        sub.add_argument("--score", nargs=2, required=True, metavar=("TEAM1", "TEAM2"))
        sub.add_argument("--date", default=None)

    delete_match = subparsers.add_parser("delete-match", help="Delete a rating match")
    delete_match.add_argument("match_id")

    delete_game = subparsers.add_parser("delete-game", help="Delete a tournament game")
    delete_game.add_argument("game_id")

    subparsers.add_parser("matches", help="List rating matches, newest first")
    subparsers.add_parser("ranking", help="Show the rating leaderboard")

    create_tournament = subparsers.add_parser("create-tournament", help="Create a tournament")
    create_tournament.add_argument("name")

    subparsers.add_parser("tournaments", help="List tournaments")

    mark_winner = subparsers.add_parser("mark-winner", help="Complete a tournament")
    mark_winner.add_argument("tournament_id")
    mark_winner.add_argument("player")

    standings = subparsers.add_parser("standings", help="Show tournament standings")
    standings.add_argument("tournament_id")

    import_players = subparsers.add_parser("import-players", help="Add players from a CSV file")
    import_players.add_argument("csv_file")

    import_matches = subparsers.add_parser("import-matches", help="Import rating matches from a CSV file")
    import_matches.add_argument("csv_file")

    reports = subparsers.add_parser("reports", help="Write all CSV reports")
    reports.add_argument("--output", default="reports")

    return parser


def _player_id(processor: RankingProcessor, name: str) -> str:
    player = processor.find_player_by_name(name)
    if player is None:
        raise PlayerNotFoundError(f"No player named '{name}'")
    return player.id


def _submission(processor: RankingProcessor, args: argparse.Namespace) -> MatchSubmission:
    team1 = [_player_id(processor, name) for name in args.team1]
    team2 = [_player_id(processor, name) for name in args.team2]
    return MatchSubmission(
        team1_player1=team1[0],
        team1_player2=team1[1],
        team2_player1=team2[0],
        team2_player2=team2[1],
        team1_score=args.score[0],
        team2_score=args.score[1],
        date=args.date,
    )


def run_command(processor: RankingProcessor, args: argparse.Namespace) -> None:
    """Dispatch one parsed command."""
    if args.command == "add-player":
        player = processor.add_player(args.name)
        print(f"Added {player.name} ({player.id}) with rating {player.rating}")
    elif args.command == "remove-player":
        processor.remove_player(_player_id(processor, args.name))
        print(f"Removed {args.name}")
    elif args.command == "players":
        for player in processor.get_players():
            print(f"{player.id}  {player.name:<20} {player.rating:>5}  {player.record}")
    elif args.command == "add-match":
        match = processor.add_match(_submission(processor, args))
        print(f"Recorded match {match.id}: {match.score}, {match.winner} wins")
    elif args.command == "add-game":
        game = processor.add_game(args.tournament_id, _submission(processor, args))
        print(f"Recorded game {game.id}: {game.score}, {game.winner} wins")
    elif args.command == "delete-match":
        processor.delete_match(args.match_id)
        print(f"Deleted match {args.match_id}")
    elif args.command == "delete-game":
        processor.delete_game(args.game_id)
        print(f"Deleted game {args.game_id}")
    elif args.command == "matches":
        names = processor.get_player_names()
        for match in processor.get_matches():
            team1 = " & ".join(names.get(pid, pid) for pid in match.team1)
            team2 = " & ".join(names.get(pid, pid) for pid in match.team2)
            print(f"{match.id}  {match.date}  {team1} vs {team2}  {match.score}")
    elif args.command == "ranking":
        summary = processor.get_league_summary()
        print(f"Players: {summary.active_players}  Matches: {summary.matches_played}  "
              f"Champion: {summary.champion or 'TBD'}")
        for position, player in enumerate(processor.get_ranking(), 1):
            print(f"{position:>3}. {player.name:<20} {player.rating:>5}  {player.record}  "
                  f"{player.win_rate}% wins  {player.game_win_rate}% games")
    elif args.command == "create-tournament":
        tournament = processor.create_tournament(args.name)
        print(f"Created tournament {tournament.name} ({tournament.id})")
    elif args.command == "tournaments":
        names = processor.get_player_names()
        for tournament in processor.get_tournaments():
            status = "active" if tournament.is_active else f"won by {names.get(tournament.winner, tournament.winner)}"
            print(f"{tournament.id}  {tournament.name:<25} {status}")
    elif args.command == "mark-winner":
        tournament = processor.mark_tournament_winner(args.tournament_id, _player_id(processor, args.player))
        print(f"Tournament {tournament.name} completed")
    elif args.command == "standings":
        for position, standing in enumerate(processor.get_standings(args.tournament_id), 1):
            print(f"{position:>3}. {standing.name:<20} {standing.total_points:>4} pts  "
                  f"{standing.games_won}/{standing.games_played} won  {standing.total_scored} scored")
    elif args.command == "import-players":
        print(f"Added {processor.load_players_from_csv(args.csv_file)} players")
    elif args.command == "import-matches":
        imported = processor.import_matches_from_csv(args.csv_file)
        print(f"Imported {imported} matches, rejected {len(processor.rejected_rows)}")
    elif args.command == "reports":
        results = ReportGenerator(processor).generate_all_reports(args.output)
        for report, count in results.items():
            print(f"{report}: {count} rows")


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    config = ConfigManager.load_config(args.config)
    configure_logging(config)

    try:
        processor = RankingProcessor(args.db, config=config)
        processor.seed_players_from_config()
        run_command(processor, args)
    except LeagueError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except Exception as e:
        logger.error(f"Error in padel league: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
