"""
Command-line interface for the value betting engine
"""
import argparse
import logging
import sys
from datetime import date, timedelta
from typing import List, Tuple

import numpy as np

from valuebet.config import Config
from valuebet.form import historical_teams, summarize_corpus
from valuebet.history import (
    RunHistory, load_team_mappings, picks_to_frame, save_team_mappings, write_picks_csv,
)
from valuebet.ingestion import load_historical, load_upcoming_csv, upcoming_template
from valuebet.logging_config import configure_logging
from valuebet.models import HistoricalMatch, UpcomingFixture
from valuebet.names import build_team_mappings, find_missing_teams, suggest_mappings
from valuebet.predictor import ValuePredictor

logger = logging.getLogger(__name__)

DEMO_SEED = 42
DEMO_TEAMS = {
    # name: (attack rate, defence rate)
    "Arsenal": (2.1, 0.8),
    "Chelsea": (1.6, 1.1),
    "Everton": (1.0, 1.5),
    "Fulham": (1.3, 1.3),
    "Liverpool": (2.3, 0.9),
    "Wolves": (0.9, 1.7),
}


def create_sample_data(seed: int = DEMO_SEED) -> Tuple[List[HistoricalMatch], List[UpcomingFixture]]:
    """Synthetic double round robin plus a handful of priced fixtures"""
    rng = np.random.default_rng(seed)
    teams = list(DEMO_TEAMS)
    matches = []
    day = date(2025, 8, 16)
    for home in teams:
        for away in teams:
            if home == away:
                continue
            home_rate = (DEMO_TEAMS[home][0] + DEMO_TEAMS[away][1]) / 2
            away_rate = (DEMO_TEAMS[away][0] + DEMO_TEAMS[home][1]) / 2
            matches.append(HistoricalMatch(
                date=day, league="EPL", home_team=home, away_team=away,
                home_goals=int(rng.poisson(home_rate)),
                away_goals=int(rng.poisson(away_rate)),
            ))
            day += timedelta(days=3)

    fixtures = [
        UpcomingFixture("2026-01-17", "EPL", "Arsenal", "Wolves", 0.0, 1.45, 2.80),
        UpcomingFixture("2026-01-17", "EPL", "Everton", "Liverpool", 0.5, 2.10, 1.75),
        UpcomingFixture("2026-01-18", "EPL", "Chelsea", "Fulham", 0.0, 1.70, 2.20),
        UpcomingFixture("2026-01-18", "EPL", "Liverpool", "Arsenal", 0.5, 1.60, 2.35),
    ]
    return matches, fixtures


def _load_config(args) -> Config:
    config = Config.from_file(args.config) if getattr(args, "config", None) else Config.from_env()
    return config.with_overrides(
        ev_threshold=getattr(args, "ev_threshold", None),
        prob_threshold=getattr(args, "prob_threshold", None),
        max_picks=getattr(args, "max_picks", None),
        lookback=getattr(args, "lookback", None),
        history_path=getattr(args, "history", None),
        mappings_path=getattr(args, "mappings", None),
    )


def _print_picks(picks) -> None:
    print("\n" + "=" * 60)
    if not picks:
        print("No picks cleared the thresholds.")
    else:
        print(picks_to_frame(picks).to_string(index=False))
    print("=" * 60 + "\n")


def _run_mappings(config, matches, fixtures):
    """Saved user mappings plus alias-table matches for names the corpus lacks"""
    upcoming = [name for f in fixtures for name in (f.home_team, f.away_team)]
    teams = historical_teams(matches)
    mappings = build_team_mappings(upcoming, teams, load_team_mappings(config.mappings_path))
    return mappings, find_missing_teams(upcoming, teams, mappings)


def analyze_command(args):
    """Handle analyze command"""
    config = _load_config(args)
    matches = load_historical(args.historical)
    fixtures, _ = load_upcoming_csv(args.upcoming)

    summary = summarize_corpus(matches)
    logger.info("Corpus: %d matches, %d teams, %s to %s", summary["matches"],
                summary["teams"], summary["start"], summary["end"])

    mappings, missing = _run_mappings(config, matches, fixtures)
    if missing:
        logger.warning("No history or mapping for: %s", ", ".join(missing))

    predictor = ValuePredictor.from_config(config)
    snapshot = predictor.run(matches, fixtures, mappings)
    _print_picks(snapshot.picks)

    if args.output:
        write_picks_csv(snapshot.picks, args.output)
    if not args.no_history:
        RunHistory(config.history_path).append(snapshot)
    return 0


def missing_command(args):
    """Handle missing command"""
    config = _load_config(args)
    matches = load_historical(args.historical)
    fixtures, _ = load_upcoming_csv(args.upcoming)
    _, missing = _run_mappings(config, matches, fixtures)

    if not missing:
        print("All upcoming teams are matched.")
        return 0

    saved = load_team_mappings(config.mappings_path)
    for team, suggestions in suggest_mappings(missing, historical_teams(matches)).items():
        print(f"{team}: {', '.join(suggestions) if suggestions else '(no suggestions)'}")
        if args.save and suggestions:
            saved[team] = suggestions[0]

    if args.save:
        save_team_mappings(saved, config.mappings_path)
        print(f"Mappings saved to {config.mappings_path}")
    return 0


def map_command(args):
    """Handle map command"""
    config = _load_config(args)
    saved = load_team_mappings(config.mappings_path)
    if args.remove:
        saved.pop(args.team, None)
    elif not args.historical_name:
        raise ValueError("A historical team name is required unless --remove is given")
    else:
        saved[args.team] = args.historical_name
    save_team_mappings(saved, config.mappings_path)
    print(f"{len(saved)} mappings saved to {config.mappings_path}")
    return 0


def template_command(args):
    """Handle template command"""
    text = upcoming_template()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(text)
        print(f"Template written to {args.output}")
    else:
        print(text, end="")
    return 0


def history_command(args):
    """Handle history command"""
    config = _load_config(args)
    runs = RunHistory(config.history_path).load()
    if not runs:
        print("No run history yet.")
        return 0
    for run in runs:
        print(f"{run.timestamp}  {run.id}  ({len(run.picks)} picks)")
        for pick in run.picks:
            print(f"    {pick}")
    return 0


def demo_command(args):
    """Handle demo command"""
    print("\n" + "=" * 60)
    print("Value Betting Engine - Demo Mode")
    print("=" * 60 + "\n")

    matches, fixtures = create_sample_data()
    predictor = ValuePredictor(ev_threshold=0.0, prob_threshold=0.5, lookback=10)
    picks = predictor.predict_batch(matches, fixtures)

    for pick in picks:
        print(pick)
    if not picks:
        print("No picks cleared the thresholds.")

    print("\nNote: demo form is simulated; load real results with `valuebet analyze`.\n")
    return 0


def _add_threshold_args(parser):
    parser.add_argument("--config", help="JSON or KEY=VALUE config file")
    parser.add_argument("--ev-threshold", type=float, help="Minimum expected value (default: 0.05)")
    parser.add_argument("--prob-threshold", type=float, help="Minimum model probability (default: 0.5)")
    parser.add_argument("--max-picks", type=int, help="Picks kept after ranking (default: 5)")
    parser.add_argument("--lookback", type=int, help="Recent matches per team (default: 10)")


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="Find value in Draw No Bet and Asian +0.5 odds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run demo with simulated form
  valuebet demo

  # Analyse upcoming fixtures against historical results
  valuebet analyze --historical E0_2425.csv E0_2526.csv \\
                   --upcoming upcoming.csv --output picks.csv
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser("analyze", help="Rank value picks for upcoming fixtures")
    analyze_parser.add_argument("--historical", nargs="+", required=True, help="Historical results CSV files")
    analyze_parser.add_argument("--upcoming", required=True, help="Upcoming fixtures CSV")
    analyze_parser.add_argument("--mappings", help="Team mappings JSON")
    analyze_parser.add_argument("--output", help="Write picks to this CSV")
    analyze_parser.add_argument("--history", help="Run history JSON")
    analyze_parser.add_argument("--no-history", action="store_true", help="Do not record this run")
    _add_threshold_args(analyze_parser)
    analyze_parser.set_defaults(func=analyze_command)

    missing_parser = subparsers.add_parser("missing", help="List unmatched teams with suggestions")
    missing_parser.add_argument("--historical", nargs="+", required=True, help="Historical results CSV files")
    missing_parser.add_argument("--upcoming", required=True, help="Upcoming fixtures CSV")
    missing_parser.add_argument("--mappings", help="Team mappings JSON")
    missing_parser.add_argument("--save", action="store_true",
                                help="Store the top suggestion for each unmatched team")
    missing_parser.set_defaults(func=missing_command)

    map_parser = subparsers.add_parser("map", help="Save a team name mapping")
    map_parser.add_argument("team", help="Team name as written in the fixtures file")
    map_parser.add_argument("historical_name", nargs="?", help="Team name used in the results files")
    map_parser.add_argument("--remove", action="store_true", help="Delete the mapping for team")
    map_parser.add_argument("--mappings", help="Team mappings JSON")
    map_parser.set_defaults(func=map_command)

    template_parser = subparsers.add_parser("template", help="Print the upcoming fixtures template")
    template_parser.add_argument("--output", help="Write the template to this file")
    template_parser.set_defaults(func=template_command)

    history_parser = subparsers.add_parser("history", help="Show recorded runs")
    history_parser.add_argument("--history", help="Run history JSON")
    history_parser.set_defaults(func=history_command)

    demo_parser = subparsers.add_parser("demo", help="Run demo with simulated data")
    demo_parser.set_defaults(func=demo_command)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging()
    try:
        return args.func(args)
    except (ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
