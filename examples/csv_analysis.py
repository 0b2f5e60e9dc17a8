"""
Example of a full analysis run from CSV files
"""
import sys

from valuebet import ValuePredictor
from valuebet.config import Config
from valuebet.history import RunHistory, write_picks_csv
from valuebet.ingestion import load_historical, load_upcoming_csv
from valuebet.logging_config import configure_logging
from valuebet.names import merge_team_mappings


def main(historical_paths, upcoming_path):
    """Run an analysis and record it in the run history"""
    configure_logging()
    config = Config.from_env()

    matches = load_historical(historical_paths)
    fixtures, warnings = load_upcoming_csv(upcoming_path)
    print(f"Loaded {len(matches)} results and {len(fixtures)} fixtures "
          f"({len(warnings)} rows skipped)\n")

    predictor = ValuePredictor.from_config(config)
    snapshot = predictor.run(matches, fixtures, merge_team_mappings({}))

    for pick in snapshot.picks:
        print(pick)

    write_picks_csv(snapshot.picks, "picks.csv")
    RunHistory(config.history_path).append(snapshot)


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("usage: csv_analysis.py HISTORICAL.csv [HISTORICAL.csv ...] UPCOMING.csv")
        sys.exit(1)
    main(sys.argv[1:-1], sys.argv[-1])
