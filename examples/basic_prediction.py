"""
Basic example of pricing fixtures with the value predictor
"""
from datetime import date, timedelta

from valuebet import HistoricalMatch, UpcomingFixture, ValuePredictor


def main():
    """Run basic prediction example"""
    print("Value Bet - Basic Example\n")

    # Six recent results per side is enough to clear the sample-size gate
    start = date(2025, 9, 1)
    history = []
    scores = [(2, 0), (3, 1), (1, 1), (2, 1), (4, 0), (1, 0)]
    for i, (home_goals, away_goals) in enumerate(scores):
        history.append(HistoricalMatch(start + timedelta(days=7 * i), "EPL",
                                       "Liverpool", f"Opponent {i}", home_goals, away_goals))
        history.append(HistoricalMatch(start + timedelta(days=7 * i + 1), "EPL",
                                       f"Opponent {i}", "Everton", 2, i % 2))

    fixtures = [
        UpcomingFixture("2026-01-17", "EPL", "Liverpool", "Everton", 0.0, 1.30, 3.60),
        UpcomingFixture("2026-01-24", "EPL", "Liverpool", "Everton", 0.5, 1.25, 3.90),
    ]

    predictor = ValuePredictor(ev_threshold=0.0)
    print("Evaluating fixtures...\n")
    picks = predictor.predict_batch(history, fixtures)

    print("=" * 60)
    for pick in picks:
        print(pick)
    if not picks:
        print("No value found at these prices.")
    print("=" * 60)


if __name__ == "__main__":
    main()
