"""
Shared builders for the test suite
"""
from datetime import date, timedelta

from valuebet.models import HistoricalMatch, UpcomingFixture


def make_history(team, results, start=date(2025, 1, 4), league="EPL"):
    """Home matches for team; results are (scored, conceded) pairs, one week apart"""
    return [
        HistoricalMatch(start + timedelta(days=7 * i), league, team,
                        f"{team} Opponent {i}", scored, conceded)
        for i, (scored, conceded) in enumerate(results)
    ]


def make_fixture(home="Strong", away="Weak", line=0.0, home_odds=1.5, away_odds=3.0):
    return UpcomingFixture("2026-01-17", "EPL", home, away, line, home_odds, away_odds)


def strong_and_weak(matches=6):
    """A side that always wins 3-0 and a side that always loses 0-3"""
    return (make_history("Strong", [(3, 0)] * matches)
            + make_history("Weak", [(0, 3)] * matches))
