"""
Team form estimation from the historical results corpus
"""
import logging
from typing import Dict, Iterable, List, Tuple

from valuebet.models import HistoricalMatch, TeamForm

logger = logging.getLogger(__name__)

# Constants
DEFAULT_LOOKBACK = 10
MIN_MATCHES = 5


def get_team_form(matches: Iterable[HistoricalMatch], team: str,
                  lookback: int = DEFAULT_LOOKBACK) -> TeamForm:
    """
    Average goals scored and conceded over a team's most recent matches

    Args:
        matches: Historical corpus (not modified)
        team: Historical team name
        lookback: Maximum number of recent matches to use (default: 10)

    Returns:
        TeamForm; all zeros when the team has no matches
    """
    team_matches = [m for m in matches if m.home_team == team or m.away_team == team]
    team_matches.sort(key=lambda m: m.date, reverse=True)
    recent = team_matches[:max(lookback, 0)]

    if not recent:
        return TeamForm()

    scored = 0
    conceded = 0
    for match in recent:
        if match.home_team == team:
            scored += match.home_goals
            conceded += match.away_goals
        else:
            scored += match.away_goals
            conceded += match.home_goals

    return TeamForm(
        avg_goals_scored=scored / len(recent),
        avg_goals_conceded=conceded / len(recent),
        matches_played=len(recent),
    )


def has_enough_matches(form: TeamForm, min_matches: int = MIN_MATCHES) -> bool:
    """
    Whether a team has enough recent matches to be priced

    Args:
        form: Team form from get_team_form
        min_matches: Required matches (default: 5)

    Returns:
        True when matches_played reaches min_matches
    """
    return form.matches_played >= min_matches


def expected_goals(home: TeamForm, away: TeamForm) -> Tuple[float, float]:
    """
    Expected goal rates for a fixture

    Each side's rate blends its own scoring with the opponent's conceding.

    Returns:
        Tuple of (lambda_home, lambda_away)
    """
    lambda_home = (home.avg_goals_scored + away.avg_goals_conceded) / 2
    lambda_away = (away.avg_goals_scored + home.avg_goals_conceded) / 2
    return lambda_home, lambda_away


def historical_teams(matches: Iterable[HistoricalMatch]) -> List[str]:
    """Distinct team names in first-seen order"""
    seen: Dict[str, None] = {}
    for match in matches:
        seen.setdefault(match.home_team, None)
        seen.setdefault(match.away_team, None)
    return list(seen)


def summarize_corpus(matches: List[HistoricalMatch]) -> Dict[str, object]:
    """Match count, team count and covered date range"""
    if not matches:
        return {"matches": 0, "teams": 0, "start": None, "end": None}
    dates = sorted(m.date for m in matches)
    return {
        "matches": len(matches),
        "teams": len(historical_teams(matches)),
        "start": dates[0].isoformat(),
        "end": dates[-1].isoformat(),
    }
