"""
CSV ingestion for historical results and upcoming fixtures
"""
import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from valuebet.models import HistoricalMatch, UpcomingFixture

logger = logging.getLogger(__name__)

UPCOMING_COLUMNS = ["Date", "League", "HomeTeam", "AwayTeam", "AHh", "Odds_H", "Odds_A"]
HISTORICAL_COLUMNS = ["Date", "HomeTeam", "AwayTeam", "FTHG", "FTAG"]
# CSV ingestion only accepts the home-side magnitudes bookmakers list
INGESTED_LINES = (0.0, 0.5)

_TEMPLATE_ROWS = [
    "2026-01-17,EPL,Manchester United,Manchester City,0.5,1.825,2.025",
    "2026-01-17,EPL,Arsenal,Chelsea,0.0,1.950,1.900",
]


class IngestionError(ValueError):
    """An input file is structurally unusable"""


def parse_match_date(text: str) -> date:
    """
    Parse DD/MM/YYYY, DD/MM/YY (read as 20YY) or YYYY-MM-DD

    Raises:
        ValueError: for any other shape
    """
    value = str(text).strip()
    if "/" in value:
        parts = value.split("/")
        if len(parts) != 3:
            raise ValueError(f"Unrecognised date: {text!r}")
        day, month, year = parts
        if len(year) == 2:
            year = "20" + year
        return date(int(year), int(month), int(day))
    return datetime.strptime(value, "%Y-%m-%d").date()


def _read_csv(source) -> pd.DataFrame:
    try:
        frame = pd.read_csv(source, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise IngestionError("No rows detected. Confirm the CSV has a header row and data.")
    frame.columns = [str(column).strip() for column in frame.columns]
    frame = frame.fillna("")
    for column in frame.columns:
        frame[column] = frame[column].astype(str).str.strip()
    return frame


def _parse_float(value) -> Optional[float]:
    """Finite number from a CSV cell, or None for blanks, text, nan and inf"""
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number) or not np.isfinite(number):
        return None
    return float(number)


def _parse_int(value) -> Optional[int]:
    number = _parse_float(value)
    if number is None:
        return None
    return int(number)


def load_historical_csv(source) -> List[HistoricalMatch]:
    """
    Read one football-data style results file

    Rows with a missing team, non-numeric goals or an unreadable date are dropped.

    Args:
        source: Path or file-like object

    Returns:
        List of historical matches in file order
    """
    frame = _read_csv(source)
    missing = [column for column in HISTORICAL_COLUMNS if column not in frame.columns]
    if missing:
        raise IngestionError(f"Missing required columns: {', '.join(missing)}")

    matches = []
    dropped = 0
    for row in frame.to_dict("records"):
        home_goals = _parse_int(row["FTHG"])
        away_goals = _parse_int(row["FTAG"])
        if not row["HomeTeam"] or not row["AwayTeam"] or home_goals is None or away_goals is None:
            dropped += 1
            continue
        try:
            matches.append(HistoricalMatch(
                date=parse_match_date(row["Date"]),
                league=row.get("League") or row.get("Div") or "",
                home_team=row["HomeTeam"],
                away_team=row["AwayTeam"],
                home_goals=home_goals,
                away_goals=away_goals,
            ))
        except ValueError:
            dropped += 1

    if dropped:
        logger.warning("Dropped %d invalid historical rows from %s", dropped, source)
    logger.info("Loaded %d historical matches from %s", len(matches), source)
    return matches


def load_historical(sources: Iterable) -> List[HistoricalMatch]:
    """Combine several results files, keeping one copy of repeated matches"""
    combined = []
    for source in sources:
        combined.extend(load_historical_csv(source))
    unique = list(dict.fromkeys(combined))
    if len(unique) < len(combined):
        logger.info("Ignored %d duplicate historical matches", len(combined) - len(unique))
    return unique


def load_upcoming_csv(source) -> Tuple[List[UpcomingFixture], List[str]]:
    """
    Read the upcoming fixtures file

    Rows with a handicap other than 0.0/0.5 or unusable odds are skipped
    with a warning.

    Returns:
        Tuple of (fixtures, warnings)

    Raises:
        IngestionError: when the file is empty or lacks a required column
    """
    frame = _read_csv(source)
    if frame.empty:
        raise IngestionError("No rows detected. Confirm the CSV has a header row and data.")
    missing = [column for column in UPCOMING_COLUMNS if column not in frame.columns]
    if missing:
        raise IngestionError(f"Missing required columns: {', '.join(missing)}")

    fixtures = []
    warnings = []
    for index, row in enumerate(frame.to_dict("records")):
        line_no = index + 2
        line = _parse_float(row["AHh"])
        if line is None or line not in INGESTED_LINES:
            warnings.append(f"Row {line_no}: AHh must be 0.0 or 0.5. Skipped.")
            continue
        home_odds = _parse_float(row["Odds_H"])
        away_odds = _parse_float(row["Odds_A"])
        if home_odds is None or away_odds is None:
            warnings.append(f"Row {line_no}: Missing or invalid odds. Skipped.")
            continue
        if home_odds <= 1.0 or away_odds <= 1.0:
            warnings.append(f"Row {line_no}: Odds must be greater than 1.0. Skipped.")
            continue
        fixtures.append(UpcomingFixture(
            date=row["Date"],
            league=row["League"],
            home_team=row["HomeTeam"],
            away_team=row["AwayTeam"],
            handicap_line=line,
            home_odds=home_odds,
            away_odds=away_odds,
        ))

    for warning in warnings:
        logger.warning(warning)
    logger.info("Loaded %d upcoming fixtures (%d skipped)", len(fixtures), len(warnings))
    return fixtures, warnings


def upcoming_template() -> str:
    """Header plus example rows for the upcoming fixtures file"""
    return "\n".join([",".join(UPCOMING_COLUMNS)] + _TEMPLATE_ROWS) + "\n"
