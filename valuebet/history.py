"""
Pick export, run history and saved team mappings
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from valuebet.models import Pick, RunSnapshot

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["Date", "League", "Match", "Market", "Side", "Handicap", "Odds", "Prob", "EV", "Confidence"]


def picks_to_frame(picks: Sequence[Pick]) -> pd.DataFrame:
    """
    Picks as a display and export table

    Args:
        picks: Ranked picks

    Returns:
        DataFrame in export column order with Prob and EV as percentages
    """
    rows = [
        {
            "Date": pick.date,
            "League": pick.league,
            "Match": pick.match,
            "Market": pick.market,
            "Side": pick.side,
            "Handicap": pick.handicap,
            "Odds": pick.odds,
            "Prob": f"{pick.model_prob * 100:.1f}%",
            "EV": f"{pick.ev * 100:.1f}%",
            "Confidence": pick.confidence,
        }
        for pick in picks
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def write_picks_csv(picks: Sequence[Pick], output_path: str) -> str:
    """
    Write picks to CSV, creating parent directories

    Args:
        picks: Ranked picks
        output_path: Destination file

    Returns:
        Path written
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    picks_to_frame(picks).to_csv(path, index=False)
    logger.info("Wrote %d picks to %s", len(picks), path)
    return str(path)


class RunHistory:
    """
    Append-only JSON log of analysis runs, newest first
    """

    def __init__(self, path: str) -> None:
        self._path = Path(path)

    def _write(self, payload: List[Dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def _read(self) -> List[Dict]:
        if not self._path.exists():
            return []
        return json.loads(self._path.read_text(encoding="utf-8"))

    def load(self) -> List[RunSnapshot]:
        """All stored runs, newest first"""
        return [RunSnapshot.from_dict(item) for item in self._read()]

    def append(self, snapshot: RunSnapshot) -> None:
        """Record a run ahead of the existing entries"""
        payload = self._read()
        payload.insert(0, snapshot.to_dict())
        self._write(payload)
        logger.info("Saved run %s with %d picks", snapshot.id, len(snapshot.picks))

    def delete(self, run_id: str) -> bool:
        """
        Remove one run

        Args:
            run_id: Snapshot id

        Returns:
            True when a run was removed
        """
        payload = self._read()
        kept = [item for item in payload if item.get("id") != run_id]
        if len(kept) == len(payload):
            return False
        self._write(kept)
        return True

    def clear(self) -> None:
        self._write([])


def load_team_mappings(path: str) -> Dict[str, str]:
    """
    Saved upcoming-name -> historical-name table

    Args:
        path: Mappings JSON file

    Returns:
        Mapping without empty values; empty when the file does not exist
    """
    mappings_path = Path(path)
    if not mappings_path.exists():
        return {}
    payload = json.loads(mappings_path.read_text(encoding="utf-8"))
    return {str(k): str(v) for k, v in payload.items() if v}


def save_team_mappings(mappings: Dict[str, str], path: str) -> str:
    """Write the mappings table as sorted JSON and return the path"""
    mappings_path = Path(path)
    mappings_path.parent.mkdir(parents=True, exist_ok=True)
    mappings_path.write_text(json.dumps(mappings, indent=2, sort_keys=True), encoding="utf-8")
    return str(mappings_path)
