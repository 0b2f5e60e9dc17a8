"""
Run configuration for the value betting engine
"""
import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Mapping, Optional

from valuebet.form import DEFAULT_LOOKBACK, MIN_MATCHES
from valuebet.value import DEFAULT_EV_THRESHOLD, DEFAULT_MAX_PICKS, DEFAULT_PROB_THRESHOLD

_DEFAULT_HISTORY_PATH = "data/run_history.json"
_DEFAULT_MAPPINGS_PATH = "data/team_mappings.json"
_ENV_PREFIX = "VALUEBET_"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_float(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _coerce_int(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _parse_env_file(path: Path) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key.strip()] = _strip_quotes(value.strip())
    return data


def _load_config_data(path: Path) -> Dict[str, str]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        return {str(k): str(v) for k, v in payload.items()}
    return _parse_env_file(path)


@dataclass
class Config:
    """
    Thresholds and file locations for one analysis run
    """

    ev_threshold: float = DEFAULT_EV_THRESHOLD
    prob_threshold: float = DEFAULT_PROB_THRESHOLD
    max_picks: int = DEFAULT_MAX_PICKS
    lookback: int = DEFAULT_LOOKBACK
    min_matches: int = MIN_MATCHES
    history_path: str = _DEFAULT_HISTORY_PATH
    mappings_path: str = _DEFAULT_MAPPINGS_PATH

    @classmethod
    def from_mapping(cls, data: Mapping[str, str]) -> "Config":
        """
        Build a config from VALUEBET_* keys

        Args:
            data: Environment-style mapping

        Returns:
            Config; missing or malformed values keep their defaults
        """
        def get(name: str) -> Optional[str]:
            return data.get(_ENV_PREFIX + name)

        return cls(
            ev_threshold=_coerce_float(get("EV_THRESHOLD"), DEFAULT_EV_THRESHOLD),
            prob_threshold=_coerce_float(get("PROB_THRESHOLD"), DEFAULT_PROB_THRESHOLD),
            max_picks=_coerce_int(get("MAX_PICKS"), DEFAULT_MAX_PICKS),
            lookback=_coerce_int(get("LOOKBACK"), DEFAULT_LOOKBACK),
            min_matches=_coerce_int(get("MIN_MATCHES"), MIN_MATCHES),
            history_path=get("HISTORY_PATH") or _DEFAULT_HISTORY_PATH,
            mappings_path=get("MAPPINGS_PATH") or _DEFAULT_MAPPINGS_PATH,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Config from the process environment"""
        return cls.from_mapping(os.environ)

    @classmethod
    def from_file(cls, path: str) -> "Config":
        """
        Config from a JSON or KEY=VALUE file

        Raises:
            FileNotFoundError: when the file does not exist
        """
        return cls.from_mapping(_load_config_data(Path(path)))

    def with_overrides(self, **overrides) -> "Config":
        """Copy with every non-None override applied"""
        values = asdict(self)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return Config(**values)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)
