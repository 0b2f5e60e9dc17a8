"""
Team name reconciliation between fixture lists and the historical corpus
"""
import difflib
import json
import logging
import re
import unicodedata
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol

logger = logging.getLogger(__name__)

_ALIASES_PATH = Path(__file__).resolve().parent / "data" / "team_aliases.json"
_AFFIXES = {"fc", "afc", "cf", "sc", "ac", "as", "ssc", "cfc", "bc", "us", "sv", "vfl", "vfb", "club", "de"}
_STATIC_MAPPINGS: Dict[str, str] = {}
_STATIC_LOADED = False

DEFAULT_SUGGESTIONS = 3
DEFAULT_CUTOFF = 0.6


def normalize_team_name(name: str) -> str:
    """
    Comparable form of a team name

    Folds accents to ASCII, lowercases, strips punctuation and drops club
    affixes such as FC or AFC and bare numbers.

    Args:
        name: Raw team name

    Returns:
        Normalized name; the full folded name when only affixes remain
    """
    if not name:
        return ""
    text = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    text = text.lower().replace("&", " and ")
    text = re.sub(r"[^\w\s-]", "", text)
    text = text.replace("-", " ")
    parts = [part for part in text.split() if part not in _AFFIXES and not part.isdigit()]
    return " ".join(parts) or " ".join(text.split())


class NameMatcher(Protocol):
    """Suggestion strategy used to reconcile fixture names with the corpus"""

    def suggest(self, name: str, candidates: Iterable[str]) -> List[str]:
        """
        Rank candidate historical names for an upcoming team name

        Args:
            name: Upcoming fixture team name
            candidates: Historical team names

        Returns:
            Best candidates first
        """
        ...


class FuzzyNameMatcher:
    """
    Ranks historical names by similarity to an upcoming fixture name

    Exact normalized matches come first, then names where one normalized
    form contains the other, then the remaining candidates whose
    similarity ratio clears the cutoff.
    """

    def __init__(self, limit: int = DEFAULT_SUGGESTIONS, cutoff: float = DEFAULT_CUTOFF):
        self.limit = limit
        self.cutoff = cutoff

    def _score(self, target: str, candidate: str) -> float:
        other = normalize_team_name(candidate)
        if not target or not other:
            return 0.0
        if target == other:
            return 3.0
        ratio = difflib.SequenceMatcher(None, target, other).ratio()
        if target in other or other in target:
            return 2.0 + ratio
        return ratio

    def suggest(self, name: str, candidates: Iterable[str]) -> List[str]:
        """
        Rank candidate historical names for an upcoming team name

        Args:
            name: Upcoming fixture team name
            candidates: Historical team names

        Returns:
            At most limit names, best first
        """
        target = normalize_team_name(name)
        scored = []
        for candidate in dict.fromkeys(candidates):
            score = self._score(target, candidate)
            if score >= self.cutoff:
                scored.append((score, candidate))
        scored.sort(key=lambda item: item[0], reverse=True)
        return [candidate for _, candidate in scored[:self.limit]]


def load_static_mappings(path: Optional[Path] = None) -> Dict[str, str]:
    """Alias -> canonical historical name for every bundled league"""
    global _STATIC_LOADED
    if path is None and _STATIC_LOADED:
        return dict(_STATIC_MAPPINGS)

    source = path or _ALIASES_PATH
    payload = json.loads(source.read_text(encoding="utf-8"))
    mappings: Dict[str, str] = {}
    for league_teams in payload.values():
        for canonical, variants in league_teams.items():
            mappings[canonical] = canonical
            for variant in variants:
                mappings[variant] = canonical

    if path is None:
        _STATIC_MAPPINGS.update(mappings)
        _STATIC_LOADED = True
        logger.debug("Loaded %d static team aliases", len(mappings))
    return mappings


def merge_team_mappings(user_mappings: Mapping[str, str],
                        static_mappings: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    User mappings layered over the static alias table

    Args:
        user_mappings: Upcoming-name -> historical-name pairs; empty values are ignored
        static_mappings: Alias table to start from (default: bundled table)

    Returns:
        Combined mapping
    """
    merged = dict(load_static_mappings() if static_mappings is None else static_mappings)
    merged.update({key: value for key, value in user_mappings.items() if value})
    return merged


def build_team_mappings(upcoming_teams: Iterable[str], historical_teams: Iterable[str],
                        user_mappings: Mapping[str, str],
                        static_mappings: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Mapping for one run, only covering names that need one

    User mappings always apply. A name already in the corpus is left alone.
    Any other name is looked up in the alias table and mapped to whichever
    variant of its club the corpus actually uses.

    Args:
        upcoming_teams: Fixture team names
        historical_teams: Team names present in the corpus
        user_mappings: Saved upcoming-name -> historical-name pairs
        static_mappings: Alias table (default: bundled table)

    Returns:
        Upcoming-name -> historical-name mapping
    """
    known = set(historical_teams)
    static = load_static_mappings() if static_mappings is None else static_mappings
    variants: Dict[str, List[str]] = {}
    for alias, canonical in static.items():
        variants.setdefault(canonical, []).append(alias)

    mappings: Dict[str, str] = {}
    for team in dict.fromkeys(upcoming_teams):
        if user_mappings.get(team):
            mappings[team] = user_mappings[team]
            continue
        if team in known or team not in static:
            continue
        canonical = static[team]
        for candidate in [canonical] + variants.get(canonical, []):
            if candidate in known:
                mappings[team] = candidate
                break
    return mappings


def resolve_team(name: str, mappings: Mapping[str, str],
                 known_teams: Optional[Iterable[str]] = None) -> str:
    """
    Historical identity to use for a fixture team

    Args:
        name: Team name as it appears in the fixture list
        mappings: Upcoming-name -> historical-name table
        known_teams: Corpus team names; a name found here is used as is

    Returns:
        Mapped name when one applies, otherwise the raw name
    """
    if known_teams is not None and name in known_teams:
        return name
    return mappings.get(name) or name


def find_missing_teams(upcoming_teams: Iterable[str], historical_teams: Iterable[str],
                       mappings: Mapping[str, str]) -> List[str]:
    """Upcoming names with neither a historical match nor a mapping"""
    known = set(historical_teams)
    missing = []
    for team in dict.fromkeys(upcoming_teams):
        if team not in known and not mappings.get(team):
            missing.append(team)
    return missing


def suggest_mappings(missing: Iterable[str], historical_teams: List[str],
                     matcher: Optional[NameMatcher] = None) -> Dict[str, List[str]]:
    """
    Ranked historical candidates for each unmatched team

    Args:
        missing: Team names without history or mapping
        historical_teams: Corpus team names
        matcher: Suggestion strategy (default: FuzzyNameMatcher)

    Returns:
        Team name -> ranked candidate names
    """
    matcher = matcher or FuzzyNameMatcher()
    return {team: matcher.suggest(team, historical_teams) for team in missing}
