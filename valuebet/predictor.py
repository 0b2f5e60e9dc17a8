"""
Value betting prediction engine
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence

from valuebet.form import (
    DEFAULT_LOOKBACK, MIN_MATCHES, expected_goals, get_team_form, has_enough_matches, historical_teams,
)
from valuebet.markets import calculate_market_probs
from valuebet.models import HistoricalMatch, MarketProbabilities, Pick, RunSnapshot, TeamForm, UpcomingFixture
from valuebet.names import resolve_team
from valuebet.poisson import calculate_outcome_probs
from valuebet.value import (
    DEFAULT_EV_THRESHOLD, DEFAULT_MAX_PICKS, DEFAULT_PROB_THRESHOLD,
    evaluate_fixture, rank_picks,
)

logger = logging.getLogger(__name__)


class ValuePredictor:
    """
    Finds positive expected value DNB and Asian +0.5 bets from recent team form
    """

    def __init__(self, ev_threshold: float = DEFAULT_EV_THRESHOLD,
                 prob_threshold: float = DEFAULT_PROB_THRESHOLD,
                 max_picks: int = DEFAULT_MAX_PICKS,
                 lookback: int = DEFAULT_LOOKBACK,
                 min_matches: int = MIN_MATCHES):
        """
        Initialize the value predictor

        Args:
            ev_threshold: Minimum expected value for a pick (default: 0.05)
            prob_threshold: Minimum model probability for a pick (default: 0.5)
            max_picks: Number of picks kept after ranking (default: 5)
            lookback: Recent matches used for team form (default: 10)
            min_matches: Matches each team needs before a fixture is priced (default: 5)
        """
        self.ev_threshold = ev_threshold
        self.prob_threshold = prob_threshold
        self.max_picks = max_picks
        self.lookback = lookback
        self.min_matches = min_matches

    @classmethod
    def from_config(cls, config) -> "ValuePredictor":
        return cls(
            ev_threshold=config.ev_threshold,
            prob_threshold=config.prob_threshold,
            max_picks=config.max_picks,
            lookback=config.lookback,
            min_matches=config.min_matches,
        )

    def price_fixture(self, home_form: TeamForm,
                      away_form: TeamForm) -> Optional[MarketProbabilities]:
        """
        Market probabilities for a fixture, or None when either team lacks data
        """
        if not (has_enough_matches(home_form, self.min_matches)
                and has_enough_matches(away_form, self.min_matches)):
            return None
        lambda_home, lambda_away = expected_goals(home_form, away_form)
        outcome = calculate_outcome_probs(lambda_home, lambda_away)
        return calculate_market_probs(outcome)

    def predict(self, matches: Sequence[HistoricalMatch], fixture: UpcomingFixture,
                mappings: Optional[Mapping[str, str]] = None) -> List[Pick]:
        """
        Picks for a single fixture before ranking

        Args:
            matches: Historical corpus
            fixture: Fixture to evaluate
            mappings: Optional upcoming-name -> historical-name table; names
                already present in the corpus are never remapped

        Returns:
            Zero, one or two picks
        """
        known = set(historical_teams(matches))
        return self._predict(matches, fixture, mappings or {}, known, {})

    def _predict(self, matches, fixture, mappings, known, forms: Dict[str, TeamForm]) -> List[Pick]:
        home_name = resolve_team(fixture.home_team, mappings, known)
        away_name = resolve_team(fixture.away_team, mappings, known)
        for name in (home_name, away_name):
            if name not in forms:
                forms[name] = get_team_form(matches, name, self.lookback)

        probs = self.price_fixture(forms[home_name], forms[away_name])
        if probs is None:
            logger.info("Skipping %s: not enough history (%d / %d matches)",
                        fixture.label, forms[home_name].matches_played,
                        forms[away_name].matches_played)
            return []
        return evaluate_fixture(fixture, probs, self.ev_threshold, self.prob_threshold)

    def predict_batch(self, matches: Sequence[HistoricalMatch],
                      fixtures: Sequence[UpcomingFixture],
                      mappings: Optional[Mapping[str, str]] = None) -> List[Pick]:
        """
        Ranked picks across a batch of fixtures

        Args:
            matches: Historical corpus
            fixtures: Fixtures to evaluate
            mappings: Optional upcoming-name -> historical-name table; names
                already present in the corpus are never remapped

        Returns:
            At most max_picks picks, highest expected value first
        """
        fixtures = list(fixtures)
        for fixture in fixtures:
            if not isinstance(fixture, UpcomingFixture):
                raise ValueError(f"Expected UpcomingFixture, got {type(fixture).__name__}")

        known = set(historical_teams(matches))
        forms: Dict[str, TeamForm] = {}
        candidates: List[Pick] = []
        for fixture in fixtures:
            candidates.extend(self._predict(matches, fixture, mappings or {}, known, forms))

        picks = rank_picks(candidates, self.max_picks)
        logger.info("Evaluated %d fixtures: %d qualifying picks, %d kept",
                    len(fixtures), len(candidates), len(picks))
        return picks

    def run(self, matches: Sequence[HistoricalMatch],
            fixtures: Sequence[UpcomingFixture],
            mappings: Optional[Mapping[str, str]] = None) -> RunSnapshot:
        """Ranked picks wrapped in a timestamped snapshot for run history"""
        picks = self.predict_batch(matches, fixtures, mappings)
        return RunSnapshot(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc).isoformat(),
            picks=picks,
        )
