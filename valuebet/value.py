"""
Expected value evaluation, confidence tiers and batch ranking
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List

from valuebet.models import (
    MARKET_DNB, MARKET_PLUS_05, SIDE_AWAY, SIDE_HOME,
    MarketProbabilities, Pick, UpcomingFixture,
)

logger = logging.getLogger(__name__)

# Constants
DEFAULT_EV_THRESHOLD = 0.05
DEFAULT_PROB_THRESHOLD = 0.5
DEFAULT_MAX_PICKS = 5

CONFIDENCE_VERY_HIGH = "Very High"
CONFIDENCE_HIGH = "High"
CONFIDENCE_MEDIUM = "Medium"
CONFIDENCE_LOW = "Low"


@dataclass(frozen=True)
class Candidate:
    """A market/side combination to be priced against the quoted odds"""

    market: str
    side: str
    handicap: float
    probability: float
    odds: float


def expected_value(probability: float, odds: float) -> float:
    """
    Expected profit per unit staked at decimal odds

    Args:
        probability: Model win probability
        odds: Decimal odds (must exceed 1.0)
    """
    if odds <= 1.0:
        raise ValueError(f"Decimal odds must be greater than 1.0, got {odds}")
    return probability * odds - 1


def confidence_tier(ev: float, probability: float) -> str:
    """Informational label; the first matching tier wins"""
    if ev > 0.15 and probability > 0.65:
        return CONFIDENCE_VERY_HIGH
    if ev > 0.10 and probability > 0.60:
        return CONFIDENCE_HIGH
    if ev > 0.05:
        return CONFIDENCE_MEDIUM
    return CONFIDENCE_LOW


def candidate_markets(fixture: UpcomingFixture,
                      probs: MarketProbabilities) -> List[Candidate]:
    """
    Markets to evaluate for the fixture's handicap line

    0.0 prices both DNB sides, +0.5 the home side only and -0.5 the away
    side only (away receives the half goal).
    """
    line = fixture.handicap_line
    if line == 0.0:
        return [
            Candidate(MARKET_DNB, SIDE_HOME, 0.0, probs.home_dnb, fixture.home_odds),
            Candidate(MARKET_DNB, SIDE_AWAY, 0.0, probs.away_dnb, fixture.away_odds),
        ]
    if line == 0.5:
        return [Candidate(MARKET_PLUS_05, SIDE_HOME, 0.5, probs.home_plus_05, fixture.home_odds)]
    if line == -0.5:
        return [Candidate(MARKET_PLUS_05, SIDE_AWAY, 0.5, probs.away_plus_05, fixture.away_odds)]
    raise ValueError(f"Unsupported handicap line {line}")


def evaluate_fixture(fixture: UpcomingFixture, probs: MarketProbabilities,
                     ev_threshold: float = DEFAULT_EV_THRESHOLD,
                     prob_threshold: float = DEFAULT_PROB_THRESHOLD) -> List[Pick]:
    """
    Picks for one fixture that clear both the EV and probability thresholds

    Returns:
        Zero, one or two picks
    """
    picks = []
    for candidate in candidate_markets(fixture, probs):
        ev = expected_value(candidate.probability, candidate.odds)
        logger.debug("%s %s %s: prob=%.4f odds=%.3f ev=%.4f", fixture.label,
                     candidate.side, candidate.market, candidate.probability,
                     candidate.odds, ev)
        if ev < ev_threshold or candidate.probability < prob_threshold:
            continue
        picks.append(Pick(
            date=fixture.date,
            league=fixture.league,
            match=fixture.label,
            market=candidate.market,
            side=candidate.side,
            handicap=candidate.handicap,
            odds=candidate.odds,
            model_prob=candidate.probability,
            ev=ev,
            confidence=confidence_tier(ev, candidate.probability),
        ))
    return picks


def rank_picks(picks: Iterable[Pick], max_picks: int = DEFAULT_MAX_PICKS) -> List[Pick]:
    """Highest EV first, equal EV kept in input order, truncated to max_picks"""
    ranked = sorted(picks, key=lambda pick: pick.ev, reverse=True)
    return ranked[:max(int(max_picks), 0)]
