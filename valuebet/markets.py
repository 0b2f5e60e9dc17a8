"""
Market probabilities derived from match outcome probabilities
"""
from valuebet.models import MarketProbabilities, OutcomeProbabilities


def calculate_market_probs(outcome: OutcomeProbabilities) -> MarketProbabilities:
    """
    Draw No Bet and Asian +0.5 win probabilities for both sides

    DNB voids the stake on a draw, so it is the win probability conditional
    on a decisive result. A +0.5 head start also wins on a draw.
    """
    decisive = outcome.home + outcome.away
    if decisive > 0:
        home_dnb = outcome.home / decisive
        away_dnb = outcome.away / decisive
    else:
        # Certain draw: every DNB bet is refunded
        home_dnb = away_dnb = 0.0

    return MarketProbabilities(
        home_dnb=home_dnb,
        away_dnb=away_dnb,
        home_plus_05=outcome.home + outcome.draw,
        away_plus_05=outcome.away + outcome.draw,
    )
