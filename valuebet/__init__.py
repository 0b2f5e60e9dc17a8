"""
Value Bet - expected value screening for Draw No Bet and Asian +0.5 markets
"""

__version__ = "0.1.0"
__author__ = "Andy Cheng"

from valuebet.predictor import ValuePredictor
from valuebet.models import HistoricalMatch, UpcomingFixture, Pick, RunSnapshot

__all__ = ["ValuePredictor", "HistoricalMatch", "UpcomingFixture", "Pick", "RunSnapshot"]
