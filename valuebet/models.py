"""
Data models for the value betting engine
"""
import math
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import List, Tuple

# Handicap lines the engine knows how to price (home side sign convention)
SUPPORTED_LINES: Tuple[float, ...] = (-0.5, 0.0, 0.5)

MARKET_DNB = "DNB"
MARKET_PLUS_05 = "+0.5"
SIDE_HOME = "Home"
SIDE_AWAY = "Away"


@dataclass(frozen=True)
class HistoricalMatch:
    """A played match with its full-time score"""

    date: date
    league: str
    home_team: str
    away_team: str
    home_goals: int
    away_goals: int

    def __post_init__(self):
        """Validate match data"""
        if not self.home_team or not self.away_team:
            raise ValueError("Historical match needs both team names")
        if self.home_goals < 0 or self.away_goals < 0:
            raise ValueError("Goal counts cannot be negative")


@dataclass(frozen=True)
class UpcomingFixture:
    """A fixture with the quoted Asian line and decimal odds for both sides"""

    date: str
    league: str
    home_team: str
    away_team: str
    handicap_line: float
    home_odds: float
    away_odds: float

    def __post_init__(self):
        """Validate fixture data"""
        if self.handicap_line not in SUPPORTED_LINES:
            raise ValueError(
                f"Unsupported handicap line {self.handicap_line}; "
                f"expected one of {SUPPORTED_LINES}"
            )
        for odds in (self.home_odds, self.away_odds):
            if not math.isfinite(odds) or odds <= 1.0:
                raise ValueError("Decimal odds must be finite and greater than 1.0")

    @property
    def label(self) -> str:
        return f"{self.home_team} vs {self.away_team}"


@dataclass(frozen=True)
class TeamForm:
    """Recent scoring and conceding rates for one team"""

    avg_goals_scored: float = 0.0
    avg_goals_conceded: float = 0.0
    matches_played: int = 0


@dataclass(frozen=True)
class OutcomeProbabilities:
    """Home win / draw / away win probabilities"""

    home: float
    draw: float
    away: float

    def __post_init__(self):
        """Validate probabilities"""
        for value in (self.home, self.draw, self.away):
            if value < 0 or value > 1:
                raise ValueError("Probabilities must be between 0 and 1")
        total = self.home + self.draw + self.away
        if not (0.99 <= total <= 1.01):  # Allow small floating point errors
            raise ValueError(f"Probabilities must sum to 1.0, got {total}")


@dataclass(frozen=True)
class MarketProbabilities:
    """Win probabilities of each side under Draw No Bet and Asian +0.5"""

    home_dnb: float
    away_dnb: float
    home_plus_05: float
    away_plus_05: float


@dataclass(frozen=True)
class Pick:
    """A single value bet recommended by the engine"""

    date: str
    league: str
    match: str
    market: str
    side: str
    handicap: float
    odds: float
    model_prob: float
    ev: float
    confidence: str

    def to_dict(self) -> dict:
        return asdict(self)

    def __str__(self):
        """String representation of pick"""
        return (
            f"{self.date} {self.match} [{self.league}]: "
            f"{self.side} {self.market} @ {self.odds:.2f} "
            f"(prob {self.model_prob:.1%}, EV {self.ev:+.1%}, {self.confidence})"
        )


@dataclass
class RunSnapshot:
    """Timestamped result of one analysis run, kept for history logging"""

    id: str
    timestamp: str
    picks: List[Pick] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "picks": [pick.to_dict() for pick in self.picks],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "RunSnapshot":
        return cls(
            id=str(payload["id"]),
            timestamp=str(payload["timestamp"]),
            picks=[Pick(**item) for item in payload.get("picks", [])],
        )
