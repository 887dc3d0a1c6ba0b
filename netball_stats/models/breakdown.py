"""Projected quarter breakdown by position."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .position import ATTACKING_POSITIONS, DEFENDING_POSITIONS, Position


class DataQuality(Enum):
    """How much real historical data backed a projected quarter."""
    COMPLETE = "complete"
    PARTIAL = "partial"
    FALLBACK = "fallback"
    NO_DATA = "no-data"


def _zeros(positions) -> Dict[Position, float]:
    return {position: 0.0 for position in positions}


@dataclass
class PositionBreakdown:
    """
    Estimated goals per attacking/defending position for one quarter.

    ``goals_for`` is keyed by GS/GA and ``goals_against`` by GD/GK.
    """

    quarter: int
    goals_for: Dict[Position, float] = field(default_factory=lambda: _zeros(ATTACKING_POSITIONS))
    goals_against: Dict[Position, float] = field(default_factory=lambda: _zeros(DEFENDING_POSITIONS))
    data_quality: DataQuality = DataQuality.NO_DATA
    has_valid_data: bool = False

    # Diagnostics
    games_with_quarter_data: int = 0
    scored_average: float = 0.0
    conceded_average: float = 0.0
    attack_percentages: Dict[Position, float] = field(default_factory=lambda: _zeros(ATTACKING_POSITIONS))
    defence_percentages: Dict[Position, float] = field(default_factory=lambda: _zeros(DEFENDING_POSITIONS))

    @classmethod
    def no_data(cls, quarter: int) -> "PositionBreakdown":
        return cls(quarter=quarter)

    @property
    def attack_total(self) -> float:
        return sum(self.goals_for.values())

    @property
    def defence_total(self) -> float:
        return sum(self.goals_against.values())

    def to_dict(self) -> dict:
        return {
            "quarter": self.quarter,
            "goals_for": {p.value: v for p, v in self.goals_for.items()},
            "goals_against": {p.value: v for p, v in self.goals_against.items()},
            "data_quality": self.data_quality.value,
            "has_valid_data": self.has_valid_data,
            "games_with_quarter_data": self.games_with_quarter_data,
            "scored_average": self.scored_average,
            "conceded_average": self.conceded_average,
            "attack_percentages": {p.value: v for p, v in self.attack_percentages.items()},
            "defence_percentages": {p.value: v for p, v in self.defence_percentages.items()},
        }
