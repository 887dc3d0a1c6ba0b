"""Value types shared by the statistics engine."""

from .aggregate import PlayerAggregate, PlayerGamePerformance
from .breakdown import DataQuality, PositionBreakdown
from .game import Game, QuarterScore
from .position import ATTACKING_POSITIONS, DEFENDING_POSITIONS, Position
from .roster import Player, RosterEntry
from .stat_record import COUNTER_FIELDS, QUARTERS, StatRecord

__all__ = [
    "ATTACKING_POSITIONS",
    "COUNTER_FIELDS",
    "DEFENDING_POSITIONS",
    "DataQuality",
    "Game",
    "Player",
    "PlayerAggregate",
    "PlayerGamePerformance",
    "Position",
    "PositionBreakdown",
    "QUARTERS",
    "QuarterScore",
    "RosterEntry",
    "StatRecord",
]
