"""Derived per-player statistics."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .position import ALL_POSITIONS, Position
from .stat_record import COUNTER_FIELDS, StatRecord


def empty_quarters_by_position() -> Dict[Position, int]:
    return {position: 0 for position in ALL_POSITIONS}


@dataclass
class PlayerGamePerformance:
    """A player's statistics for a single game."""

    game_id: int
    date: str = ""
    opponent: str = "Unknown"
    goals_for: int = 0
    goals_against: int = 0
    missed_goals: int = 0
    rebounds: int = 0
    intercepts: int = 0
    bad_pass: int = 0
    handling_error: int = 0
    pick_up: int = 0
    infringement: int = 0
    positions_played: List[Position] = field(default_factory=list)
    quarters_played: int = 0

    def add(self, stat: StatRecord) -> None:
        for name in COUNTER_FIELDS:
            setattr(self, name, getattr(self, name) + getattr(stat, name))

    def to_dict(self) -> dict:
        out = {
            "game_id": self.game_id,
            "date": self.date,
            "opponent": self.opponent,
        }
        out.update({name: getattr(self, name) for name in COUNTER_FIELDS})
        out["positions_played"] = [p.value for p in self.positions_played]
        out["quarters_played"] = self.quarters_played
        return out


@dataclass
class PlayerAggregate:
    """
    Season rollup for one player.

    Built fresh on every aggregation run; it has no identity beyond the
    inputs it was computed from.
    """

    player_id: int
    games_played: int = 0
    goals_for: int = 0
    goals_against: int = 0
    missed_goals: int = 0
    rebounds: int = 0
    intercepts: int = 0
    bad_pass: int = 0
    handling_error: int = 0
    pick_up: int = 0
    infringement: int = 0
    rating: float = 5.0
    quarters_by_position: Dict[Position, int] = field(default_factory=empty_quarters_by_position)
    game_performances: List[PlayerGamePerformance] = field(default_factory=list)

    def add(self, stat: StatRecord) -> None:
        """Add every counter of a stat record into the running totals."""
        for name in COUNTER_FIELDS:
            setattr(self, name, getattr(self, name) + getattr(stat, name))

    @property
    def total_quarters(self) -> int:
        return sum(self.quarters_by_position.values())

    def performance_for(self, game_id: int) -> Optional[PlayerGamePerformance]:
        for performance in self.game_performances:
            if performance.game_id == game_id:
                return performance
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        out = {
            "player_id": self.player_id,
            "games_played": self.games_played,
        }
        out.update({name: getattr(self, name) for name in COUNTER_FIELDS})
        out["rating"] = self.rating
        out["quarters_by_position"] = {p.value: n for p, n in self.quarters_by_position.items()}
        out["game_performances"] = [g.to_dict() for g in self.game_performances]
        return out
