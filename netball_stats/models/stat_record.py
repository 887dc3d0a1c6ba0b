"""Position-level statistic record."""

from dataclasses import dataclass, fields
from typing import Dict, Optional

from ..exceptions import InputShapeError
from .position import Position


# Integer counters carried by every stat record, in display order
COUNTER_FIELDS = (
    "goals_for",
    "goals_against",
    "missed_goals",
    "rebounds",
    "intercepts",
    "bad_pass",
    "handling_error",
    "pick_up",
    "infringement",
)

QUARTERS = (1, 2, 3, 4)


def check_quarter(quarter) -> int:
    """Return the quarter as an int, failing fast outside 1-4."""
    if isinstance(quarter, bool) or not isinstance(quarter, int) or quarter not in QUARTERS:
        raise InputShapeError(f"Quarter must be an integer 1-4, got {quarter!r}")
    return quarter


@dataclass(frozen=True)
class StatRecord:
    """
    One measurement for a single (game, position, quarter) slice.

    Stats are recorded against a court position rather than a player; the
    player is recovered later by joining against the roster.
    """

    game_id: int
    position: Position
    quarter: int
    goals_for: int = 0
    goals_against: int = 0
    missed_goals: int = 0
    rebounds: int = 0
    intercepts: int = 0
    bad_pass: int = 0
    handling_error: int = 0
    pick_up: int = 0
    infringement: int = 0
    rating: Optional[float] = None
    team_id: Optional[int] = None
    record_id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.position, Position):
            object.__setattr__(self, "position", Position.parse(self.position))
        check_quarter(self.quarter)
        for name in COUNTER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InputShapeError(f"Counter '{name}' must be a non-negative integer, got {value!r}")
        if self.rating is not None and not isinstance(self.rating, (int, float)):
            raise InputShapeError(f"Rating must be numeric or None, got {self.rating!r}")

    @property
    def slot(self):
        """The (game_id, quarter, position) triple this record describes."""
        return (self.game_id, self.quarter, self.position)

    @property
    def dedup_key(self) -> str:
        return f"{self.game_id}-{self.quarter}-{self.position.value}"

    def counters(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in COUNTER_FIELDS}

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["position"] = self.position.value
        return out
