"""Players and roster assignments."""

from dataclasses import dataclass
from typing import Optional

from .position import Position
from .stat_record import check_quarter


@dataclass(frozen=True)
class Player:
    """A player identity known to the club."""

    id: int
    display_name: str = ""


@dataclass(frozen=True)
class RosterEntry:
    """
    Assignment of a player to a position for one quarter of one game.

    ``game_id`` is optional: rosters normally arrive already partitioned by
    game id, in which case the embedded id only serves as an integrity check.
    """

    quarter: int
    position: Position
    player_id: int
    game_id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.position, Position):
            object.__setattr__(self, "position", Position.parse(self.position))
        check_quarter(self.quarter)

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "quarter": self.quarter,
            "position": self.position.value,
            "player_id": self.player_id,
        }
