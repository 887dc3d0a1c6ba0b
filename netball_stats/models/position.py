"""Court positions."""

from enum import Enum

from ..exceptions import InputShapeError


class Position(Enum):
    """The seven netball court positions."""
    GOAL_SHOOTER = "GS"
    GOAL_ATTACK = "GA"
    WING_ATTACK = "WA"
    CENTRE = "C"
    WING_DEFENCE = "WD"
    GOAL_DEFENCE = "GD"
    GOAL_KEEPER = "GK"

    @classmethod
    def parse(cls, value) -> "Position":
        """
        Convert a raw position code into a Position.

        Args:
            value: Position member or code such as ``"GS"`` (case-insensitive)

        Returns:
            Matching Position

        Raises:
            InputShapeError: If the value is not one of the seven codes
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            code = value.strip().upper()
            for member in cls:
                if member.value == code:
                    return member
        raise InputShapeError(f"Unknown court position: {value!r}")


# Court order, used for stable iteration and output
ALL_POSITIONS = tuple(Position)

ATTACKING_POSITIONS = (Position.GOAL_SHOOTER, Position.GOAL_ATTACK)
DEFENDING_POSITIONS = (Position.GOAL_DEFENCE, Position.GOAL_KEEPER)

# Upstream roster rows use these for players not on court
BENCH_MARKERS = frozenset({"", "BENCH", "OFF", "SUB", "NONE"})


def is_bench_marker(value) -> bool:
    """True when a raw roster position means the player was not on court."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().upper() in BENCH_MARKERS
    return False
