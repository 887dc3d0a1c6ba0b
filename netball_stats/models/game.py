"""Game and official quarter score models."""

from dataclasses import dataclass
from typing import Optional

from ..exceptions import InputShapeError
from .stat_record import check_quarter


@dataclass(frozen=True)
class Game:
    """Represents a single fixture between two teams."""

    id: int
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    status_allows_statistics: bool = True
    date: Optional[str] = None
    opponent_name: Optional[str] = None

    def opponent_of(self, team_id: int) -> Optional[int]:
        """
        Get the other team in the game.

        Args:
            team_id: One of the two teams

        Returns:
            The opposing team id, or None when the fixture does not name both teams
            or ``team_id`` is not part of it
        """
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        return None

    def to_dict(self) -> dict:
        """Convert game to dictionary."""
        return {
            "id": self.id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "status_allows_statistics": self.status_allows_statistics,
            "date": self.date,
            "opponent_name": self.opponent_name,
        }


@dataclass(frozen=True)
class QuarterScore:
    """Official score for one team in one quarter of one game."""

    game_id: int
    team_id: int
    quarter: int
    score: int

    def __post_init__(self):
        check_quarter(self.quarter)
        if isinstance(self.score, bool) or not isinstance(self.score, int) or self.score < 0:
            raise InputShapeError(f"Quarter score must be a non-negative integer, got {self.score!r}")

    def to_dict(self) -> dict:
        return {
            "game_id": self.game_id,
            "team_id": self.team_id,
            "quarter": self.quarter,
            "score": self.score,
        }


def as_game(game) -> Game:
    """Accept a Game or a bare game id."""
    if isinstance(game, Game):
        return game
    if isinstance(game, int) and not isinstance(game, bool):
        return Game(id=game)
    raise InputShapeError(f"Expected Game or game id, got {type(game).__name__}")
