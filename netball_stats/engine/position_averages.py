"""Per-game goal averages for the attacking and defending positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Union

from ..data.validators import require_partitions, require_sequence
from ..exceptions import InputShapeError
from ..models.game import Game, as_game
from ..models.position import Position
from ..models.stat_record import StatRecord
from .deduplicator import StatDeduplicator


@dataclass(frozen=True)
class PositionAverages:
    """Average goals per game for GS/GA (scored) and GD/GK (conceded)."""

    gs_avg_goals_for: float = 0.0
    ga_avg_goals_for: float = 0.0
    gd_avg_goals_against: float = 0.0
    gk_avg_goals_against: float = 0.0
    games_with_position_stats: int = 0

    @property
    def attacking_positions_total(self) -> float:
        return self.gs_avg_goals_for + self.ga_avg_goals_for

    @property
    def defending_positions_total(self) -> float:
        return self.gd_avg_goals_against + self.gk_avg_goals_against

    def to_dict(self) -> dict:
        return {
            "gs_avg_goals_for": self.gs_avg_goals_for,
            "ga_avg_goals_for": self.ga_avg_goals_for,
            "gd_avg_goals_against": self.gd_avg_goals_against,
            "gk_avg_goals_against": self.gk_avg_goals_against,
            "attacking_positions_total": self.attacking_positions_total,
            "defending_positions_total": self.defending_positions_total,
            "games_with_position_stats": self.games_with_position_stats,
        }


def calculate_position_averages(
    games: Sequence[Union[Game, int]],
    stats_by_game: Mapping[int, Iterable[StatRecord]],
    team_id: Optional[int] = None,
    dedup_policy: str = "first",
) -> PositionAverages:
    """
    Average position goals over games that have position stats recorded.

    Averages divide by the number of games with stats, not by the number of
    position records, so a shooter who played two quarters of four still
    contributes per game. Games whose status disallows statistics are skipped.
    """
    require_partitions(stats_by_game, "stats_by_game")
    included = [g for g in map(as_game, require_sequence(games, "games")) if g.status_allows_statistics]

    team_stats = {}
    for game in included:
        rows = []
        for stat in stats_by_game.get(game.id) or ():
            if not isinstance(stat, StatRecord):
                raise InputShapeError(f"Expected StatRecord in game {game.id}, got {type(stat).__name__}")
            if team_id is None or stat.team_id is None or stat.team_id == team_id:
                rows.append(stat)
        if rows:
            team_stats[game.id] = rows

    deduped = StatDeduplicator(keep=dedup_policy).deduplicate(team_stats)
    games_with_stats = sum(1 for stats in deduped.by_game.values() if stats)
    if games_with_stats == 0:
        return PositionAverages()

    totals = {p: 0 for p in Position}
    for stat in deduped.records():
        if stat.position in (Position.GOAL_SHOOTER, Position.GOAL_ATTACK):
            totals[stat.position] += stat.goals_for
        elif stat.position in (Position.GOAL_DEFENCE, Position.GOAL_KEEPER):
            totals[stat.position] += stat.goals_against

    return PositionAverages(
        gs_avg_goals_for=totals[Position.GOAL_SHOOTER] / games_with_stats,
        ga_avg_goals_for=totals[Position.GOAL_ATTACK] / games_with_stats,
        gd_avg_goals_against=totals[Position.GOAL_DEFENCE] / games_with_stats,
        gk_avg_goals_against=totals[Position.GOAL_KEEPER] / games_with_stats,
        games_with_position_stats=games_with_stats,
    )
