"""Season statistics pipeline: player aggregation and quarter projection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from ..engine.aggregator import PlayerStatAggregator
from ..engine.deduplicator import KEEP_POLICIES
from ..engine.position_averages import PositionAverages, calculate_position_averages
from ..engine.projector import QuarterScoreProjector
from ..engine.rating import NEUTRAL_RATING
from ..models.aggregate import PlayerAggregate
from ..models.breakdown import PositionBreakdown
from ..models.game import Game, QuarterScore
from ..models.position import ALL_POSITIONS
from ..models.roster import RosterEntry
from ..models.stat_record import COUNTER_FIELDS, StatRecord

logger = logging.getLogger(__name__)


@dataclass
class SeasonStatsConfig:
    team_id: Optional[int] = None
    dedup_policy: str = "first"
    neutral_rating: float = NEUTRAL_RATING
    decimals: int = 1

    def __post_init__(self):
        if self.dedup_policy not in KEEP_POLICIES:
            raise ValueError(f"dedup_policy must be one of {KEEP_POLICIES}, got {self.dedup_policy!r}")
        if not 0 <= self.neutral_rating <= 10:
            raise ValueError(f"neutral_rating must be on the 0-10 scale, got {self.neutral_rating}")


@dataclass
class SeasonStatsReport:
    """Outputs of both pipelines for one run."""

    player_aggregates: Dict[int, PlayerAggregate] = field(default_factory=dict)
    quarter_breakdown: List[PositionBreakdown] = field(default_factory=list)
    position_averages: Optional[PositionAverages] = None

    def to_dict(self) -> dict:
        return {
            "player_aggregates": {pid: agg.to_dict() for pid, agg in self.player_aggregates.items()},
            "quarter_breakdown": [q.to_dict() for q in self.quarter_breakdown],
            "position_averages": self.position_averages.to_dict() if self.position_averages else None,
        }

    def player_frame(self) -> pd.DataFrame:
        """One row per player: totals, rating, and quarters played in each position."""
        columns = ["player_id", "games_played", *COUNTER_FIELDS, "rating"]
        columns += [f"quarters_{p.value}" for p in ALL_POSITIONS]
        rows = []
        for aggregate in self.player_aggregates.values():
            row = {name: getattr(aggregate, name) for name in ["player_id", "games_played", *COUNTER_FIELDS, "rating"]}
            for position, count in aggregate.quarters_by_position.items():
                row[f"quarters_{position.value}"] = count
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)

    def quarter_frame(self) -> pd.DataFrame:
        """One row per quarter with the GS/GA and GD/GK estimates."""
        rows = []
        for breakdown in self.quarter_breakdown:
            row = {"quarter": breakdown.quarter}
            row.update({f"{p.value}_goals_for": v for p, v in breakdown.goals_for.items()})
            row.update({f"{p.value}_goals_against": v for p, v in breakdown.goals_against.items()})
            row["data_quality"] = breakdown.data_quality.value
            row["has_valid_data"] = breakdown.has_valid_data
            row["games_with_quarter_data"] = breakdown.games_with_quarter_data
            rows.append(row)
        return pd.DataFrame(rows)


class SeasonStatsPipeline:
    """
    Runs player aggregation and quarter projection over one batch of games.

    The two halves share no state; projection only runs when the config
    names a team.
    """

    def __init__(self, config: SeasonStatsConfig):
        self.config = config
        self.aggregator = PlayerStatAggregator(
            dedup_policy=config.dedup_policy,
            neutral_rating=config.neutral_rating,
        )
        self.projector = QuarterScoreProjector(decimals=config.decimals, dedup_policy=config.dedup_policy)

    def run(
        self,
        players: Sequence,
        stats_by_game: Mapping[int, Iterable[StatRecord]],
        rosters_by_game: Mapping[int, Iterable[RosterEntry]],
        quarter_scores_by_game: Optional[Mapping[int, Iterable[QuarterScore]]] = None,
        games: Optional[Sequence[Union[Game, int]]] = None,
    ) -> SeasonStatsReport:
        game_meta = [g for g in (games or ()) if isinstance(g, Game)]
        report = SeasonStatsReport(
            player_aggregates=self.aggregator.aggregate(players, stats_by_game, rosters_by_game, game_meta),
        )

        if self.config.team_id is None:
            logger.debug("No team configured; skipping quarter projection")
            return report

        scores = quarter_scores_by_game or {}
        report.quarter_breakdown = self.projector.project(
            self.config.team_id, scores, stats_by_game, games
        )
        report.position_averages = calculate_position_averages(
            games if games is not None else list(stats_by_game.keys()),
            stats_by_game,
            self.config.team_id,
            dedup_policy=self.config.dedup_policy,
        )
        logger.info(
            "Season stats: %s players, quarters %s",
            len(report.player_aggregates),
            [q.data_quality.value for q in report.quarter_breakdown],
        )
        return report


def run_season_stats(
    players: Sequence,
    stats_by_game: Mapping[int, Iterable[StatRecord]],
    rosters_by_game: Mapping[int, Iterable[RosterEntry]],
    quarter_scores_by_game: Optional[Mapping[int, Iterable[QuarterScore]]] = None,
    config: Optional[SeasonStatsConfig] = None,
    games: Optional[Sequence[Union[Game, int]]] = None,
) -> SeasonStatsReport:
    """Run both pipelines and return the combined report."""
    pipeline = SeasonStatsPipeline(config or SeasonStatsConfig())
    return pipeline.run(players, stats_by_game, rosters_by_game, quarter_scores_by_game, games)
