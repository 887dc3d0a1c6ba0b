"""Project official quarter scores onto attacking and defending positions."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

import numpy as np

from ..data.validators import require_partitions, require_sequence
from ..exceptions import InputShapeError
from ..models.breakdown import DataQuality, PositionBreakdown
from ..models.game import Game, QuarterScore, as_game
from ..models.position import ATTACKING_POSITIONS, DEFENDING_POSITIONS, Position
from ..models.stat_record import QUARTERS, StatRecord
from .deduplicator import StatDeduplicator

logger = logging.getLogger(__name__)

TRACKED_POSITIONS = ATTACKING_POSITIONS + DEFENDING_POSITIONS
EVEN_SPLIT = 0.5


def _split(
    totals: Dict[Position, float],
    positions: Tuple[Position, Position],
    fallback: Optional[Dict[Position, float]] = None,
) -> Dict[Position, float]:
    """Share of the combined total held by each position; ``fallback`` (else 50/50) when the total is zero."""
    total = sum(totals.get(p, 0) for p in positions)
    if total <= 0:
        if fallback is not None:
            return {p: fallback[p] for p in positions}
        return {p: EVEN_SPLIT for p in positions}
    return {p: totals.get(p, 0) / total for p in positions}


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round with halves going up (2.25 -> 2.3), unlike the builtin ``round``."""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def adjust_for_rounding(
    estimates: Dict[Position, float],
    positions: Tuple[Position, Position],
    target: float,
    decimals: int = 1,
) -> Dict[Position, float]:
    """
    Nudge the larger of a rounded pair so the pair sums to ``target``.

    Only a one-step discrepancy is corrected; on a tie the first position
    takes the adjustment.
    """
    first, second = positions
    step = 10 ** -decimals
    diff = round_half_up(target - round_half_up(estimates[first] + estimates[second], decimals), decimals)
    if diff == 0 or abs(diff) > step * 1.1:
        return estimates
    larger = first if estimates[first] >= estimates[second] else second
    adjusted = dict(estimates)
    adjusted[larger] = round_half_up(estimates[larger] + diff, decimals)
    return adjusted


class QuarterScoreProjector:
    """
    Splits a team's average quarter scores across GS/GA and GD/GK.

    Official scores give how many goals were scored and conceded per
    quarter; position stats give how those goals were historically shared
    between the two shooters and the two defenders. Each quarter is tagged
    exactly once with a DataQuality describing how much real data backed it.
    """

    def __init__(self, decimals: int = 1, dedup_policy: str = "first"):
        self.decimals = decimals
        self.deduplicator = StatDeduplicator(keep=dedup_policy)

    def project(
        self,
        team_id: int,
        quarter_scores_by_game: Mapping[int, Iterable[QuarterScore]],
        stats_by_game: Optional[Mapping[int, Iterable[StatRecord]]] = None,
        games: Optional[Sequence[Union[Game, int]]] = None,
    ) -> List[PositionBreakdown]:
        """
        Build the quarter-by-quarter position breakdown for one team.

        Args:
            team_id: Team being projected
            quarter_scores_by_game: Official quarter scores grouped by game id
            stats_by_game: Position stats grouped by game id
            games: Games to include; defaults to every game with scores.
                Games whose status disallows statistics are skipped.

        Returns:
            Four PositionBreakdowns, quarters 1-4 in order
        """
        require_partitions(quarter_scores_by_game, "quarter_scores_by_game")
        stats_by_game = require_partitions(stats_by_game or {}, "stats_by_game")
        if games is None:
            games = list(quarter_scores_by_game.keys())
        included = [g for g in map(as_game, require_sequence(games, "games")) if g.status_allows_statistics]
        game_ids = {g.id for g in included}

        # Filter to this team before deduplicating; both teams share slot keys
        team_stats: Dict[int, List[StatRecord]] = {}
        for game_id, stats in stats_by_game.items():
            if game_id not in game_ids:
                continue
            team_stats[game_id] = []
            for stat in stats or ():
                if not isinstance(stat, StatRecord):
                    raise InputShapeError(f"Expected StatRecord in game {game_id}, got {type(stat).__name__}")
                if stat.team_id is None or stat.team_id == team_id:
                    team_stats[game_id].append(stat)
        deduped = self.deduplicator.deduplicate(team_stats)
        season_split = self._season_split(deduped.records())

        breakdowns = []
        for quarter in QUARTERS:
            scored, conceded = self._quarter_scores(team_id, included, quarter_scores_by_game, quarter)
            totals, present = self._position_totals(deduped.records(), quarter)
            breakdowns.append(self._breakdown(quarter, scored, conceded, totals, present, season_split))
        return breakdowns

    @staticmethod
    def _season_split(stats: Iterable[StatRecord]) -> Dict[Position, float]:
        """GS/GA and GD/GK shares over every quarter of the season."""
        totals: Dict[Position, float] = {p: 0 for p in TRACKED_POSITIONS}
        for stat in stats:
            if stat.position in ATTACKING_POSITIONS:
                totals[stat.position] += stat.goals_for
            elif stat.position in DEFENDING_POSITIONS:
                totals[stat.position] += stat.goals_against
        split = _split(totals, ATTACKING_POSITIONS)
        split.update(_split(totals, DEFENDING_POSITIONS))
        return split

    def _quarter_scores(
        self,
        team_id: int,
        games: Sequence[Game],
        quarter_scores_by_game: Mapping[int, Iterable[QuarterScore]],
        quarter: int,
    ) -> Tuple[Dict[int, int], Dict[int, int]]:
        """Team and opponent scores for one quarter, keyed by game id. Missing scores are absent, not zero."""
        scored: Dict[int, int] = {}
        conceded: Dict[int, int] = {}
        for game in games:
            rows = []
            for row in quarter_scores_by_game.get(game.id) or ():
                if not isinstance(row, QuarterScore):
                    raise InputShapeError(f"Expected QuarterScore in game {game.id}, got {type(row).__name__}")
                if row.quarter == quarter:
                    rows.append(row)
            opponent_id = game.opponent_of(team_id)
            for row in rows:
                if row.team_id == team_id:
                    scored.setdefault(game.id, row.score)
                elif opponent_id is None or row.team_id == opponent_id:
                    conceded.setdefault(game.id, row.score)
        return scored, conceded

    @staticmethod
    def _position_totals(stats: Iterable[StatRecord], quarter: int) -> Tuple[Dict[Position, float], Set[Position]]:
        totals: Dict[Position, float] = {p: 0 for p in TRACKED_POSITIONS}
        present: Set[Position] = set()
        for stat in stats:
            if stat.quarter != quarter:
                continue
            if stat.position in ATTACKING_POSITIONS:
                totals[stat.position] += stat.goals_for
                present.add(stat.position)
            elif stat.position in DEFENDING_POSITIONS:
                totals[stat.position] += stat.goals_against
                present.add(stat.position)
        return totals, present

    def _breakdown(
        self,
        quarter: int,
        scored: Dict[int, int],
        conceded: Dict[int, int],
        totals: Dict[Position, float],
        present: Set[Position],
        season_split: Dict[Position, float],
    ) -> PositionBreakdown:
        games_with_data = len(set(scored) | set(conceded))
        if games_with_data == 0:
            logger.debug("No official scores for Q%s; emitting no-data", quarter)
            return PositionBreakdown.no_data(quarter)

        scored_average = float(np.mean(list(scored.values()))) if scored else 0.0
        conceded_average = float(np.mean(list(conceded.values()))) if conceded else 0.0

        # Quarters without their own history borrow the season-wide split
        if not present:
            quality = DataQuality.FALLBACK
            attack = {p: season_split[p] for p in ATTACKING_POSITIONS}
            defence = {p: season_split[p] for p in DEFENDING_POSITIONS}
        else:
            attack = _split(totals, ATTACKING_POSITIONS, season_split)
            defence = _split(totals, DEFENDING_POSITIONS, season_split)
            if len(present) == len(TRACKED_POSITIONS) and scored_average > 0 and conceded_average > 0:
                quality = DataQuality.COMPLETE
            else:
                quality = DataQuality.PARTIAL

        return PositionBreakdown(
            quarter=quarter,
            goals_for=self._estimates(scored_average, attack, ATTACKING_POSITIONS),
            goals_against=self._estimates(conceded_average, defence, DEFENDING_POSITIONS),
            data_quality=quality,
            has_valid_data=True,
            games_with_quarter_data=games_with_data,
            scored_average=scored_average,
            conceded_average=conceded_average,
            attack_percentages=attack,
            defence_percentages=defence,
        )

    def _estimates(
        self,
        average: float,
        split: Dict[Position, float],
        positions: Tuple[Position, Position],
    ) -> Dict[Position, float]:
        estimates = {p: round_half_up(average * split[p], self.decimals) for p in positions}
        return adjust_for_rounding(estimates, positions, round_half_up(average, self.decimals), self.decimals)


def project_quarter_breakdown(
    team_id: int,
    quarter_scores_by_game: Mapping[int, Iterable[QuarterScore]],
    stats_by_game: Optional[Mapping[int, Iterable[StatRecord]]] = None,
    games: Optional[Sequence[Union[Game, int]]] = None,
    decimals: int = 1,
) -> List[PositionBreakdown]:
    return QuarterScoreProjector(decimals=decimals).project(
        team_id, quarter_scores_by_game, stats_by_game, games
    )
