"""Attribute position-level stats to players and roll them up per season."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Set, Union

from ..data.validators import require_sequence
from ..exceptions import InputShapeError
from ..models.aggregate import PlayerAggregate, PlayerGamePerformance
from ..models.game import Game
from ..models.roster import Player, RosterEntry
from ..models.stat_record import StatRecord
from .deduplicator import DedupedStats, StatDeduplicator
from .rating import NEUTRAL_RATING, RatingAverager
from .roster_index import RosterIndex

logger = logging.getLogger(__name__)

RosterInput = Union[RosterIndex, Mapping[int, Iterable[RosterEntry]]]
StatsInput = Union[DedupedStats, Mapping[int, Iterable[StatRecord]]]


def _player_id(player) -> int:
    if isinstance(player, Player):
        return player.id
    if isinstance(player, int) and not isinstance(player, bool):
        return player
    raise InputShapeError(f"Expected Player or player id, got {type(player).__name__}")


class PlayerStatAggregator:
    """
    Builds a PlayerAggregate for every known player.

    Stats are recorded by court position, so each deduplicated record is
    credited to whoever the roster put in that ``(game, quarter, position)``
    slot. Records for unfilled slots, and players missing from the player
    list, are skipped without error.
    """

    def __init__(
        self,
        dedup_policy: str = "first",
        neutral_rating: float = NEUTRAL_RATING,
    ):
        self.deduplicator = StatDeduplicator(keep=dedup_policy)
        self.rating_averager = RatingAverager(neutral_rating)

    def aggregate(
        self,
        players: Sequence,
        stats_by_game: StatsInput,
        rosters_by_game: RosterInput,
        games: Optional[Sequence[Game]] = None,
    ) -> Dict[int, PlayerAggregate]:
        """
        Aggregate season statistics for every player.

        Args:
            players: Player objects or bare player ids
            stats_by_game: Raw stats grouped by game id, or already deduplicated stats
            rosters_by_game: Rosters grouped by game id, or a prebuilt RosterIndex
            games: Optional game metadata used to label per-game performances

        Returns:
            Mapping of player id to PlayerAggregate, one per known player
        """
        player_ids = [_player_id(p) for p in require_sequence(players, "players")]
        index = self._index(rosters_by_game)
        stats = self._dedupe(stats_by_game)
        game_info = {g.id: g for g in (games or ())}

        aggregates: Dict[int, PlayerAggregate] = {
            pid: PlayerAggregate(player_id=pid, rating=self.rating_averager.neutral_rating)
            for pid in player_ids
        }
        games_played: Dict[int, Set[int]] = {pid: set() for pid in player_ids}
        performances: Dict[int, Dict[int, PlayerGamePerformance]] = {pid: {} for pid in player_ids}

        for entry in index.entries():
            aggregate = aggregates.get(entry.player_id)
            if aggregate is None:
                continue
            aggregate.quarters_by_position[entry.position] += 1
            games_played[entry.player_id].add(entry.game_id)

            performance = performances[entry.player_id].get(entry.game_id)
            if performance is None:
                performance = self._new_performance(entry.game_id, game_info.get(entry.game_id))
                performances[entry.player_id][entry.game_id] = performance
            performance.quarters_played += 1
            if entry.position not in performance.positions_played:
                performance.positions_played.append(entry.position)

        for game_id, records in stats.by_game.items():
            for stat in records:
                player_id = index.player_at(game_id, stat.quarter, stat.position)
                if player_id is None:
                    logger.debug(
                        "No roster entry for %s Q%s in game %s", stat.position.value, stat.quarter, game_id
                    )
                    continue
                aggregate = aggregates.get(player_id)
                if aggregate is None:
                    logger.debug("Player %s not in tracked players; skipping stat", player_id)
                    continue
                aggregate.add(stat)
                performances[player_id][game_id].add(stat)

        for pid, aggregate in aggregates.items():
            aggregate.games_played = len(games_played[pid])
            aggregate.rating = self.rating_averager.average(pid, index, stats)
            aggregate.game_performances = [
                performances[pid][game_id] for game_id in index.game_ids if game_id in performances[pid]
            ]

        logger.debug("Aggregated stats for %s players", len(aggregates))
        return aggregates

    def aggregate_player(
        self,
        player_id: int,
        stats_by_game: StatsInput,
        rosters_by_game: RosterInput,
        games: Optional[Sequence[Game]] = None,
    ) -> PlayerAggregate:
        """Detailed season statistics for a single player."""
        return self.aggregate([player_id], stats_by_game, rosters_by_game, games)[player_id]

    def _index(self, rosters_by_game: RosterInput) -> RosterIndex:
        if isinstance(rosters_by_game, RosterIndex):
            return rosters_by_game
        return RosterIndex.from_partitioned(rosters_by_game)

    def _dedupe(self, stats_by_game: StatsInput) -> DedupedStats:
        if isinstance(stats_by_game, DedupedStats):
            return stats_by_game
        return self.deduplicator.deduplicate(stats_by_game)

    @staticmethod
    def _new_performance(game_id: int, game: Optional[Game]) -> PlayerGamePerformance:
        if game is None:
            return PlayerGamePerformance(game_id=game_id)
        return PlayerGamePerformance(
            game_id=game_id,
            date=game.date or "",
            opponent=game.opponent_name or "Unknown",
        )


def aggregate_player_stats(
    players: Sequence,
    stats_by_game: StatsInput,
    rosters_by_game: RosterInput,
    games: Optional[Sequence[Game]] = None,
    dedup_policy: str = "first",
) -> Dict[int, PlayerAggregate]:
    return PlayerStatAggregator(dedup_policy=dedup_policy).aggregate(
        players, stats_by_game, rosters_by_game, games
    )
