"""Collapse duplicate stat records for the same court slot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from ..data.validators import require_partitions
from ..exceptions import InputShapeError
from ..models.position import Position
from ..models.stat_record import StatRecord

logger = logging.getLogger(__name__)

KEEP_POLICIES = ("first", "latest")


@dataclass
class DedupedStats:
    """One stat record per ``gameId-quarter-position`` key, grouped by game partition."""

    by_game: Dict[int, List[StatRecord]] = field(default_factory=dict)
    duplicates_dropped: int = 0
    mismatched_dropped: int = 0
    _by_key: Dict[str, StatRecord] = field(default_factory=dict, repr=False)

    def lookup(self, game_id: int, quarter: int, position: Position) -> Optional[StatRecord]:
        return self._by_key.get(f"{game_id}-{quarter}-{position.value}")

    def records(self) -> Iterator[StatRecord]:
        for stats in self.by_game.values():
            yield from stats

    def __len__(self) -> int:
        return len(self._by_key)


class StatDeduplicator:
    """
    Keeps exactly one record per ``(game_id, quarter, position)``.

    The default ``keep="first"`` keeps the first record seen for a key, in
    partition order then row order. ``keep="latest"`` keeps the record with
    the highest ``record_id`` instead (records without an id lose to ones
    with an id; ties keep the earlier record).

    A record whose ``game_id`` disagrees with the partition it was found in
    is discarded before keying.
    """

    def __init__(self, keep: str = "first"):
        if keep not in KEEP_POLICIES:
            raise ValueError(f"keep must be one of {KEEP_POLICIES}, got {keep!r}")
        self.keep = keep

    def deduplicate(self, stats_by_game: Mapping[int, Iterable[StatRecord]]) -> DedupedStats:
        """
        Deduplicate stat batches grouped by game id.

        Args:
            stats_by_game: Mapping of game id to that game's stat records

        Returns:
            DedupedStats with one record per key
        """
        require_partitions(stats_by_game, "stats_by_game")
        result = DedupedStats()
        partition_of: Dict[str, int] = {}

        for game_id, stats in stats_by_game.items():
            result.by_game.setdefault(game_id, [])
            for stat in stats or ():
                if not isinstance(stat, StatRecord):
                    raise InputShapeError(f"Expected StatRecord in game {game_id}, got {type(stat).__name__}")
                if stat.game_id != game_id:
                    result.mismatched_dropped += 1
                    logger.debug(
                        "Stat game id %s doesn't match partition game id %s; dropping", stat.game_id, game_id
                    )
                    continue
                key = stat.dedup_key
                current = result._by_key.get(key)
                if current is None:
                    result._by_key[key] = stat
                    partition_of[key] = game_id
                    continue
                result.duplicates_dropped += 1
                if self.keep == "latest" and self._is_newer(stat, current):
                    result._by_key[key] = stat
                    partition_of[key] = game_id

        for key, stat in result._by_key.items():
            result.by_game[partition_of[key]].append(stat)

        if result.duplicates_dropped:
            logger.debug("Dropped %s duplicate stat records", result.duplicates_dropped)
        return result

    @staticmethod
    def _is_newer(candidate: StatRecord, current: StatRecord) -> bool:
        if candidate.record_id is None:
            return False
        if current.record_id is None:
            return True
        return candidate.record_id > current.record_id


def deduplicate_stats(stats_by_game: Mapping[int, Iterable[StatRecord]], keep: str = "first") -> DedupedStats:
    return StatDeduplicator(keep=keep).deduplicate(stats_by_game)
