"""Lookup from court slot to the player who filled it."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from ..data.validators import require_partitions, require_sequence
from ..exceptions import InputShapeError
from ..models.position import Position
from ..models.roster import RosterEntry
from ..models.stat_record import StatRecord

logger = logging.getLogger(__name__)

Slot = Tuple[int, int, Position]


class RosterIndex:
    """
    Index of roster assignments keyed by ``(game_id, quarter, position)``.

    Build it with :meth:`from_partitioned` when rosters are grouped by game id
    (the normal case) or :meth:`from_entries` when every entry carries its
    own ``game_id``. A missing slot is not an error; it means nobody was
    recorded in that position.
    """

    def __init__(self):
        self._by_slot: Dict[Slot, int] = {}
        self._by_player: Dict[int, List[Slot]] = {}
        # (player_id, game_id, quarter) -> position, for the one-position-per-quarter rule
        self._player_quarter: Dict[Tuple[int, int, int], Position] = {}
        self._game_ids: List[int] = []

    @classmethod
    def from_partitioned(cls, rosters_by_game: Mapping[int, Iterable[RosterEntry]]) -> "RosterIndex":
        """
        Build the index from rosters already grouped by game id.

        Entries whose own ``game_id`` disagrees with their partition key are
        discarded.
        """
        require_partitions(rosters_by_game, "rosters_by_game")
        index = cls()
        for game_id, entries in rosters_by_game.items():
            index._register_game(game_id)
            for entry in entries or ():
                if not isinstance(entry, RosterEntry):
                    raise InputShapeError(f"Expected RosterEntry in game {game_id}, got {type(entry).__name__}")
                if entry.game_id is not None and entry.game_id != game_id:
                    logger.debug(
                        "Dropping roster entry for game %s found under game %s", entry.game_id, game_id
                    )
                    continue
                index._add(game_id, entry)
        return index

    @classmethod
    def from_entries(cls, entries: Iterable[RosterEntry]) -> "RosterIndex":
        """Build the index from entries that each carry a ``game_id``."""
        index = cls()
        for entry in require_sequence(entries, "entries"):
            if not isinstance(entry, RosterEntry):
                raise InputShapeError(f"Expected RosterEntry, got {type(entry).__name__}")
            if entry.game_id is None:
                raise InputShapeError("Roster entry without a game_id cannot be indexed unpartitioned")
            index._register_game(entry.game_id)
            index._add(entry.game_id, entry)
        return index

    def _register_game(self, game_id: int) -> None:
        if game_id not in self._game_ids:
            self._game_ids.append(game_id)

    def _add(self, game_id: int, entry: RosterEntry) -> None:
        slot = (game_id, entry.quarter, entry.position)
        existing = self._by_slot.get(slot)
        if existing is not None:
            if existing != entry.player_id:
                logger.warning(
                    "Slot %s Q%s %s already held by player %s; ignoring player %s",
                    game_id, entry.quarter, entry.position.value, existing, entry.player_id,
                )
            return

        held = self._player_quarter.get((entry.player_id, game_id, entry.quarter))
        if held is not None:
            logger.warning(
                "Player %s already plays %s in game %s Q%s; ignoring %s",
                entry.player_id, held.value, game_id, entry.quarter, entry.position.value,
            )
            return

        self._by_slot[slot] = entry.player_id
        self._player_quarter[(entry.player_id, game_id, entry.quarter)] = entry.position
        self._by_player.setdefault(entry.player_id, []).append(slot)

    def player_at(self, game_id: int, quarter: int, position: Position) -> Optional[int]:
        """Player assigned to a slot, or None when the slot was not filled."""
        return self._by_slot.get((game_id, quarter, position))

    def slots_for(self, player_id: int) -> List[Slot]:
        """Every ``(game_id, quarter, position)`` the player was rostered into."""
        return list(self._by_player.get(player_id, ()))

    def positions_by_quarter(self, player_id: int, game_id: int) -> Dict[int, Position]:
        """Map of quarter to position for one player in one game."""
        return {
            quarter: position
            for g, quarter, position in self._by_player.get(player_id, ())
            if g == game_id
        }

    def is_stat_for_player(self, stat: StatRecord, player_id: int) -> bool:
        """True when the roster puts ``player_id`` in the stat's slot."""
        return self.player_at(stat.game_id, stat.quarter, stat.position) == player_id

    @property
    def game_ids(self) -> List[int]:
        return list(self._game_ids)

    @property
    def player_ids(self) -> List[int]:
        return list(self._by_player)

    def entries(self) -> Iterator[RosterEntry]:
        for (game_id, quarter, position), player_id in self._by_slot.items():
            yield RosterEntry(quarter=quarter, position=position, player_id=player_id, game_id=game_id)

    def __len__(self) -> int:
        return len(self._by_slot)

    def __contains__(self, slot) -> bool:
        return slot in self._by_slot
