"""Parse collaborator rows into engine records."""

from __future__ import annotations

import json
import logging
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from ..exceptions import InputShapeError
from ..models.game import Game, QuarterScore
from ..models.position import Position, is_bench_marker
from ..models.roster import Player, RosterEntry
from ..models.stat_record import COUNTER_FIELDS, StatRecord
from .validators import (
    _to_bool,
    _to_int,
    require_valid,
    validate_games_payload,
    validate_players_payload,
    validate_quarter_scores_payload,
    validate_rosters_payload,
    validate_stats_payload,
)

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _get(row: Mapping, name: str, default=None):
    """Read a field by its snake_case name or its camelCase twin."""
    for key in (name, _camel(name)):
        value = row.get(key)
        if value is not None:
            return value
    return default


def _int_field(row: Mapping, name: str, where: str, default: Optional[int] = None) -> Optional[int]:
    raw = _get(row, name)
    if raw is None:
        return default
    value = _to_int(raw)
    if value is None:
        raise InputShapeError(f"{where} field '{name}' must be an integer, got {raw!r}")
    return value


def _game_key(key) -> int:
    value = _to_int(key)
    if value is None:
        raise InputShapeError(f"Partition key {key!r} is not a game id")
    return value


class DataLoader:
    """Builds model objects from the row shapes the API layer hands over."""

    @staticmethod
    def load_players(rows: Iterable[Mapping]) -> List[Player]:
        """
        Load players.

        Args:
            rows: Objects with ``id`` and ``displayName`` (or ``display_name``)

        Returns:
            List of Player objects
        """
        require_valid("players", validate_players_payload(rows))
        players = []
        for row in rows:
            player_id = _to_int(row.get("id", _get(row, "player_id")))
            name = _get(row, "display_name", "")
            players.append(Player(id=player_id, display_name=str(name)))
        return players

    @staticmethod
    def load_stats_by_game(payload: Mapping) -> Dict[int, List[StatRecord]]:
        """
        Load stat rows grouped by game id.

        Rows without a position are legacy team-level rows and are skipped.
        A row without its own game id takes the partition key.

        Args:
            payload: Mapping of game id to a list of stat rows

        Returns:
            Mapping of game id to StatRecords, in input order
        """
        require_valid("stats", validate_stats_payload(payload))
        out: Dict[int, List[StatRecord]] = {}
        for key, rows in payload.items():
            game_id = _game_key(key)
            records = out.setdefault(game_id, [])
            for idx, row in enumerate(rows or ()):
                if row.get("position") is None:
                    logger.debug("Skipping legacy stat row without position in game %s", game_id)
                    continue
                records.append(DataLoader.stat_from_row(row, game_id, f"stats[{key!r}][{idx}]"))
        return out

    @staticmethod
    def stat_from_row(row: Mapping, partition_game_id: Optional[int] = None, where: str = "stat") -> StatRecord:
        game_id = _int_field(row, "game_id", where, default=partition_game_id)
        if game_id is None:
            raise InputShapeError(f"{where} has no game id")
        rating = _get(row, "rating")
        if rating is not None and (isinstance(rating, bool) or not isinstance(rating, (int, float))):
            raise InputShapeError(f"{where} rating must be numeric, got {rating!r}")
        counters = {name: _int_field(row, name, where, default=0) for name in COUNTER_FIELDS}
        return StatRecord(
            game_id=game_id,
            position=Position.parse(row.get("position")),
            quarter=_int_field(row, "quarter", where),
            rating=rating,
            team_id=_int_field(row, "team_id", where),
            record_id=_int_field(row, "id", where),
            **counters,
        )

    @staticmethod
    def load_rosters_by_game(payload: Mapping) -> Dict[int, List[RosterEntry]]:
        """
        Load roster rows grouped by game id.

        Bench rows and rows without a player are skipped; only on-court
        assignments become RosterEntries.
        """
        require_valid("rosters", validate_rosters_payload(payload))
        out: Dict[int, List[RosterEntry]] = {}
        for key, rows in payload.items():
            game_id = _game_key(key)
            entries = out.setdefault(game_id, [])
            for idx, row in enumerate(rows or ()):
                where = f"rosters[{key!r}][{idx}]"
                if is_bench_marker(row.get("position")):
                    continue
                player_id = _int_field(row, "player_id", where)
                if player_id is None:
                    logger.debug("Skipping roster row without player in game %s", game_id)
                    continue
                entries.append(
                    RosterEntry(
                        quarter=_int_field(row, "quarter", where),
                        position=Position.parse(row.get("position")),
                        player_id=player_id,
                        game_id=_int_field(row, "game_id", where),
                    )
                )
        return out

    @staticmethod
    def load_quarter_scores_by_game(payload: Mapping) -> Dict[int, List[QuarterScore]]:
        require_valid("quarter_scores", validate_quarter_scores_payload(payload))
        out: Dict[int, List[QuarterScore]] = {}
        for key, rows in payload.items():
            game_id = _game_key(key)
            scores = out.setdefault(game_id, [])
            for idx, row in enumerate(rows or ()):
                where = f"scores[{key!r}][{idx}]"
                scores.append(
                    QuarterScore(
                        game_id=_int_field(row, "game_id", where, default=game_id),
                        team_id=_int_field(row, "team_id", where),
                        quarter=_int_field(row, "quarter", where),
                        score=_int_field(row, "score", where),
                    )
                )
        return out

    @staticmethod
    def load_games(rows: Iterable) -> List[Game]:
        """Load games from objects with an ``id`` field, or from bare ids."""
        require_valid("games", validate_games_payload(rows))
        games = []
        for row in rows:
            if isinstance(row, int):
                games.append(Game(id=row))
                continue
            games.append(
                Game(
                    id=_to_int(row["id"]),
                    home_team_id=_int_field(row, "home_team_id", "game"),
                    away_team_id=_int_field(row, "away_team_id", "game"),
                    status_allows_statistics=_to_bool(_get(row, "status_allows_statistics", True)),
                    date=_get(row, "date"),
                    opponent_name=_get(row, "opponent_name"),
                )
            )
        return games

    @staticmethod
    def stats_frame_to_partitions(frame: pd.DataFrame) -> Dict[int, List[StatRecord]]:
        """
        Convert a DataFrame of stat rows into game partitions.

        The frame needs a ``game_id`` (or ``gameId``) column; NaN cells are
        read as missing values.
        """
        if not isinstance(frame, pd.DataFrame):
            raise InputShapeError(f"Expected a DataFrame, got {type(frame).__name__}")
        column = "game_id" if "game_id" in frame.columns else "gameId"
        if column not in frame.columns:
            raise InputShapeError("stat frame needs a game_id column")

        cleaned = frame.astype(object).where(pd.notna(frame), None)
        payload: Dict[int, List[dict]] = {}
        for row in cleaned.to_dict("records"):
            payload.setdefault(_game_key(row[column]), []).append(row)
        return DataLoader.load_stats_by_game(payload)

    @staticmethod
    def load_payload_from_json(file_path: str) -> Dict:
        """
        Load a full engine payload from a JSON file.

        Expected top-level keys: ``players``, ``stats``, ``rosters``,
        ``quarterScores`` and optionally ``games``. Missing sections load as
        empty.
        """
        with open(file_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise InputShapeError(f"{file_path} must contain a JSON object")

        games = data.get("games")
        return {
            "players": DataLoader.load_players(data.get("players") or []),
            "stats_by_game": DataLoader.load_stats_by_game(data.get("stats") or {}),
            "rosters_by_game": DataLoader.load_rosters_by_game(data.get("rosters") or {}),
            "quarter_scores_by_game": DataLoader.load_quarter_scores_by_game(
                data.get("quarterScores") or data.get("quarter_scores") or {}
            ),
            "games": DataLoader.load_games(games) if games is not None else None,
        }
