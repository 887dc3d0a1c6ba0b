"""Shape validators for collaborator-supplied rows."""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Mapping
from typing import Dict, List, Optional

from ..exceptions import InputShapeError
from ..models.position import Position, is_bench_marker


def _to_int(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


_TRUE_STRINGS = {"true", "yes", "1"}
_FALSE_STRINGS = {"false", "no", "0"}


def _to_bool(value) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Integral) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


def _first(row: Dict, *keys):
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def _is_position(value) -> bool:
    try:
        Position.parse(value)
    except InputShapeError:
        return False
    return True


def require_partitions(value, name: str) -> Mapping:
    """
    Check that ``value`` is a ``game_id -> collection`` mapping.

    Raises:
        InputShapeError: If the mapping or any partition is not a collection
    """
    if not isinstance(value, Mapping):
        raise InputShapeError(f"{name} must be a mapping of game id to records, got {type(value).__name__}")
    for game_id, rows in value.items():
        if rows is None:
            continue
        if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
            raise InputShapeError(f"{name}[{game_id!r}] must be a list of records, got {type(rows).__name__}")
    return value


def require_sequence(value, name: str):
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise InputShapeError(f"{name} must be a list, got {type(value).__name__}")
    return value


def require_valid(name: str, errors: List[str]) -> None:
    """Raise InputShapeError carrying every validation error for ``name``."""
    if errors:
        raise InputShapeError(f"{name} failed validation: " + "; ".join(errors))


def validate_players_payload(rows) -> List[str]:
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        return ["players payload must be a list"]

    errors: List[str] = []
    for idx, row in enumerate(rows):
        if not isinstance(row, dict):
            errors.append(f"players[{idx}] must be an object")
            continue
        if _to_int(_first(row, "id", "player_id", "playerId")) is None:
            errors.append(f"players[{idx}] missing integer id")
    return errors


def validate_stats_payload(stats_by_game) -> List[str]:
    """
    Validate raw stat rows partitioned by game id.

    Rows with no position are legacy team-level rows and pass validation;
    the loader skips them.
    """
    if not isinstance(stats_by_game, Mapping):
        return ["stats payload must be an object keyed by game id"]

    errors: List[str] = []
    for game_key, rows in stats_by_game.items():
        if _to_int(game_key) is None:
            errors.append(f"stats key {game_key!r} is not a game id")
        if rows is None:
            continue
        if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
            errors.append(f"stats[{game_key!r}] must be a list")
            continue
        for idx, row in enumerate(rows):
            where = f"stats[{game_key!r}][{idx}]"
            if not isinstance(row, dict):
                errors.append(f"{where} must be an object")
                continue
            position = row.get("position")
            if position is None:
                continue
            if not _is_position(position):
                errors.append(f"{where} has unknown position {position!r}")
            if _to_int(row.get("quarter")) not in (1, 2, 3, 4):
                errors.append(f"{where} has invalid quarter {row.get('quarter')!r}")
    return errors


def validate_rosters_payload(rosters_by_game) -> List[str]:
    if not isinstance(rosters_by_game, Mapping):
        return ["roster payload must be an object keyed by game id"]

    errors: List[str] = []
    for game_key, rows in rosters_by_game.items():
        if _to_int(game_key) is None:
            errors.append(f"roster key {game_key!r} is not a game id")
        if rows is None:
            continue
        if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
            errors.append(f"rosters[{game_key!r}] must be a list")
            continue
        for idx, row in enumerate(rows):
            where = f"rosters[{game_key!r}][{idx}]"
            if not isinstance(row, dict):
                errors.append(f"{where} must be an object")
                continue
            position = row.get("position")
            if is_bench_marker(position):
                continue
            if not _is_position(position):
                errors.append(f"{where} has unknown position {position!r}")
            if _to_int(row.get("quarter")) not in (1, 2, 3, 4):
                errors.append(f"{where} has invalid quarter {row.get('quarter')!r}")
    return errors


def validate_quarter_scores_payload(scores_by_game) -> List[str]:
    if not isinstance(scores_by_game, Mapping):
        return ["quarter score payload must be an object keyed by game id"]

    errors: List[str] = []
    for game_key, rows in scores_by_game.items():
        if rows is None:
            continue
        if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
            errors.append(f"scores[{game_key!r}] must be a list")
            continue
        for idx, row in enumerate(rows):
            where = f"scores[{game_key!r}][{idx}]"
            if not isinstance(row, dict):
                errors.append(f"{where} must be an object")
                continue
            if _to_int(_first(row, "team_id", "teamId")) is None:
                errors.append(f"{where} missing team id")
            if _to_int(row.get("quarter")) not in (1, 2, 3, 4):
                errors.append(f"{where} has invalid quarter {row.get('quarter')!r}")
            score = _to_int(row.get("score"))
            if score is None or score < 0:
                errors.append(f"{where} score must be a non-negative integer")
    return errors


def validate_games_payload(rows) -> List[str]:
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        return ["games payload must be a list"]

    errors: List[str] = []
    for idx, row in enumerate(rows):
        if isinstance(row, int) and not isinstance(row, bool):
            continue
        if not isinstance(row, dict):
            errors.append(f"games[{idx}] must be an object or id")
            continue
        if _to_int(row.get("id")) is None:
            # gameId is the stat-row key, not the fixture key
            if row.get("gameId") is not None or row.get("game_id") is not None:
                errors.append(f"games[{idx}] uses gameId instead of id")
            else:
                errors.append(f"games[{idx}] missing game id")
        status = _first(row, "status_allows_statistics", "statusAllowsStatistics")
        if status is not None and _to_bool(status) is None:
            errors.append(f"games[{idx}] statusAllowsStatistics must be a boolean, got {status!r}")
    return errors
