"""Collaborator boundary: row parsing and shape validation."""

from .loader import DataLoader
from .validators import (
    require_valid,
    validate_games_payload,
    validate_players_payload,
    validate_quarter_scores_payload,
    validate_rosters_payload,
    validate_stats_payload,
)

__all__ = [
    "DataLoader",
    "require_valid",
    "validate_games_payload",
    "validate_players_payload",
    "validate_quarter_scores_payload",
    "validate_rosters_payload",
    "validate_stats_payload",
]
