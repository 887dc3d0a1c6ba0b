"""Statistics reconstruction and quarter projection engine."""

from .aggregator import PlayerStatAggregator, aggregate_player_stats
from .deduplicator import DedupedStats, StatDeduplicator, deduplicate_stats
from .game_scores import GameScores, calculate_game_scores
from .position_averages import PositionAverages, calculate_position_averages
from .projector import QuarterScoreProjector, project_quarter_breakdown
from .rating import NEUTRAL_RATING, RatingAverager
from .roster_index import RosterIndex

__all__ = [
    "DedupedStats",
    "GameScores",
    "NEUTRAL_RATING",
    "PlayerStatAggregator",
    "PositionAverages",
    "QuarterScoreProjector",
    "RatingAverager",
    "RosterIndex",
    "StatDeduplicator",
    "aggregate_player_stats",
    "calculate_game_scores",
    "calculate_position_averages",
    "deduplicate_stats",
    "project_quarter_breakdown",
]
