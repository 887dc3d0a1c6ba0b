"""Statistics reconstruction and quarter projection for netball teams."""

from .exceptions import InputShapeError
from .pipeline.season import SeasonStatsConfig, SeasonStatsReport, run_season_stats

__all__ = [
    "InputShapeError",
    "SeasonStatsConfig",
    "SeasonStatsReport",
    "run_season_stats",
]
