"""End-to-end season statistics pipeline."""

from .season import SeasonStatsConfig, SeasonStatsPipeline, SeasonStatsReport, run_season_stats

__all__ = ["SeasonStatsConfig", "SeasonStatsPipeline", "SeasonStatsReport", "run_season_stats"]
