"""Average performance rating across rostered quarters."""

from __future__ import annotations

from .deduplicator import DedupedStats
from .roster_index import RosterIndex

# Midpoint of the 0-10 rating scale. Used when a player has no rated
# quarters; 0 would read as "worst possible" rather than "no data".
NEUTRAL_RATING = 5.0


class RatingAverager:
    """Averages the rating of every stat record in a player's rostered slots."""

    def __init__(self, neutral_rating: float = NEUTRAL_RATING):
        self.neutral_rating = neutral_rating

    def average(self, player_id: int, index: RosterIndex, stats: DedupedStats) -> float:
        """
        Compute a player's average rating.

        Args:
            player_id: Player to rate
            index: Roster assignments
            stats: Deduplicated stat records

        Returns:
            Mean of the non-null ratings over every quarter the player was
            rostered into, or the neutral rating when there are none
        """
        total = 0.0
        count = 0
        for game_id, quarter, position in index.slots_for(player_id):
            stat = stats.lookup(game_id, quarter, position)
            if stat is None or stat.rating is None:
                continue
            total += stat.rating
            count += 1

        if count == 0:
            return self.neutral_rating
        return total / count
