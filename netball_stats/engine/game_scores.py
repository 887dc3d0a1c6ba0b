"""Game scores reconstructed from position stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from ..exceptions import InputShapeError
from ..models.stat_record import QUARTERS, StatRecord
from .deduplicator import StatDeduplicator


@dataclass
class GameScores:
    """Goals for and against per quarter, and the final totals."""

    quarter_scores: Dict[int, Tuple[int, int]] = field(
        default_factory=lambda: {q: (0, 0) for q in QUARTERS}
    )

    @property
    def final_score(self) -> Tuple[int, int]:
        return (
            sum(f for f, _ in self.quarter_scores.values()),
            sum(a for _, a in self.quarter_scores.values()),
        )

    def to_dict(self) -> dict:
        goals_for, goals_against = self.final_score
        return {
            "quarter_scores": {
                str(q): {"for": f, "against": a} for q, (f, a) in self.quarter_scores.items()
            },
            "final_score": {"for": goals_for, "against": goals_against},
        }


def calculate_game_scores(game_id: int, stats: Iterable[StatRecord], keep: str = "first") -> GameScores:
    """
    Sum goals for and against across every position in each quarter.

    Stats are deduplicated first so a slot recorded twice counts once.
    """
    if isinstance(stats, (str, bytes)) or not isinstance(stats, Iterable):
        raise InputShapeError(f"stats must be a list of StatRecord, got {type(stats).__name__}")
    deduped = StatDeduplicator(keep=keep).deduplicate({game_id: list(stats)})

    scores = GameScores()
    for stat in deduped.records():
        goals_for, goals_against = scores.quarter_scores[stat.quarter]
        scores.quarter_scores[stat.quarter] = (goals_for + stat.goals_for, goals_against + stat.goals_against)
    return scores
