"""Tests for projecting quarter scores onto positions."""

import pytest

from netball_stats.engine.projector import (
    QuarterScoreProjector,
    adjust_for_rounding,
    project_quarter_breakdown,
    round_half_up,
)
from netball_stats.exceptions import InputShapeError
from netball_stats.models import DataQuality, Game, Position, QuarterScore, StatRecord


GS = Position.GOAL_SHOOTER
GA = Position.GOAL_ATTACK
GD = Position.GOAL_DEFENCE
GK = Position.GOAL_KEEPER


def _scores(game_id, team_id, *per_quarter):
    return [QuarterScore(game_id, team_id, q, s) for q, s in enumerate(per_quarter, start=1) if s is not None]


def _stat(game_id, quarter, position, goals_for=0, goals_against=0, team_id=100):
    return StatRecord(
        game_id=game_id,
        position=position,
        quarter=quarter,
        goals_for=goals_for,
        goals_against=goals_against,
        team_id=team_id,
    )


@pytest.fixture
def two_games():
    games = [Game(1, home_team_id=100, away_team_id=200), Game(2, home_team_id=300, away_team_id=100)]
    scores = {
        1: _scores(1, 100, 12, 8, 10, None) + _scores(1, 200, 8, 12, 9, None),
        2: _scores(2, 100, 16, 11, None, None) + _scores(2, 300, 9, 15, None, None),
    }
    stats = {
        1: [
            _stat(1, 1, GS, goals_for=7),
            _stat(1, 1, GA, goals_for=5),
            _stat(1, 1, GK, goals_against=4),
            _stat(1, 1, GD, goals_against=4),
            _stat(1, 2, GS, goals_for=4),
            _stat(1, 2, GA, goals_for=4),
        ],
        2: [
            _stat(2, 1, GS, goals_for=10),
            _stat(2, 1, GA, goals_for=6),
            _stat(2, 1, GK, goals_against=5),
            _stat(2, 1, GD, goals_against=4),
        ],
    }
    return games, scores, stats


def test_three_game_fallback_scenario():
    scores = {
        1: [QuarterScore(1, 123, 1, 10)],
        2: [QuarterScore(2, 123, 1, 14)],
        3: [QuarterScore(3, 123, 1, 8)],
    }
    result = project_quarter_breakdown(123, scores, {}, games=[Game(1), Game(2), Game(3)])

    q1 = result[0]
    assert q1.quarter == 1
    assert q1.scored_average == pytest.approx(10.6667, abs=1e-4)
    assert round(q1.scored_average, 1) == 10.7
    assert q1.attack_percentages == {GS: 0.5, GA: 0.5}
    # 5.3 + 5.3 falls short of 10.7, so the first shooter takes the extra tenth
    assert q1.goals_for[GS] == pytest.approx(5.4)
    assert q1.goals_for[GA] == pytest.approx(5.3)
    assert q1.data_quality is DataQuality.FALLBACK
    assert q1.has_valid_data is True


def test_quarters_without_scores_are_no_data():
    result = project_quarter_breakdown(123, {1: [QuarterScore(1, 123, 1, 10)]}, {}, games=[1])
    assert [q.quarter for q in result] == [1, 2, 3, 4]
    for q in result[1:]:
        assert q.data_quality is DataQuality.NO_DATA
        assert q.has_valid_data is False
        assert q.attack_total == 0
        assert q.defence_total == 0


def test_no_scores_at_all_zeroes_every_quarter(two_games):
    games, _, stats = two_games
    result = project_quarter_breakdown(100, {}, stats, games=games)
    assert all(q.data_quality is DataQuality.NO_DATA for q in result)
    assert all(not q.has_valid_data for q in result)
    assert all(v == 0 for q in result for v in [*q.goals_for.values(), *q.goals_against.values()])


def test_complete_quarter_uses_observed_split(two_games):
    games, scores, stats = two_games
    q1 = project_quarter_breakdown(100, scores, stats, games=games)[0]

    assert q1.data_quality is DataQuality.COMPLETE
    assert q1.scored_average == pytest.approx(14.0)
    assert q1.conceded_average == pytest.approx(8.5)
    assert q1.goals_for == pytest.approx({GS: 8.5, GA: 5.5})
    assert q1.goals_against == pytest.approx({GD: 4.0, GK: 4.5})
    assert q1.games_with_quarter_data == 2


def test_complete_percentages_close_to_one(two_games):
    games, scores, stats = two_games
    for q in project_quarter_breakdown(100, scores, stats, games=games):
        if q.data_quality is DataQuality.COMPLETE:
            assert sum(q.attack_percentages.values()) == pytest.approx(1.0)
            assert sum(q.defence_percentages.values()) == pytest.approx(1.0)


def test_partial_when_some_positions_lack_history(two_games):
    games, scores, stats = two_games
    q2 = project_quarter_breakdown(100, scores, stats, games=games)[1]

    assert q2.data_quality is DataQuality.PARTIAL
    assert q2.attack_percentages == {GS: 0.5, GA: 0.5}
    assert q2.defence_percentages == pytest.approx({GD: 8 / 17, GK: 9 / 17})
    assert q2.scored_average == pytest.approx(9.5)
    assert q2.goals_for == pytest.approx({GS: 4.7, GA: 4.8})


def test_missing_game_scores_are_excluded_not_zero(two_games):
    games, scores, stats = two_games
    q3 = project_quarter_breakdown(100, scores, stats, games=games)[2]

    assert q3.scored_average == pytest.approx(10.0)
    assert q3.conceded_average == pytest.approx(9.0)
    assert q3.games_with_quarter_data == 1
    assert q3.data_quality is DataQuality.FALLBACK


def test_opponent_taken_from_fixture(two_games):
    games, scores, stats = two_games
    scores = dict(scores)
    scores[1] = scores[1] + [QuarterScore(1, 999, 1, 40)]
    q1 = project_quarter_breakdown(100, scores, stats, games=games)[0]
    assert q1.conceded_average == pytest.approx(8.5)


def test_games_disallowing_statistics_are_skipped(two_games):
    games, scores, stats = two_games
    scores = dict(scores)
    scores[3] = _scores(3, 100, 40, 40, 40, 40)
    games = games + [Game(3, home_team_id=100, away_team_id=400, status_allows_statistics=False)]
    q1 = project_quarter_breakdown(100, scores, stats, games=games)[0]
    assert q1.scored_average == pytest.approx(14.0)


def test_other_team_stats_are_ignored(two_games):
    games, scores, stats = two_games
    stats = dict(stats)
    stats[1] = stats[1] + [_stat(1, 1, GS, goals_for=30, team_id=200)]
    q1 = project_quarter_breakdown(100, scores, stats, games=games)[0]
    assert q1.goals_for[GS] == pytest.approx(8.5)


def test_games_default_to_scored_games(two_games):
    _, scores, stats = two_games
    q1 = project_quarter_breakdown(100, scores, stats)[0]
    assert q1.games_with_quarter_data == 2


def test_rerun_is_identical(two_games):
    games, scores, stats = two_games
    projector = QuarterScoreProjector()
    first = [q.to_dict() for q in projector.project(100, scores, stats, games)]
    second = [q.to_dict() for q in projector.project(100, scores, stats, games)]
    assert first == second


def test_malformed_inputs_fail_fast(two_games):
    games, scores, stats = two_games
    with pytest.raises(InputShapeError):
        project_quarter_breakdown(100, [QuarterScore(1, 100, 1, 3)], stats, games=games)
    with pytest.raises(InputShapeError):
        project_quarter_breakdown(100, {1: [{"teamId": 100, "quarter": 1, "score": 3}]}, stats, games=games)
    with pytest.raises(InputShapeError):
        project_quarter_breakdown(100, scores, stats, games=[{"gameId": 1}])


def test_quarter_without_history_borrows_season_split():
    scores = {1: _scores(1, 100, 10, 10, None, None)}
    stats = {1: [_stat(1, 1, GS, goals_for=8), _stat(1, 1, GA, goals_for=2)]}
    q1, q2 = project_quarter_breakdown(100, scores, stats, games=[1])[:2]

    assert q1.data_quality is DataQuality.PARTIAL
    assert q2.data_quality is DataQuality.FALLBACK
    assert q2.attack_percentages == pytest.approx({GS: 0.8, GA: 0.2})
    assert q2.goals_for == pytest.approx({GS: 8.0, GA: 2.0})


def test_one_sided_history_uses_season_split_for_other_side():
    scores = {1: _scores(1, 100, 10, 10, None, None) + _scores(1, 200, 6, 10, None, None)}
    stats = {
        1: [
            _stat(1, 1, GD, goals_against=1),
            _stat(1, 1, GK, goals_against=3),
            _stat(1, 2, GS, goals_for=5),
            _stat(1, 2, GA, goals_for=5),
        ]
    }
    q2 = project_quarter_breakdown(100, scores, stats, games=[Game(1, 100, 200)])[1]

    assert q2.data_quality is DataQuality.PARTIAL
    assert q2.defence_percentages == pytest.approx({GD: 0.25, GK: 0.75})
    assert q2.goals_against == pytest.approx({GD: 2.5, GK: 7.5})


def test_halves_round_up_and_pair_matches_average():
    scores = {
        1: _scores(1, 100, 10, None, None, None),
        2: _scores(2, 100, 11, None, None, None),
    }
    q1 = project_quarter_breakdown(100, scores, {}, games=[1, 2])[0]

    assert q1.scored_average == pytest.approx(10.5)
    # 5.25 rounds up to 5.3 for both; the tie goes to GS, which gives back a tenth
    assert q1.goals_for == pytest.approx({GS: 5.2, GA: 5.3})
    assert q1.goals_for[GS] + q1.goals_for[GA] == pytest.approx(10.5)


def test_uneven_split_rounds_before_adjusting():
    scores = {
        1: _scores(1, 100, 8, None, None, None),
        2: _scores(2, 100, 10, None, None, None),
    }
    stats = {1: [_stat(1, 1, GS, goals_for=1), _stat(1, 1, GA, goals_for=3)]}
    q1 = project_quarter_breakdown(100, scores, stats, games=[1, 2])[0]

    # 9 x 0.25 = 2.25 -> 2.3 and 9 x 0.75 = 6.75 -> 6.8; the larger gives back a tenth
    assert q1.goals_for == pytest.approx({GS: 2.3, GA: 6.7})
    assert q1.goals_against == {GD: 0.0, GK: 0.0}


def test_round_half_up_and_adjustment_helpers():
    assert round_half_up(2.25) == 2.3
    assert round_half_up(4.75) == 4.8
    assert round_half_up(10.6667) == 10.7
    assert round_half_up(1.2345, decimals=2) == 1.23

    assert adjust_for_rounding({GS: 5.3, GA: 5.3}, (GS, GA), 10.7) == {GS: 5.4, GA: 5.3}
    assert adjust_for_rounding({GS: 3.0, GA: 7.0}, (GS, GA), 10.0) == {GS: 3.0, GA: 7.0}
    assert adjust_for_rounding({GS: 3.0, GA: 7.0}, (GS, GA), 12.0) == {GS: 3.0, GA: 7.0}
