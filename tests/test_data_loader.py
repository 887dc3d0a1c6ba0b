"""Tests for parsing collaborator rows."""

import json

import pandas as pd
import pytest

from netball_stats.data.loader import DataLoader
from netball_stats.exceptions import InputShapeError
from netball_stats.models import Position


def test_load_stats_reads_camel_case_rows():
    payload = {
        "5": [
            {
                "id": 31,
                "gameId": 5,
                "teamId": 100,
                "position": "GS",
                "quarter": 2,
                "goalsFor": 6,
                "missedGoals": 2,
                "badPass": 1,
                "rating": 7.5,
            }
        ]
    }
    stats = DataLoader.load_stats_by_game(payload)

    record = stats[5][0]
    assert record.game_id == 5
    assert record.team_id == 100
    assert record.record_id == 31
    assert record.position is Position.GOAL_SHOOTER
    assert record.goals_for == 6
    assert record.missed_goals == 2
    assert record.bad_pass == 1
    assert record.goals_against == 0
    assert record.rating == 7.5


def test_load_stats_skips_legacy_rows_and_fills_game_id():
    payload = {
        5: [
            {"position": None, "quarter": 1, "goalsFor": 20},
            {"position": "gk", "quarter": 4, "goals_against": 3, "intercepts": None},
        ]
    }
    stats = DataLoader.load_stats_by_game(payload)

    assert len(stats[5]) == 1
    assert stats[5][0].game_id == 5
    assert stats[5][0].position is Position.GOAL_KEEPER
    assert stats[5][0].intercepts == 0


def test_load_stats_keeps_embedded_game_id_for_integrity_check():
    stats = DataLoader.load_stats_by_game({5: [{"gameId": 6, "position": "GA", "quarter": 1}]})
    assert stats[5][0].game_id == 6


def test_load_stats_rejects_malformed_rows():
    with pytest.raises(InputShapeError):
        DataLoader.load_stats_by_game({5: [{"position": "XX", "quarter": 1}]})
    with pytest.raises(InputShapeError):
        DataLoader.load_stats_by_game({5: [{"position": "GS", "quarter": 5}]})
    with pytest.raises(InputShapeError):
        DataLoader.load_stats_by_game({5: [{"position": "GS", "quarter": 1, "goalsFor": "lots"}]})
    with pytest.raises(InputShapeError):
        DataLoader.load_stats_by_game([{"position": "GS", "quarter": 1}])


def test_load_rosters_skips_bench_and_empty_slots():
    payload = {
        "8": [
            {"quarter": 1, "position": "C", "playerId": 3},
            {"quarter": 1, "position": "bench", "playerId": 4},
            {"quarter": 2, "position": "WD", "playerId": None},
        ]
    }
    rosters = DataLoader.load_rosters_by_game(payload)

    assert len(rosters[8]) == 1
    entry = rosters[8][0]
    assert entry.player_id == 3
    assert entry.position is Position.CENTRE
    assert entry.game_id is None


def test_load_quarter_scores():
    scores = DataLoader.load_quarter_scores_by_game({"2": [{"teamId": 100, "quarter": 3, "score": 11}]})
    assert scores[2][0].game_id == 2
    assert scores[2][0].score == 11

    with pytest.raises(InputShapeError):
        DataLoader.load_quarter_scores_by_game({"2": [{"teamId": 100, "quarter": 3, "score": -1}]})


def test_load_players_and_games():
    players = DataLoader.load_players([{"id": 1, "displayName": "Ava"}, {"id": 2}])
    assert [p.id for p in players] == [1, 2]
    assert players[0].display_name == "Ava"

    games = DataLoader.load_games([{"id": 4, "homeTeamId": 100, "awayTeamId": 200}, 5])
    assert games[0].opponent_of(100) == 200
    assert games[1].id == 5

    with pytest.raises(InputShapeError):
        DataLoader.load_games([{"gameId": 4}])


def test_stats_frame_to_partitions():
    frame = pd.DataFrame(
        [
            {"game_id": 1, "position": "GS", "quarter": 1, "goals_for": 4, "rating": None},
            {"game_id": 1, "position": "GA", "quarter": 1, "goals_for": 2, "rating": 6.0},
            {"game_id": 2, "position": "GS", "quarter": 3, "goals_for": 5, "rating": None},
        ]
    )
    stats = DataLoader.stats_frame_to_partitions(frame)

    assert sorted(stats) == [1, 2]
    assert [s.goals_for for s in stats[1]] == [4, 2]
    assert stats[1][0].rating is None
    assert stats[1][1].rating == 6.0


def test_load_payload_from_json(tmp_path):
    path = tmp_path / "season.json"
    path.write_text(
        json.dumps(
            {
                "players": [{"id": 1, "displayName": "Ava"}],
                "stats": {"3": [{"gameId": 3, "position": "GS", "quarter": 1, "goalsFor": 4}]},
                "rosters": {"3": [{"gameId": 3, "position": "GS", "quarter": 1, "playerId": 1}]},
                "quarterScores": {"3": [{"teamId": 9, "quarter": 1, "score": 4}]},
            }
        )
    )
    payload = DataLoader.load_payload_from_json(str(path))

    assert payload["players"][0].id == 1
    assert payload["stats_by_game"][3][0].goals_for == 4
    assert payload["rosters_by_game"][3][0].game_id == 3
    assert payload["quarter_scores_by_game"][3][0].team_id == 9
    assert payload["games"] is None


def test_load_games_parses_status_flag_strings():
    games = DataLoader.load_games(
        [
            {"id": 1, "statusAllowsStatistics": "false"},
            {"id": 2, "statusAllowsStatistics": "True"},
            {"id": 3, "status_allows_statistics": False},
            {"id": 4},
        ]
    )
    assert [g.status_allows_statistics for g in games] == [False, True, False, True]

    with pytest.raises(InputShapeError):
        DataLoader.load_games([{"id": 1, "statusAllowsStatistics": "forfeit"}])
