"""
Unit tests for session settings, snapshots, resets and statistics.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from courtqueue.core.courts import schedule_court
from courtqueue.core.errors import FailureKind
from courtqueue.core.games import end_game, start_game
from courtqueue.core.groups import create_group
from courtqueue.core.players import register_players
from courtqueue.core.queue import enqueue_group
from courtqueue.core.session import (
    export_snapshot,
    get_statistics,
    new_session,
    reset_all,
    restore_snapshot,
    update_settings,
)
from courtqueue.models import GameMode, QueuedGroup, RotationRule
from tests.utils import DOUBLES_NAMES, queue_players


def test_new_session_defaults(state):
    assert state.settings.num_courts == 2
    assert state.settings.game_mode == GameMode.DOUBLES
    assert state.settings.game_duration == 15
    assert state.settings.rotation_rule == RotationRule.MANUAL
    assert [court.id for court in state.courts] == [1, 2]
    assert state.queue == []
    assert state.game_history == []


def test_update_settings_resizes_courts(state):
    result = update_settings(state, {"numCourts": 4, "rotation_rule": "losersRotate"})

    assert result
    assert [court.id for court in state.courts] == [1, 2, 3, 4]
    assert state.settings.rotation_rule == RotationRule.LOSERS_ROTATE


def test_update_settings_rejects_invalid_values(state):
    with pytest.raises(ValidationError):
        update_settings(state, {"numCourts": 11})
    with pytest.raises(ValueError):
        update_settings(state, {"courtColour": "blue"})

    assert state.settings.num_courts == 2


def test_update_settings_keeps_busy_courts(state, now):
    queue_players(state, DOUBLES_NAMES, now)
    start_game(state, 2, now)

    result = update_settings(state, {"numCourts": 1})

    assert result.failure == FailureKind.COURT_NOT_IDLE
    assert len(state.courts) == 2


def test_update_settings_game_mode_needs_empty_courts(state, now):
    queue_players(state, DOUBLES_NAMES, now)
    start_game(state, 1, now)

    assert update_settings(state, {"gameMode": "singles"}).failure == FailureKind.COURT_NOT_IDLE

    end_game(state, 1, now + timedelta(minutes=10))
    assert update_settings(state, {"gameMode": "singles"})
    assert state.players_needed == 2


def test_snapshot_round_trip(state, now):
    register_players(state, ["Ann", "Ben"])
    group = create_group(state, "Pair", ["Ann", "Ben"], now).value
    enqueue_group(state, group.id, now)
    queue_players(state, DOUBLES_NAMES, now)
    start_game(state, 1, now)
    schedule_court(state, 2, 1, "League", now)

    snapshot = export_snapshot(state)
    restored = restore_snapshot(snapshot)

    assert restored.model_dump() == state.model_dump()
    assert "registeredPlayers" in snapshot
    assert "courtSchedules" in snapshot
    assert snapshot["queue"][0]["type"] == "player"


def test_snapshot_keeps_queue_entry_types(state, now):
    queue_players(state, ["Eve"], now)
    register_players(state, ["Ann", "Ben"])
    group = create_group(state, "Pair", ["Ann", "Ben"], now).value
    enqueue_group(state, group.id, now)

    restored = restore_snapshot(export_snapshot(state))

    assert [entry.type for entry in restored.queue] == ["player", "group"]
    assert isinstance(restored.queue[1], QueuedGroup)


def test_reset_all(state, now):
    queue_players(state, DOUBLES_NAMES, now)
    start_game(state, 1, now)
    end_game(state, 1, now + timedelta(minutes=10))
    schedule_court(state, 2, 1, "League", now)

    assert reset_all(state)

    assert state.model_dump() == new_session().model_dump()


def test_statistics(state, now):
    queue_players(state, DOUBLES_NAMES, now)
    start_game(state, 1, now)
    end_game(state, 1, now + timedelta(minutes=10))
    start_game(state, 1, now + timedelta(minutes=10))
    end_game(state, 1, now + timedelta(minutes=25))

    stats = get_statistics(state)

    assert stats["total_games"] == 2
    assert stats["total_play_time"] == 25
    assert stats["average_game_time"] == 13
    assert stats["total_players"] == 4
    assert [game.duration for game in stats["recent_games"]] == [15, 10]


def test_statistics_for_empty_session(state):
    stats = get_statistics(state)

    assert stats["total_games"] == 0
    assert stats["average_game_time"] == 0
    assert stats["recent_games"] == []
