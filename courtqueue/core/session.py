import logging
from typing import Any

from courtqueue.core.config import settings
from courtqueue.core.courts import initialize_courts
from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.core.wait_time import round_half_up
from courtqueue.models import SessionSettings, SessionState

logger = logging.getLogger(__name__)


def default_settings() -> SessionSettings:
    return SessionSettings(
        num_courts=settings.DEFAULT_NUM_COURTS,
        game_mode=settings.DEFAULT_GAME_MODE,
        game_duration=settings.DEFAULT_GAME_DURATION,
    )


def new_session() -> SessionState:
    """Create an empty session with an idle court pool."""
    state = SessionState(settings=default_settings())
    initialize_courts(state)
    return state


def _normalize_settings_keys(changes: dict[str, Any]) -> dict[str, Any]:
    by_alias = {field.alias: name for name, field in SessionSettings.model_fields.items() if field.alias}
    return {by_alias.get(key, key): value for key, value in changes.items()}


def update_settings(state: SessionState, changes: dict[str, Any]) -> OperationResult:
    """
    Merge a partial settings update and resize the court pool to match.

    Keys may be snake_case field names or their camelCase aliases. Invalid
    values raise ``pydantic.ValidationError`` before anything changes.
    """
    changes = _normalize_settings_keys(changes)
    unknown = set(changes) - set(SessionSettings.model_fields)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

    updated = SessionSettings.model_validate({**state.settings.model_dump(), **changes})

    if updated.num_courts < state.settings.num_courts:
        removed_busy = [
            court.id for court in state.courts
            if court.id > updated.num_courts and court.players
        ]
        if removed_busy:
            return OperationResult.fail(
                FailureKind.COURT_NOT_IDLE,
                f"Courts in use cannot be removed: {', '.join(map(str, removed_busy))}",
            )

    if updated.game_mode != state.settings.game_mode and any(court.players for court in state.courts):
        return OperationResult.fail(
            FailureKind.COURT_NOT_IDLE, "Game mode can only change while every court is empty"
        )

    state.settings = updated
    initialize_courts(state)
    logger.info("Settings updated: %s", ", ".join(sorted(changes)) or "no changes")
    return OperationResult.success(updated)


def reset_all(state: SessionState) -> OperationResult:
    """Wipe queue, players, groups, history and rentals back to a fresh session."""
    fresh = new_session()
    for field in SessionState.model_fields:
        setattr(state, field, getattr(fresh, field))
    logger.info("Session reset")
    return OperationResult.success()


def export_snapshot(state: SessionState) -> dict[str, Any]:
    """Full session state as JSON-compatible data, keyed the way it is persisted."""
    return state.model_dump(mode="json", by_alias=True)


def restore_snapshot(data: dict[str, Any]) -> SessionState:
    state = SessionState.model_validate(data)
    initialize_courts(state)
    return state


def get_statistics(state: SessionState, recent_limit: int = 10) -> dict[str, Any]:
    total_games = len(state.game_history)
    total_play_time = sum(game.duration for game in state.game_history)

    return {
        "total_games": total_games,
        "total_play_time": total_play_time,
        "average_game_time": round_half_up(total_play_time / total_games) if total_games else 0,
        "total_players": len(state.registered_players),
        "recent_games": state.game_history[:recent_limit],
    }
