import logging
from datetime import datetime

from courtqueue.core.config import settings
from courtqueue.core.courts import is_court_available, reset_court
from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.core.matchmaking import NextGame, plan_next_game, select_court, uniform_skill
from courtqueue.core.players import record_game_stats
from courtqueue.core.team_balancing import balance_doubles_teams, split_teams
from courtqueue.models import (
    Court,
    GameRecord,
    QueuedGroup,
    QueuedPlayer,
    RotationRule,
    SessionState,
)

logger = logging.getLogger(__name__)


def _check_next_game(state: SessionState) -> tuple[NextGame | None, OperationResult | None]:
    next_game, failure = plan_next_game(state.queue, state.players_needed)
    if next_game is None:
        return None, OperationResult.fail(failure, "The head of the queue cannot form a game")

    if state.settings.strict_skill_matching and uniform_skill(next_game.players, state.registered_players) is None:
        return None, OperationResult.fail(
            FailureKind.SKILL_MISMATCH, "Strict skill matching requires one skill level per game"
        )
    return next_game, None


def _commit_game(state: SessionState, court: Court, next_game: NextGame, now: datetime) -> None:
    if state.settings.auto_team_balancing and len(next_game.players) == 4:
        teams = balance_doubles_teams(next_game.players, state.registered_players)
        team1, team2 = teams["team1"], teams["team2"]
    else:
        team1, team2 = split_teams(next_game.players)

    court.players = list(next_game.players)
    court.active = True
    court.start_time = now
    court.timer_elapsed = 0
    court.timer_paused = False
    court.group_info = next_game.group_info
    court.team1 = team1
    court.team2 = team2
    court.team1_score = 0
    court.team2_score = 0
    state.queue = state.queue[next_game.entries_consumed:]

    logger.info(
        "Game started on court %s (%s): %s", court.id, next_game.kind, ", ".join(court.players)
    )


def start_game(state: SessionState, court_id: int, now: datetime) -> OperationResult:
    """Move the next eligible players from the queue onto a specific court."""
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    if court.active or court.players:
        return OperationResult.fail(FailureKind.COURT_NOT_IDLE, f"Court {court_id} is in use")
    if not is_court_available(state, court_id, now):
        return OperationResult.fail(FailureKind.COURT_UNAVAILABLE, f"Court {court_id} is rented")

    next_game, rejection = _check_next_game(state)
    if rejection is not None:
        logger.debug("Could not start a game on court %s: %s", court_id, rejection.failure)
        return rejection

    _commit_game(state, court, next_game, now)
    return OperationResult.success(court)


def start_next_game(state: SessionState, now: datetime) -> OperationResult:
    """Start the next eligible game on the best available court."""
    next_game, rejection = _check_next_game(state)
    if rejection is not None:
        return rejection

    court = select_court(state, next_game.players, now)
    if court is None:
        return OperationResult.fail(
            FailureKind.NO_COURT_AVAILABLE, "All courts are in use or rented"
        )

    _commit_game(state, court, next_game, now)
    return OperationResult.success(court)


def assign_player_to_court(state: SessionState, court_id: int, name: str, now: datetime) -> OperationResult:
    """
    Put a single registered player on an idle court by hand.

    The player leaves the queue if queued individually. Once the court holds
    as many players as a game needs, the game starts.
    """
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    if court.active or len(court.players) >= state.players_needed:
        return OperationResult.fail(FailureKind.COURT_NOT_IDLE, f"Court {court_id} is full")
    if not is_court_available(state, court_id, now):
        return OperationResult.fail(FailureKind.COURT_UNAVAILABLE, f"Court {court_id} is rented")
    if name not in state.registered_players:
        return OperationResult.fail(FailureKind.PLAYER_NOT_FOUND, f"{name} is not registered")
    if name in state.players_on_courts():
        return OperationResult.fail(FailureKind.PLAYER_CURRENTLY_PLAYING, f"{name} is on a court")
    if any(isinstance(entry, QueuedGroup) and name in entry.players for entry in state.queue):
        return OperationResult.fail(FailureKind.PLAYER_ALREADY_IN_GROUP, f"{name} is queued with a group")

    state.queue = [
        entry for entry in state.queue
        if not (isinstance(entry, QueuedPlayer) and entry.name == name)
    ]
    court.players = court.players + [name]

    if len(court.players) == state.players_needed:
        court.active = True
        court.start_time = now
        court.team1, court.team2 = split_teams(court.players)
        logger.info("Game started on court %s (manual): %s", court.id, ", ".join(court.players))
    return OperationResult.success(court)


def remove_player_from_court(state: SessionState, court_id: int, name: str, now: datetime) -> OperationResult:
    """Take a hand-assigned player off a court that has not started and requeue them at the tail."""
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    if court.active:
        return OperationResult.fail(FailureKind.COURT_NOT_IDLE, f"Court {court_id} has a game in progress")
    if name not in court.players:
        return OperationResult.fail(FailureKind.PLAYER_NOT_FOUND, f"{name} is not on court {court_id}")

    court.players = [player for player in court.players if player != name]
    state.queue = state.queue + [QueuedPlayer(name=name, joined_at=now)]
    logger.info("%s removed from court %s and requeued", name, court_id)
    return OperationResult.success(court)


def game_duration_minutes(court: Court, now: datetime) -> int:
    if court.timer_elapsed:
        return int(court.timer_elapsed // 60_000)
    start_time = court.start_time or now
    return max(0, int((now - start_time).total_seconds() // 60))


def _losing_team(court: Court) -> list[str] | None:
    if court.team1_score == court.team2_score:
        return None
    return court.team1 if court.team1_score < court.team2_score else court.team2


def _returning_entries(state: SessionState, court: Court, now: datetime) -> list[QueuedPlayer | QueuedGroup]:
    rule = state.settings.rotation_rule
    group_info = court.group_info

    if group_info is not None and state.get_group(group_info.id) is not None:
        members = [name for name in court.players if name in group_info.players]
        fill_ins = [name for name in court.players if name not in group_info.players]
        entries: list[QueuedPlayer | QueuedGroup] = [
            QueuedGroup(id=group_info.id, name=group_info.name, players=members, joined_at=now)
        ]
        entries.extend(QueuedPlayer(name=name, joined_at=now) for name in fill_ins)
        return entries

    returning = list(court.players)
    if rule == RotationRule.LOSERS_ROTATE:
        losers = _losing_team(court)
        if losers is not None:
            returning = [name for name in court.players if name in losers]
    return [QueuedPlayer(name=name, joined_at=now) for name in returning]


def end_game(state: SessionState, court_id: int, now: datetime) -> OperationResult:
    """
    Finish the game on a court: record it, update stats and rotate players.

    Under ``losersRotate`` only the losing team goes back to the queue when the
    scores are decisive; a tie, or no score at all, rotates everybody.
    Group games always return the whole group.
    """
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    if not court.active:
        return OperationResult.fail(FailureKind.COURT_NOT_ACTIVE, f"Court {court_id} has no game in progress")

    duration = game_duration_minutes(court, now)
    record = GameRecord(
        court_id=court.id,
        players=list(court.players),
        duration=duration,
        timestamp=now,
        game_mode=state.settings.game_mode,
        team1_score=court.team1_score,
        team2_score=court.team2_score,
    )
    state.game_history = [record, *state.game_history][:settings.GAME_HISTORY_LIMIT]
    record_game_stats(state, court.players, duration)

    returning = _returning_entries(state, court, now)
    state.queue = state.queue + returning
    reset_court(court)

    logger.info(
        "Game ended on court %s after %d min, %d queue entr%s returned",
        court_id, duration, len(returning), "y" if len(returning) == 1 else "ies",
    )
    return OperationResult.success(record)
