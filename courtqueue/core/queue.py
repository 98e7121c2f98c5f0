import logging
from datetime import datetime

from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.core.matchmaking import suggest_optimal_order
from courtqueue.core.players import ensure_registered
from courtqueue.models import QueuedGroup, QueuedPlayer, SessionState

logger = logging.getLogger(__name__)


def join_queue(state: SessionState, name: str, now: datetime) -> OperationResult:
    """Append a player to the tail of the queue, registering them if unseen."""
    trimmed_name = name.strip()
    if not trimmed_name:
        return OperationResult.fail(FailureKind.INVALID_NAME, "Player name is required")

    if trimmed_name in state.queued_players():
        logger.debug("Rejected join for %s: already queued", trimmed_name)
        return OperationResult.fail(FailureKind.DUPLICATE_PLAYER, f"{trimmed_name} is already in the queue")

    if trimmed_name in state.players_on_courts():
        logger.debug("Rejected join for %s: currently playing", trimmed_name)
        return OperationResult.fail(FailureKind.PLAYER_CURRENTLY_PLAYING, f"{trimmed_name} is on a court")

    ensure_registered(state, trimmed_name)
    state.queue.append(QueuedPlayer(name=trimmed_name, joined_at=now))
    logger.info("%s joined the queue at position %d", trimmed_name, len(state.queue))
    return OperationResult.success(len(state.queue) - 1)


def leave_queue(state: SessionState, index: int) -> OperationResult:
    if not 0 <= index < len(state.queue):
        return OperationResult.fail(FailureKind.INDEX_OUT_OF_RANGE, f"No queue entry at {index}")

    removed = state.queue.pop(index)
    return OperationResult.success(removed)


def reorder_queue(state: SessionState, from_index: int, to_index: int) -> OperationResult:
    """Move one entry, keeping the relative order of every other entry."""
    size = len(state.queue)
    if not 0 <= from_index < size:
        return OperationResult.fail(FailureKind.INDEX_OUT_OF_RANGE, f"No queue entry at {from_index}")

    to_index = max(0, min(to_index, size - 1))
    entry = state.queue.pop(from_index)
    state.queue.insert(to_index, entry)
    return OperationResult.success()


def enqueue_group(state: SessionState, group_id: int, now: datetime) -> OperationResult:
    """
    Queue a whole group as a single entry.

    Bare entries for the group's members are dropped first so that nobody is
    queued twice.
    """
    group = state.get_group(group_id)
    if group is None:
        return OperationResult.fail(FailureKind.GROUP_NOT_FOUND, f"Group {group_id} does not exist")

    if any(isinstance(entry, QueuedGroup) and entry.id == group_id for entry in state.queue):
        return OperationResult.fail(FailureKind.DUPLICATE_PLAYER, f"Group {group.name} is already queued")

    on_court = state.players_on_courts()
    playing = [player for player in group.players if player in on_court]
    if playing:
        return OperationResult.fail(
            FailureKind.PLAYER_CURRENTLY_PLAYING,
            f"Currently playing: {', '.join(playing)}",
        )

    members = set(group.players)
    state.queue = [
        entry for entry in state.queue
        if not (isinstance(entry, QueuedPlayer) and entry.name in members)
    ]
    state.queue.append(
        QueuedGroup(id=group.id, name=group.name, players=list(group.players), joined_at=now)
    )
    logger.info("Group %s joined the queue at position %d", group.name, len(state.queue))
    return OperationResult.success(len(state.queue) - 1)


def apply_optimal_order(state: SessionState) -> OperationResult:
    """Reorder the queue for skill-balanced games: groups first, then individuals by skill."""
    state.queue = suggest_optimal_order(state.queue, state.registered_players)
    logger.info("Queue reordered by skill (%d entries)", len(state.queue))
    return OperationResult.success()
