import logging
from datetime import datetime

from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.models import MAX_GROUP_SIZE, MIN_GROUP_SIZE, Group, QueuedGroup, SessionState

logger = logging.getLogger(__name__)


def _next_group_id(state: SessionState, now: datetime) -> int:
    group_id = int(now.timestamp() * 1000)
    taken = {group.id for group in state.groups}
    while group_id in taken:
        group_id += 1
    return group_id


def create_group(state: SessionState, name: str, players: list[str], now: datetime) -> OperationResult:
    """
    Create a named group of 2-4 registered players.

    A group smaller than the players needed for a game is allowed; the queue
    fills the remaining spots with individuals when the group reaches the head.
    """
    trimmed_name = name.strip()
    if not trimmed_name:
        return OperationResult.fail(FailureKind.INVALID_NAME, "Group name is required")

    members = [player.strip() for player in players]
    if not MIN_GROUP_SIZE <= len(members) <= MAX_GROUP_SIZE:
        return OperationResult.fail(
            FailureKind.GROUP_SIZE_MISMATCH,
            f"A group needs {MIN_GROUP_SIZE}-{MAX_GROUP_SIZE} players, got {len(members)}",
        )
    if len(set(members)) != len(members):
        return OperationResult.fail(FailureKind.DUPLICATE_PLAYER, "A player is listed twice")

    unknown = [player for player in members if player not in state.registered_players]
    if unknown:
        return OperationResult.fail(FailureKind.PLAYER_NOT_FOUND, f"Not registered: {', '.join(unknown)}")

    grouped = {player for group in state.groups for player in group.players}
    already_grouped = [player for player in members if player in grouped]
    if already_grouped:
        return OperationResult.fail(
            FailureKind.PLAYER_ALREADY_IN_GROUP,
            f"Already in a group: {', '.join(already_grouped)}",
        )

    group = Group(id=_next_group_id(state, now), name=trimmed_name, players=members)
    state.groups.append(group)
    logger.info("Created group %s (%s) with %s", group.name, group.id, ", ".join(members))
    return OperationResult.success(group)


def delete_group(state: SessionState, group_id: int) -> OperationResult:
    """Delete a group and drop its queue entry, if any."""
    if state.get_group(group_id) is None:
        return OperationResult.fail(FailureKind.GROUP_NOT_FOUND, f"Group {group_id} does not exist")

    state.groups = [group for group in state.groups if group.id != group_id]
    state.queue = [
        entry for entry in state.queue
        if not (isinstance(entry, QueuedGroup) and entry.id == group_id)
    ]
    logger.info("Deleted group %s", group_id)
    return OperationResult.success()
