import logging
from typing import Iterable

from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.models import SKILL_VALUES, Player, SessionState, SkillLevel

logger = logging.getLogger(__name__)


def skill_of(name: str, registered_players: dict[str, Player]) -> SkillLevel:
    """Skill level of a player, treating unknown players as intermediate."""
    player = registered_players.get(name)
    return player.skill_level if player else SkillLevel.INTERMEDIATE


def skill_value(name: str, registered_players: dict[str, Player]) -> int:
    return SKILL_VALUES[skill_of(name, registered_players)]


def ensure_registered(state: SessionState, name: str) -> bool:
    """Register a player with default stats if unseen. Returns True when added."""
    if name in state.registered_players:
        return False
    state.registered_players[name] = Player()
    logger.debug("Registered player %s", name)
    return True


def register_players(state: SessionState, names: Iterable[str]) -> OperationResult:
    """Bulk-register players, one name per entry; blank names are ignored."""
    cleaned = [name.strip() for name in names]
    cleaned = [name for name in cleaned if name]
    if not cleaned:
        return OperationResult.fail(FailureKind.INVALID_NAME, "At least one player name is required")

    added: list[str] = []
    skipped: list[str] = []
    for name in cleaned:
        if name in added or not ensure_registered(state, name):
            skipped.append(name)
        else:
            added.append(name)

    logger.info("Bulk registration added %d player(s), skipped %d", len(added), len(skipped))
    return OperationResult.success({"added": added, "skipped": skipped})


def set_skill_level(state: SessionState, name: str, skill_level: SkillLevel) -> OperationResult:
    """Change the skill level of a registered player."""
    player = state.registered_players.get(name)
    if player is None:
        return OperationResult.fail(FailureKind.PLAYER_NOT_FOUND, f"{name} is not registered")

    player.skill_level = SkillLevel(skill_level)
    return OperationResult.success()


def record_game_stats(state: SessionState, players: Iterable[str], duration: int) -> None:
    for name in players:
        player = state.registered_players.get(name)
        if player is None:
            continue
        player.games_played += 1
        player.total_play_time += duration
