"""
Allocation engine: decides who plays next and on which court.

Only the head of the queue is ever considered. A group is never split and
never padded past the number of players a game needs.
"""

import logging
import math
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel

from courtqueue.core.courts import is_court_available, rental_active
from courtqueue.core.errors import FailureKind
from courtqueue.core.players import skill_of, skill_value
from courtqueue.models import (
    Court,
    GroupInfo,
    Player,
    QueuedGroup,
    QueuedPlayer,
    SessionState,
    SkillLevel,
)

logger = logging.getLogger(__name__)


class NextGame(BaseModel):
    kind: Literal["group", "partial_group", "individual", "mixed"]
    players: list[str]
    entries_consumed: int
    group_info: Optional[GroupInfo] = None


def plan_next_game(
    queue: list[QueuedPlayer | QueuedGroup], players_needed: int
) -> tuple[NextGame | None, FailureKind | None]:
    """Work out the next game from the head of the queue, or why there is none."""
    if not queue:
        return None, FailureKind.INSUFFICIENT_QUEUE_FOR_GAME

    head = queue[0]
    if isinstance(head, QueuedGroup):
        group_size = len(head.players)
        group_info = GroupInfo(id=head.id, name=head.name, players=list(head.players))

        if group_size == players_needed:
            return NextGame(
                kind="group",
                players=list(head.players),
                entries_consumed=1,
                group_info=group_info,
            ), None
        if group_size > players_needed:
            return None, FailureKind.GROUP_SIZE_MISMATCH

        # Partial group: fill the shortfall with the individuals right behind it
        players = list(head.players)
        consumed = 1
        for entry in queue[1:]:
            if len(players) == players_needed or not isinstance(entry, QueuedPlayer):
                break
            players.append(entry.name)
            consumed += 1

        if len(players) < players_needed:
            return None, FailureKind.INSUFFICIENT_QUEUE_FOR_GAME
        return NextGame(
            kind="partial_group",
            players=players,
            entries_consumed=consumed,
            group_info=group_info,
        ), None

    individuals: list[str] = []
    blocking_group: QueuedGroup | None = None
    for entry in queue:
        if len(individuals) == players_needed:
            break
        if isinstance(entry, QueuedGroup):
            blocking_group = entry
            break
        individuals.append(entry.name)

    if len(individuals) == players_needed:
        return NextGame(kind="individual", players=individuals, entries_consumed=players_needed), None

    if blocking_group is not None and len(individuals) + len(blocking_group.players) == players_needed:
        return NextGame(
            kind="mixed",
            players=individuals + list(blocking_group.players),
            entries_consumed=len(individuals) + 1,
        ), None

    return None, FailureKind.INSUFFICIENT_QUEUE_FOR_GAME


def find_next_game(state: SessionState) -> NextGame | None:
    next_game, _ = plan_next_game(state.queue, state.players_needed)
    return next_game


def uniform_skill(players: list[str], registered_players: dict[str, Player]) -> SkillLevel | None:
    """The shared skill level of all players, or None when they differ."""
    skills = {skill_of(name, registered_players) for name in players}
    if len(skills) != 1:
        return None
    return skills.pop()


def select_court(
    state: SessionState,
    players: list[str],
    now: datetime,
    clear_expired: bool = True,
) -> Court | None:
    """
    Pick an empty, unrented court for ``players``, scanning courts by id.

    With court skill assignment enabled, a court reserved for the players'
    common skill level wins, then an unrestricted court, then any eligible one.
    ``clear_expired=False`` keeps the scan free of side effects.
    """
    eligible = []
    for court in sorted(state.courts, key=lambda c: c.id):
        # Courts being filled by hand are not free either
        if court.active or court.players:
            continue
        if clear_expired:
            available = is_court_available(state, court.id, now)
        else:
            available = not rental_active(state.court_schedules.get(court.id), now)
        if available:
            eligible.append(court)

    if not eligible:
        return None

    if state.settings.enable_court_skill_assignment:
        skill = uniform_skill(players, state.registered_players)
        if skill is not None:
            matching = next((c for c in eligible if c.assigned_skill_level == skill), None)
            if matching is not None:
                return matching
        unrestricted = next((c for c in eligible if c.assigned_skill_level is None), None)
        if unrestricted is not None:
            return unrestricted

    return eligible[0]


def get_average_skill(players: list[str], registered_players: dict[str, Player]) -> float:
    if not players:
        return 0.0
    return sum(skill_value(name, registered_players) for name in players) / len(players)


def get_skill_variance(players: list[str], registered_players: dict[str, Player]) -> float:
    """Population variance of the numeric skill values."""
    if not players:
        return 0.0
    values = [skill_value(name, registered_players) for name in players]
    mean = sum(values) / len(values)
    return sum((value - mean) ** 2 for value in values) / len(values)


def get_match_quality(players: list[str], registered_players: dict[str, Player]) -> int:
    """Score skill homogeneity from 0 to 100; identical skills score 100."""
    if len(players) < 2:
        return 100

    variance = get_skill_variance(players, registered_players)
    return round(100 * math.exp(-variance / 2))


def match_quality_label(quality: int) -> str:
    if quality >= 80:
        return "Excellent Match"
    if quality >= 60:
        return "Good Match"
    if quality >= 40:
        return "Fair Match"
    return "Unbalanced"


def suggest_optimal_order(
    queue: list[QueuedPlayer | QueuedGroup], registered_players: dict[str, Player]
) -> list[QueuedPlayer | QueuedGroup]:
    """Groups first in their current order, then individuals by ascending skill."""
    groups = [entry for entry in queue if isinstance(entry, QueuedGroup)]
    individuals = [entry for entry in queue if isinstance(entry, QueuedPlayer)]
    individuals.sort(key=lambda entry: skill_value(entry.name, registered_players))
    return groups + individuals


def next_game_preview(state: SessionState, now: datetime) -> dict[str, Any] | None:
    """Describe the next game without touching state."""
    next_game = find_next_game(state)
    if next_game is None:
        return None

    registry = state.registered_players
    quality = get_match_quality(next_game.players, registry)
    court = select_court(state, next_game.players, now, clear_expired=False)

    return {
        "kind": next_game.kind,
        "players": next_game.players,
        "skills": [skill_of(name, registry) for name in next_game.players],
        "quality": quality,
        "quality_label": match_quality_label(quality),
        "group_info": next_game.group_info,
        "added_from_queue": (
            len(next_game.players) - len(next_game.group_info.players)
            if next_game.kind == "partial_group" else 0
        ),
        "target_court_id": court.id if court else None,
    }
