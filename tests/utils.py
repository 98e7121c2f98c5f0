"""
Shared test utilities and helpers for the CourtQueue test suite.

This module contains common builders, constants and invariant checks used
across the unit, API and integration tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List
import logging

from courtqueue.core.queue import join_queue
from courtqueue.models import Player, QueuedGroup, QueuedPlayer, SessionState, SkillLevel, entry_players

# Set up logging
logger = logging.getLogger(__name__)

# Common test constants
SESSION_START = datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc)

DOUBLES_NAMES = ["Alice", "Bob", "Carol", "Dana"]


class FrozenClock:
    """A manually advanced clock used in place of the wall clock."""

    def __init__(self, start: datetime = SESSION_START):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, minutes: float = 0, hours: float = 0) -> datetime:
        self.current = self.current + timedelta(minutes=minutes, hours=hours)
        return self.current


def queue_players(state: SessionState, names: Iterable[str], now: datetime = SESSION_START) -> None:
    """Join each name to the queue, failing loudly if any join is rejected."""
    for name in names:
        result = join_queue(state, name, now)
        assert result, f"Could not queue {name}: {result.failure}"


def register_with_skills(state: SessionState, skills: Dict[str, SkillLevel]) -> None:
    """Register players directly with the given skill levels."""
    for name, skill in skills.items():
        state.registered_players[name] = Player(skill_level=skill)


def queue_labels(state: SessionState) -> List[str]:
    """Readable queue contents: bare players by name, groups as ``group:<name>``."""
    labels = []
    for entry in state.queue:
        if isinstance(entry, QueuedGroup):
            labels.append(f"group:{entry.name}")
        elif isinstance(entry, QueuedPlayer):
            labels.append(entry.name)
    return labels


def assert_queue_and_courts_disjoint(state: SessionState) -> None:
    """No queued player may be on a court, and nobody may be queued twice."""
    queued = [name for entry in state.queue for name in entry_players(entry)]
    assert len(queued) == len(set(queued)), f"Player queued twice: {queued}"
    on_courts = state.players_on_courts()
    overlap = set(queued) & on_courts
    assert not overlap, f"Players both queued and on court: {overlap}"


def assert_active_courts_full(state: SessionState) -> None:
    for court in state.courts:
        if court.active:
            assert len(court.players) == state.players_needed, f"Court {court.id} has {court.players}"
            assert court.start_time is not None
