import math
from datetime import datetime

from courtqueue.core.config import settings
from courtqueue.models import Court, GameRecord, QueuedGroup, QueuedPlayer, SessionState, entry_players


def round_half_up(value: float) -> int:
    """Round .5 away from zero for the non-negative values used here."""
    return math.floor(value + 0.5)


def average_game_duration(game_history: list[GameRecord]) -> int:
    """Mean duration in minutes of the most recent games, newest first in history."""
    if not game_history:
        return settings.DEFAULT_WAIT_MINUTES

    recent = game_history[:settings.WAIT_TIME_SAMPLE_SIZE]
    return round_half_up(sum(game.duration for game in recent) / len(recent))


def players_ahead(queue: list[QueuedPlayer | QueuedGroup], queue_index: int) -> int:
    return sum(len(entry_players(entry)) for entry in queue[:queue_index])


def calculate_wait_time(
    queue_index: int,
    queue: list[QueuedPlayer | QueuedGroup],
    courts: list[Court],
    players_per_game: int,
    avg_duration: int,
    now: datetime,
) -> int:
    """Estimated minutes until the entry at ``queue_index`` gets a court."""
    games_ahead = math.ceil(players_ahead(queue, queue_index) / players_per_game)
    if not courts:
        return round_half_up(games_ahead * avg_duration)

    idle_courts = sum(1 for court in courts if not court.active)
    if idle_courts > 0:
        return round_half_up(math.ceil(games_ahead / idle_courts) * avg_duration)

    elapsed = [
        int((now - court.start_time).total_seconds() // 60) if court.start_time else 0
        for court in courts
        if court.active
    ]
    mean_elapsed = sum(elapsed) / len(elapsed) if elapsed else 0
    until_court_free = max(0, avg_duration - mean_elapsed)
    rounds = math.ceil(games_ahead / len(courts))
    return round_half_up(until_court_free + rounds * avg_duration)


def estimated_wait(state: SessionState, queue_index: int, now: datetime) -> int:
    return calculate_wait_time(
        queue_index,
        state.queue,
        state.courts,
        state.players_needed,
        average_game_duration(state.game_history),
        now,
    )


def format_wait_time(minutes: int) -> str:
    if minutes == 0:
        return "Up next!"
    if minutes < 60:
        return f"~{minutes}m"

    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"~{hours}h"
    return f"~{hours}h {mins}m"
