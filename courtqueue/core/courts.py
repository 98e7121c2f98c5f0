"""
Court pool maintenance and rental scheduling.

Rentals expire lazily: a stale schedule is only removed when somebody asks
whether the court is available.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Literal, Optional

from courtqueue.core.config import settings
from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.models import Court, CourtSchedule, SessionState, SkillLevel

logger = logging.getLogger(__name__)

DEFAULT_RENTER = "Private Rental"


def initialize_courts(state: SessionState) -> None:
    """Resize the pool to ``settings.num_courts``, keeping existing courts."""
    num_courts = state.settings.num_courts
    if len(state.courts) == num_courts:
        return

    courts = [court for court in state.courts if court.id <= num_courts]
    existing = {court.id for court in courts}
    for court_id in range(1, num_courts + 1):
        if court_id not in existing:
            courts.append(Court(id=court_id))
    state.courts = sorted(courts, key=lambda court: court.id)

    for court_id in list(state.court_schedules):
        if court_id > num_courts:
            del state.court_schedules[court_id]
    logger.info("Court pool resized to %d", num_courts)


def reset_court(court: Court) -> None:
    court.players = []
    court.active = False
    court.start_time = None
    court.timer_elapsed = 0
    court.timer_paused = False
    court.group_info = None
    court.team1 = []
    court.team2 = []
    court.team1_score = 0
    court.team2_score = 0


def rental_active(schedule: Optional[CourtSchedule], now: datetime) -> bool:
    """True while a rental still blocks the court. Never mutates."""
    return schedule is not None and now < schedule.unavailable_until


def is_court_available(state: SessionState, court_id: int, now: datetime) -> bool:
    """Check the rental schedule of a court, clearing it once it has expired."""
    schedule = state.court_schedules.get(court_id)
    if schedule is None:
        return True
    if rental_active(schedule, now):
        return False

    del state.court_schedules[court_id]
    logger.info("Rental on court %s by %s expired", court_id, schedule.rented_by)
    return True


def is_court_eligible(state: SessionState, court: Court, now: datetime) -> bool:
    return not court.active and not court.players and is_court_available(state, court.id, now)


def schedule_court(
    state: SessionState,
    court_id: int,
    hours: float,
    rented_by: str,
    now: datetime,
) -> OperationResult:
    """Rent a court for ``hours``, replacing any previous rental."""
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    if court.active or court.players:
        return OperationResult.fail(FailureKind.COURT_NOT_IDLE, f"Court {court_id} is in use")

    schedule = CourtSchedule(
        unavailable_until=now + timedelta(hours=hours),
        rented_by=rented_by.strip() or DEFAULT_RENTER,
    )
    state.court_schedules[court_id] = schedule
    logger.info("Court %s rented by %s until %s", court_id, schedule.rented_by, schedule.unavailable_until)
    return OperationResult.success(schedule)


def extend_schedule(state: SessionState, court_id: int, hours: float) -> OperationResult:
    schedule = state.court_schedules.get(court_id)
    if schedule is None:
        return OperationResult.fail(FailureKind.SCHEDULE_NOT_FOUND, f"Court {court_id} is not rented")

    schedule.unavailable_until = schedule.unavailable_until + timedelta(hours=hours)
    schedule.warning_shown = False
    logger.info("Rental on court %s extended until %s", court_id, schedule.unavailable_until)
    return OperationResult.success(schedule)


def clear_schedule(state: SessionState, court_id: int) -> OperationResult:
    state.court_schedules.pop(court_id, None)
    return OperationResult.success()


def mark_warning_shown(state: SessionState, court_id: int) -> OperationResult:
    schedule = state.court_schedules.get(court_id)
    if schedule is None:
        return OperationResult.fail(FailureKind.SCHEDULE_NOT_FOUND, f"Court {court_id} is not rented")
    schedule.warning_shown = True
    return OperationResult.success()


def rentals_needing_warning(
    state: SessionState,
    now: datetime,
    window: timedelta | None = None,
) -> list[dict]:
    """Rentals about to end that have not been warned about yet."""
    if window is None:
        window = timedelta(minutes=settings.RENTAL_WARNING_MINUTES)

    warnings = []
    for court_id, schedule in sorted(state.court_schedules.items()):
        if schedule.warning_shown:
            continue
        remaining = schedule.unavailable_until - now
        if timedelta(0) < remaining <= window:
            warnings.append({
                "court_id": court_id,
                "rented_by": schedule.rented_by,
                "minutes_remaining": math.ceil(remaining.total_seconds() / 60),
            })
    return warnings


def assign_court_skill_level(
    state: SessionState, court_id: int, skill_level: SkillLevel | None
) -> OperationResult:
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    court.assigned_skill_level = skill_level
    return OperationResult.success()


def update_score(
    state: SessionState, court_id: int, team: Literal["team1", "team2"], value: int
) -> OperationResult:
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")

    if team == "team1":
        court.team1_score = value
    else:
        court.team2_score = value
    return OperationResult.success()


# Timers are display state; the authoritative game end is an explicit end_game call.

def start_timer(state: SessionState, court_id: int) -> OperationResult:
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    court.timer_paused = False
    return OperationResult.success()


def pause_timer(state: SessionState, court_id: int) -> OperationResult:
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    court.timer_paused = True
    return OperationResult.success()


def update_timer_elapsed(state: SessionState, court_id: int, elapsed_ms: int) -> OperationResult:
    court = state.get_court(court_id)
    if court is None:
        return OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
    court.timer_elapsed = elapsed_ms
    return OperationResult.success()
