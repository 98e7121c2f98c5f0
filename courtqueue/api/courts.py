from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from courtqueue.api.utils import raise_for_failure
from courtqueue.core import courts as courts_core
from courtqueue.core import games as games_core
from courtqueue.core.dependencies import get_now, get_session_service
from courtqueue.core.errors import FailureKind, OperationResult
from courtqueue.models import Court, CourtSchedule, GameRecord
from courtqueue.schemas.courts import (
    AssignPlayerRequest,
    AvailabilityResponse,
    CourtSkillLevelRequest,
    ExtendScheduleRequest,
    RentalWarningResponse,
    ScheduleCourtRequest,
    ScoreUpdateRequest,
    TimerElapsedRequest,
)
from courtqueue.services.session import SessionService

router = APIRouter(prefix="/courts", tags=["courts"])


@router.get("/", response_model=List[Court])
async def list_courts(session: SessionService = Depends(get_session_service)):
    """All courts in id order."""
    return sorted(session.state.courts, key=lambda court: court.id)


@router.post("/start-next", response_model=Court)
async def start_next_game(
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Start the next eligible game on the best available court."""
    result = raise_for_failure(games_core.start_next_game(session.state, now))
    return result.value


@router.get("/rental-warnings", response_model=List[RentalWarningResponse])
async def get_rental_warnings(
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Rentals ending soon that nobody has been warned about yet."""
    return courts_core.rentals_needing_warning(session.state, now)


@router.post("/{court_id}/start", response_model=Court)
async def start_game(
    court_id: int,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Start the next eligible game on a specific court."""
    result = raise_for_failure(games_core.start_game(session.state, court_id, now))
    return result.value


@router.post("/{court_id}/end", response_model=GameRecord)
async def end_game(
    court_id: int,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """End the game on a court and rotate its players."""
    result = raise_for_failure(games_core.end_game(session.state, court_id, now))
    return result.value


@router.post("/{court_id}/players", response_model=Court)
async def assign_player(
    court_id: int,
    request: AssignPlayerRequest,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Put one player on a court by hand."""
    result = raise_for_failure(
        games_core.assign_player_to_court(session.state, court_id, request.name.strip(), now)
    )
    return result.value


@router.delete("/{court_id}/players/{name}", response_model=Court)
async def remove_player(
    court_id: int,
    name: str,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Take a hand-assigned player off a court that has not started; they rejoin the queue."""
    result = raise_for_failure(games_core.remove_player_from_court(session.state, court_id, name, now))
    return result.value


@router.get("/{court_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    court_id: int,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Whether a court is free of rentals; expired rentals are cleared."""
    if session.state.get_court(court_id) is None:
        raise_for_failure(
            OperationResult.fail(FailureKind.COURT_NOT_FOUND, f"Court {court_id} does not exist")
        )
    available = courts_core.is_court_available(session.state, court_id, now)
    return AvailabilityResponse(court_id=court_id, available=available)


@router.post("/{court_id}/schedule", response_model=CourtSchedule)
async def schedule_court(
    court_id: int,
    request: ScheduleCourtRequest,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Rent a court out of the rotation."""
    result = raise_for_failure(
        courts_core.schedule_court(session.state, court_id, request.hours, request.rented_by, now)
    )
    return result.value


@router.post("/{court_id}/schedule/extend", response_model=CourtSchedule)
async def extend_schedule(
    court_id: int,
    request: ExtendScheduleRequest,
    session: SessionService = Depends(get_session_service),
):
    """Extend an existing rental."""
    result = raise_for_failure(courts_core.extend_schedule(session.state, court_id, request.hours))
    return result.value


@router.post("/{court_id}/schedule/warning-shown")
async def mark_warning_shown(court_id: int, session: SessionService = Depends(get_session_service)):
    """Record that the ending-soon warning for a rental was shown."""
    raise_for_failure(courts_core.mark_warning_shown(session.state, court_id))
    return {"message": "Warning marked as shown"}


@router.delete("/{court_id}/schedule")
async def clear_schedule(court_id: int, session: SessionService = Depends(get_session_service)):
    """End a rental immediately."""
    raise_for_failure(courts_core.clear_schedule(session.state, court_id))
    return {"message": "Schedule cleared"}


@router.put("/{court_id}/score", response_model=Court)
async def update_score(
    court_id: int,
    request: ScoreUpdateRequest,
    session: SessionService = Depends(get_session_service),
):
    """Set one team's score."""
    raise_for_failure(courts_core.update_score(session.state, court_id, request.team, request.value))
    return session.state.get_court(court_id)


@router.put("/{court_id}/skill-level", response_model=Court)
async def assign_skill_level(
    court_id: int,
    request: CourtSkillLevelRequest,
    session: SessionService = Depends(get_session_service),
):
    """Reserve a court for one skill level, or clear the reservation."""
    raise_for_failure(courts_core.assign_court_skill_level(session.state, court_id, request.skill_level))
    return session.state.get_court(court_id)


@router.post("/{court_id}/timer/start", response_model=Court)
async def start_timer(court_id: int, session: SessionService = Depends(get_session_service)):
    raise_for_failure(courts_core.start_timer(session.state, court_id))
    return session.state.get_court(court_id)


@router.post("/{court_id}/timer/pause", response_model=Court)
async def pause_timer(court_id: int, session: SessionService = Depends(get_session_service)):
    raise_for_failure(courts_core.pause_timer(session.state, court_id))
    return session.state.get_court(court_id)


@router.put("/{court_id}/timer", response_model=Court)
async def update_timer(
    court_id: int,
    request: TimerElapsedRequest,
    session: SessionService = Depends(get_session_service),
):
    raise_for_failure(courts_core.update_timer_elapsed(session.state, court_id, request.elapsed_ms))
    return session.state.get_court(court_id)
