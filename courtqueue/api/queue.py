from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from courtqueue.api.utils import raise_for_failure
from courtqueue.core import matchmaking as matchmaking_core
from courtqueue.core import queue as queue_core
from courtqueue.core import wait_time as wait_time_core
from courtqueue.core.dependencies import get_now, get_session_service
from courtqueue.models import QueueEntry
from courtqueue.schemas.queue import (
    JoinQueueRequest,
    NextGameResponse,
    QueuePositionResponse,
    ReorderQueueRequest,
    WaitTimeResponse,
)
from courtqueue.services.session import SessionService

router = APIRouter(prefix="/queue", tags=["queue"])


@router.get("/", response_model=List[QueuePositionResponse])
async def get_queue(
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """List the queue front to back with estimated waits."""
    state = session.state
    positions = []
    for index, entry in enumerate(state.queue):
        minutes = wait_time_core.estimated_wait(state, index, now)
        positions.append(QueuePositionResponse(
            position=index,
            entry=entry,
            wait_minutes=minutes,
            wait_display=wait_time_core.format_wait_time(minutes),
        ))
    return positions


@router.post("/join", response_model=QueuePositionResponse)
async def join_queue(
    request: JoinQueueRequest,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Add a player to the tail of the queue."""
    result = raise_for_failure(queue_core.join_queue(session.state, request.name, now))
    position = result.value
    minutes = wait_time_core.estimated_wait(session.state, position, now)
    return QueuePositionResponse(
        position=position,
        entry=session.state.queue[position],
        wait_minutes=minutes,
        wait_display=wait_time_core.format_wait_time(minutes),
    )


@router.delete("/{index}", response_model=QueueEntry)
async def leave_queue(index: int, session: SessionService = Depends(get_session_service)):
    """Remove the entry at a queue position."""
    result = raise_for_failure(queue_core.leave_queue(session.state, index))
    return result.value


@router.post("/reorder", response_model=List[QueueEntry])
async def reorder_queue(
    request: ReorderQueueRequest,
    session: SessionService = Depends(get_session_service),
):
    """Move one entry to a new position."""
    raise_for_failure(queue_core.reorder_queue(session.state, request.from_index, request.to_index))
    return session.state.queue


@router.get("/suggested-order", response_model=List[QueueEntry])
async def get_suggested_order(session: SessionService = Depends(get_session_service)):
    """Preview the skill-sorted queue without applying it."""
    state = session.state
    return matchmaking_core.suggest_optimal_order(state.queue, state.registered_players)


@router.post("/optimize", response_model=List[QueueEntry])
async def optimize_queue(session: SessionService = Depends(get_session_service)):
    """Apply the skill-sorted order to the queue."""
    raise_for_failure(queue_core.apply_optimal_order(session.state))
    return session.state.queue


@router.get("/next", response_model=Optional[NextGameResponse])
async def get_next_game(
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Who would play next, with match quality and the court they would get."""
    preview = matchmaking_core.next_game_preview(session.state, now)
    if preview is None:
        return None
    return NextGameResponse(**preview)


@router.get("/{index}/wait", response_model=WaitTimeResponse)
async def get_wait_time(
    index: int,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Estimated wait for a queue position."""
    if not 0 <= index < len(session.state.queue):
        raise HTTPException(status_code=404, detail=f"No queue entry at {index}")
    minutes = wait_time_core.estimated_wait(session.state, index, now)
    return WaitTimeResponse(
        position=index,
        wait_minutes=minutes,
        wait_display=wait_time_core.format_wait_time(minutes),
    )
