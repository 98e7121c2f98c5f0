from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends

from courtqueue.api.utils import raise_for_failure
from courtqueue.core import groups as groups_core
from courtqueue.core import queue as queue_core
from courtqueue.core.dependencies import get_now, get_session_service
from courtqueue.models import Group, QueueEntry
from courtqueue.schemas.groups import CreateGroupRequest
from courtqueue.services.session import SessionService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/", response_model=List[Group])
async def list_groups(session: SessionService = Depends(get_session_service)):
    """List every group."""
    return session.state.groups


@router.post("/", response_model=Group)
async def create_group(
    request: CreateGroupRequest,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Create a group of 2-4 registered players."""
    result = raise_for_failure(groups_core.create_group(session.state, request.name, request.players, now))
    return result.value


@router.delete("/{group_id}")
async def delete_group(group_id: int, session: SessionService = Depends(get_session_service)):
    """Delete a group and its queue entry."""
    raise_for_failure(groups_core.delete_group(session.state, group_id))
    return {"message": "Group deleted"}


@router.post("/{group_id}/enqueue", response_model=QueueEntry)
async def enqueue_group(
    group_id: int,
    session: SessionService = Depends(get_session_service),
    now: datetime = Depends(get_now),
):
    """Queue the whole group as one entry."""
    result = raise_for_failure(queue_core.enqueue_group(session.state, group_id, now))
    return session.state.queue[result.value]
