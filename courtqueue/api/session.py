from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from courtqueue.api.utils import raise_for_failure
from courtqueue.core import session as session_core
from courtqueue.core.dependencies import get_session_service
from courtqueue.models import SessionSettings
from courtqueue.schemas.session import SettingsUpdateRequest, StatisticsResponse
from courtqueue.services.session import SessionService

router = APIRouter(prefix="/session", tags=["session"])


@router.get("/settings", response_model=SessionSettings)
async def get_settings(session: SessionService = Depends(get_session_service)):
    """Current session settings."""
    return session.state.settings


@router.patch("/settings", response_model=SessionSettings)
async def update_settings(
    request: SettingsUpdateRequest,
    session: SessionService = Depends(get_session_service),
):
    """Apply a partial settings update."""
    changes = request.model_dump(exclude_none=True)
    result = raise_for_failure(session_core.update_settings(session.state, changes))
    return result.value


@router.get("/snapshot")
async def get_snapshot(session: SessionService = Depends(get_session_service)) -> Dict[str, Any]:
    """Export the full session state."""
    return session.snapshot()


@router.put("/snapshot")
async def restore_snapshot(
    snapshot: Dict[str, Any] = Body(...),
    session: SessionService = Depends(get_session_service),
) -> Dict[str, Any]:
    """Replace the session with an exported snapshot."""
    try:
        session.restore(snapshot)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid snapshot: {e.error_count()} error(s)") from e
    return session.snapshot()


@router.post("/reset")
async def reset_session(session: SessionService = Depends(get_session_service)):
    """Clear everything back to a fresh session."""
    raise_for_failure(session_core.reset_all(session.state))
    return {"message": "Session reset"}


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(session: SessionService = Depends(get_session_service)):
    """Totals and recent games for the statistics panel."""
    return StatisticsResponse(**session_core.get_statistics(session.state))
