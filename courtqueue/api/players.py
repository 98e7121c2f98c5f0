from typing import Dict

from fastapi import APIRouter, Depends

from courtqueue.api.utils import raise_for_failure
from courtqueue.core import matchmaking as matchmaking_core
from courtqueue.core import players as players_core
from courtqueue.core import team_balancing
from courtqueue.core.dependencies import get_session_service
from courtqueue.models import Player
from courtqueue.schemas.players import (
    BulkRegisterRequest,
    BulkRegisterResponse,
    SkillLevelRequest,
    TeamsRequest,
    TeamsResponse,
)
from courtqueue.services.session import SessionService

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/", response_model=Dict[str, Player])
async def list_players(session: SessionService = Depends(get_session_service)):
    """Registered players with their skill level and stats."""
    return session.state.registered_players


@router.post("/bulk", response_model=BulkRegisterResponse)
async def register_players(
    request: BulkRegisterRequest,
    session: SessionService = Depends(get_session_service),
):
    """Register many players at once without queueing them."""
    result = raise_for_failure(players_core.register_players(session.state, request.names))
    return BulkRegisterResponse(**result.value)


@router.put("/{name}/skill-level", response_model=Player)
async def set_skill_level(
    name: str,
    request: SkillLevelRequest,
    session: SessionService = Depends(get_session_service),
):
    """Change a player's skill level."""
    raise_for_failure(players_core.set_skill_level(session.state, name, request.skill_level))
    return session.state.registered_players[name]


@router.post("/teams", response_model=TeamsResponse)
async def balance_teams(
    request: TeamsRequest,
    session: SessionService = Depends(get_session_service),
):
    """Suggest a skill-balanced team split for two or four players."""
    registry = session.state.registered_players
    quality = matchmaking_core.get_match_quality(request.players, registry)
    teams = team_balancing.balance_teams(request.players, registry)
    if teams is None:
        team1, team2 = team_balancing.split_teams(request.players)
        return TeamsResponse(team1=team1, team2=team2, match_quality=quality)

    label = None
    if "team1_avg" in teams:
        label = team_balancing.balance_quality_label(teams["team1_avg"], teams["team2_avg"])
    return TeamsResponse(**teams, balance_label=label, match_quality=quality)
