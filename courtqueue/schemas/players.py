from typing import List, Optional

from pydantic import BaseModel, Field

from courtqueue.models import SkillLevel


class BulkRegisterRequest(BaseModel):
    names: List[str] = Field(..., min_length=1)


class BulkRegisterResponse(BaseModel):
    added: List[str]
    skipped: List[str]


class SkillLevelRequest(BaseModel):
    skill_level: SkillLevel


class TeamsRequest(BaseModel):
    players: List[str] = Field(..., min_length=2, max_length=4)


class TeamsResponse(BaseModel):
    team1: List[str]
    team2: List[str]
    team1_avg: Optional[float] = None
    team2_avg: Optional[float] = None
    balance_label: Optional[str] = None
    match_quality: int
