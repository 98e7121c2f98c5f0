from typing import Literal, Optional

from pydantic import BaseModel, Field

from courtqueue.models import SkillLevel


class ScheduleCourtRequest(BaseModel):
    hours: float = Field(..., gt=0, le=24, description="Rental length in hours")
    rented_by: str = ""


class ExtendScheduleRequest(BaseModel):
    hours: float = Field(..., gt=0, le=24)


class AssignPlayerRequest(BaseModel):
    name: str = Field(..., min_length=1)


class ScoreUpdateRequest(BaseModel):
    team: Literal["team1", "team2"]
    value: int = Field(..., ge=0)


class CourtSkillLevelRequest(BaseModel):
    skill_level: Optional[SkillLevel] = None


class TimerElapsedRequest(BaseModel):
    elapsed_ms: int = Field(..., ge=0, description="Elapsed time in milliseconds")


class AvailabilityResponse(BaseModel):
    court_id: int
    available: bool


class RentalWarningResponse(BaseModel):
    court_id: int
    rented_by: str
    minutes_remaining: int
