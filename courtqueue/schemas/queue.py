from typing import List, Optional

from pydantic import BaseModel, Field

from courtqueue.models import GroupInfo, QueueEntry, SkillLevel


class JoinQueueRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Player name, trimmed before use")


class ReorderQueueRequest(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class QueuePositionResponse(BaseModel):
    position: int
    entry: QueueEntry
    wait_minutes: int
    wait_display: str


class WaitTimeResponse(BaseModel):
    position: int
    wait_minutes: int
    wait_display: str


class NextGameResponse(BaseModel):
    kind: str
    players: List[str]
    skills: List[SkillLevel]
    quality: int
    quality_label: str
    group_info: Optional[GroupInfo] = None
    added_from_queue: int
    target_court_id: Optional[int] = None
