from typing import List

from pydantic import BaseModel, Field


class CreateGroupRequest(BaseModel):
    name: str = Field(..., min_length=1)
    players: List[str]
