"""
Failure reporting for engine commands.

Commands never raise for business-rule violations. They return an
``OperationResult`` that is truthy on success and otherwise names the
``FailureKind`` that stopped them; state is left untouched on failure.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class FailureKind(str, Enum):
    DUPLICATE_PLAYER = "duplicate_player"
    PLAYER_CURRENTLY_PLAYING = "player_currently_playing"
    COURT_NOT_IDLE = "court_not_idle"
    COURT_UNAVAILABLE = "court_unavailable"
    GROUP_SIZE_MISMATCH = "group_size_mismatch"
    PLAYER_ALREADY_IN_GROUP = "player_already_in_group"
    SCHEDULE_NOT_FOUND = "schedule_not_found"
    INSUFFICIENT_QUEUE_FOR_GAME = "insufficient_queue_for_game"
    INVALID_NAME = "invalid_name"
    PLAYER_NOT_FOUND = "player_not_found"
    GROUP_NOT_FOUND = "group_not_found"
    COURT_NOT_FOUND = "court_not_found"
    COURT_NOT_ACTIVE = "court_not_active"
    NO_COURT_AVAILABLE = "no_court_available"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    SKILL_MISMATCH = "skill_mismatch"


NOT_FOUND_FAILURES = frozenset({
    FailureKind.PLAYER_NOT_FOUND,
    FailureKind.GROUP_NOT_FOUND,
    FailureKind.COURT_NOT_FOUND,
    FailureKind.SCHEDULE_NOT_FOUND,
})

INVALID_INPUT_FAILURES = frozenset({
    FailureKind.INVALID_NAME,
    FailureKind.INDEX_OUT_OF_RANGE,
})


class OperationResult(BaseModel):
    ok: bool
    failure: Optional[FailureKind] = None
    detail: Optional[str] = None
    value: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def fail(cls, failure: FailureKind, detail: str | None = None) -> "OperationResult":
        return cls(ok=False, failure=failure, detail=detail)
