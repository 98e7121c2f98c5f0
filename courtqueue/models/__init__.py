from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"


class GameMode(str, Enum):
    DOUBLES = "doubles"
    SINGLES = "singles"


class RotationRule(str, Enum):
    MANUAL = "manual"
    LOSERS_ROTATE = "losersRotate"
    ALL_ROTATE = "allRotate"


class VoiceType(str, Enum):
    MALE = "male"
    FEMALE = "female"
    FILIPINO_MALE = "filipino-male"
    FILIPINO_FEMALE = "filipino-female"


SKILL_VALUES: dict[SkillLevel, int] = {
    SkillLevel.BEGINNER: 1,
    SkillLevel.INTERMEDIATE: 2,
    SkillLevel.ADVANCED: 3,
    SkillLevel.PROFESSIONAL: 4,
}

PLAYERS_PER_GAME: dict[GameMode, int] = {
    GameMode.DOUBLES: 4,
    GameMode.SINGLES: 2,
}

MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 4


class StateModel(BaseModel):
    """Base for everything that ends up in the session snapshot."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class Player(StateModel):
    skill_level: SkillLevel = SkillLevel.INTERMEDIATE
    games_played: int = Field(0, ge=0)
    total_play_time: int = Field(0, ge=0, description="Minutes spent on court")


class Group(StateModel):
    id: int
    name: str
    players: list[str] = Field(..., min_length=MIN_GROUP_SIZE, max_length=MAX_GROUP_SIZE)


class QueuedPlayer(StateModel):
    type: Literal["player"] = "player"
    name: str
    joined_at: datetime


class QueuedGroup(StateModel):
    type: Literal["group"] = "group"
    id: int
    name: str
    players: list[str]
    joined_at: datetime


QueueEntry = Annotated[Union[QueuedPlayer, QueuedGroup], Field(discriminator="type")]


def entry_players(entry: QueuedPlayer | QueuedGroup) -> list[str]:
    """Player names occupying a queue entry."""
    if isinstance(entry, QueuedGroup):
        return list(entry.players)
    if isinstance(entry, QueuedPlayer):
        return [entry.name]
    raise TypeError(f"Unknown queue entry: {entry!r}")


class GroupInfo(StateModel):
    id: int
    name: str
    # Members of the originating group only, never the players filled in from the queue
    players: list[str] = Field(default_factory=list)


class Court(StateModel):
    id: int = Field(..., ge=1)
    players: list[str] = Field(default_factory=list)
    active: bool = False
    start_time: Optional[datetime] = None
    timer_elapsed: int = Field(0, ge=0, description="Milliseconds recorded by the court timer")
    timer_paused: bool = False
    group_info: Optional[GroupInfo] = None
    team1: list[str] = Field(default_factory=list)
    team2: list[str] = Field(default_factory=list)
    team1_score: int = Field(0, ge=0)
    team2_score: int = Field(0, ge=0)
    assigned_skill_level: Optional[SkillLevel] = None


class CourtSchedule(StateModel):
    unavailable_until: datetime
    rented_by: str = "Private Rental"
    warning_shown: bool = False


class GameRecord(StateModel):
    model_config = ConfigDict(frozen=True)

    court_id: int
    players: list[str]
    duration: int = Field(..., ge=0, description="Minutes")
    timestamp: datetime
    game_mode: GameMode
    team1_score: Optional[int] = None
    team2_score: Optional[int] = None


class SessionSettings(StateModel):
    num_courts: int = Field(2, ge=1, le=10)
    game_mode: GameMode = GameMode.DOUBLES
    game_duration: int = Field(15, ge=5, le=60)
    rotation_rule: RotationRule = RotationRule.MANUAL
    auto_timer: bool = True
    enable_notifications: bool = True
    skill_matching_enabled: bool = False
    show_court_timers: bool = True
    enable_manual_scoring: bool = False
    auto_team_balancing: bool = False
    strict_skill_matching: bool = False
    enable_court_skill_assignment: bool = False
    enable_voice_announcements: bool = False
    voice_type: VoiceType = VoiceType.FEMALE

    @property
    def players_needed(self) -> int:
        return PLAYERS_PER_GAME[self.game_mode]


class SessionState(StateModel):
    courts: list[Court] = Field(default_factory=list)
    queue: list[QueueEntry] = Field(default_factory=list)
    registered_players: dict[str, Player] = Field(default_factory=dict)
    groups: list[Group] = Field(default_factory=list)
    game_history: list[GameRecord] = Field(default_factory=list)
    settings: SessionSettings = Field(default_factory=SessionSettings)
    court_schedules: dict[int, CourtSchedule] = Field(default_factory=dict)

    @property
    def players_needed(self) -> int:
        return self.settings.players_needed

    def get_court(self, court_id: int) -> Court | None:
        return next((court for court in self.courts if court.id == court_id), None)

    def get_group(self, group_id: int) -> Group | None:
        return next((group for group in self.groups if group.id == group_id), None)

    def queued_players(self) -> set[str]:
        return {name for entry in self.queue for name in entry_players(entry)}

    def players_on_courts(self) -> set[str]:
        return {name for court in self.courts for name in court.players}


__all__ = [
    'SkillLevel',
    'GameMode',
    'RotationRule',
    'VoiceType',
    'SKILL_VALUES',
    'PLAYERS_PER_GAME',
    'MIN_GROUP_SIZE',
    'MAX_GROUP_SIZE',
    'Player',
    'Group',
    'QueuedPlayer',
    'QueuedGroup',
    'QueueEntry',
    'entry_players',
    'GroupInfo',
    'Court',
    'CourtSchedule',
    'GameRecord',
    'SessionSettings',
    'SessionState',
]
