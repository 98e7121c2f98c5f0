from typing import List, Optional

from pydantic import BaseModel, Field

from courtqueue.models import GameMode, GameRecord, RotationRule, VoiceType


class SettingsUpdateRequest(BaseModel):
    num_courts: Optional[int] = Field(None, ge=1, le=10)
    game_mode: Optional[GameMode] = None
    game_duration: Optional[int] = Field(None, ge=5, le=60)
    rotation_rule: Optional[RotationRule] = None
    auto_timer: Optional[bool] = None
    enable_notifications: Optional[bool] = None
    skill_matching_enabled: Optional[bool] = None
    show_court_timers: Optional[bool] = None
    enable_manual_scoring: Optional[bool] = None
    auto_team_balancing: Optional[bool] = None
    strict_skill_matching: Optional[bool] = None
    enable_court_skill_assignment: Optional[bool] = None
    enable_voice_announcements: Optional[bool] = None
    voice_type: Optional[VoiceType] = None


class StatisticsResponse(BaseModel):
    total_games: int
    total_play_time: int
    average_game_time: int
    total_players: int
    recent_games: List[GameRecord]
