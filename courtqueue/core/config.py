from dotenv import load_dotenv
from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

from courtqueue.models import GameMode

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "CourtQueue"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://localhost:8080",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Session defaults applied on startup and on reset
    DEFAULT_NUM_COURTS: int = 2
    DEFAULT_GAME_MODE: GameMode = GameMode.DOUBLES
    DEFAULT_GAME_DURATION: int = 15

    # Engine tuning
    GAME_HISTORY_LIMIT: int = 50
    WAIT_TIME_SAMPLE_SIZE: int = 10
    DEFAULT_WAIT_MINUTES: int = 15
    RENTAL_WARNING_MINUTES: int = 5

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str):
        if isinstance(v, str):
            return v.upper()
        return v

    model_config = ConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="ignore",
    )

settings = Settings()
