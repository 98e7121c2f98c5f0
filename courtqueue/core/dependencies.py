"""
Dependency injection for FastAPI endpoints.
"""
from datetime import datetime, timezone
from functools import lru_cache

from courtqueue.services.session import SessionService

@lru_cache()
def get_session_service() -> SessionService:
    """
    Create and cache the process-wide SessionService.

    Every request works against the same in-memory session; tests override
    this dependency with a fresh service.
    """
    return SessionService()

def get_now() -> datetime:
    """Current instant passed explicitly into every time-dependent command."""
    return datetime.now(timezone.utc)
