import pytest
from fastapi.testclient import TestClient

from courtqueue.core.dependencies import get_now, get_session_service
from courtqueue.core.session import new_session
from courtqueue.main import app
from courtqueue.models import GameMode
from courtqueue.services.session import SessionService
from tests.utils import SESSION_START, FrozenClock


@pytest.fixture
def now():
    """Fixed instant used as 'now' by unit tests."""
    return SESSION_START

@pytest.fixture
def state():
    """A fresh doubles session with two idle courts."""
    return new_session()

@pytest.fixture
def singles_state():
    """A fresh singles session with two idle courts."""
    session = new_session()
    session.settings.game_mode = GameMode.SINGLES
    return session

@pytest.fixture
def clock():
    return FrozenClock()

@pytest.fixture
def session_service():
    """Create an isolated session service for API tests."""
    return SessionService()

@pytest.fixture
def test_client(session_service, clock):
    """Create a test client with overridden session and clock dependencies."""
    app.dependency_overrides[get_session_service] = lambda: session_service
    app.dependency_overrides[get_now] = clock

    client = TestClient(app)
    yield client

    # Clean up the override after the test
    app.dependency_overrides.clear()
