import logging
from typing import Any, Optional

from courtqueue.core.session import export_snapshot, new_session, restore_snapshot
from courtqueue.models import SessionState

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(self, state: Optional[SessionState] = None):
        """Hold the single in-process session that every command mutates."""
        self.state = state if state is not None else new_session()

    def snapshot(self) -> dict[str, Any]:
        """Serializable copy of the whole session for an external storage layer."""
        return export_snapshot(self.state)

    def restore(self, data: dict[str, Any]) -> SessionState:
        """Replace the session with a previously exported snapshot."""
        self.state = restore_snapshot(data)
        logger.info(
            "Session restored: %d queue entries, %d courts, %d players",
            len(self.state.queue), len(self.state.courts), len(self.state.registered_players),
        )
        return self.state
