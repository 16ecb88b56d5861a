"""SSE (Server-Sent Events) transport for MCP."""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, AsyncGenerator, Callable

from sse_starlette.sse import EventSourceResponse, ServerSentEvent

logger = logging.getLogger(__name__)

# Headers sent on every event stream
SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
}

SSE_SEPARATOR = "\n"


class SessionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class SseSession:
    """
    One SSE connection.

    The stream announces the message endpoint, then stays open until the
    session is closed by the server or the client goes away.
    """

    def __init__(
        self,
        session_id: str,
        on_close: Callable[["SseSession"], None] | None = None,
    ):
        self.session_id = session_id
        self.created_at = datetime.now(timezone.utc)
        self.state = SessionState.CONNECTING
        self._closed = asyncio.Event()
        self._on_close = on_close

    @property
    def is_closed(self) -> bool:
        return self.state is SessionState.CLOSED

    def close(self) -> None:
        """Close the session. Safe to call more than once."""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED
        self._closed.set()
        if self._on_close is not None:
            self._on_close(self)

    async def events(self, endpoint_url: str) -> AsyncGenerator[dict[str, Any], None]:
        """Yield the endpoint event, then hold the stream open until closed."""
        self.state = SessionState.OPEN
        logger.info(f"SSE session opened: {self.session_id}")
        try:
            yield {"event": "endpoint", "data": endpoint_url}
            await self._closed.wait()
        except asyncio.CancelledError:
            logger.info(f"SSE stream cancelled for session {self.session_id}")
            raise
        finally:
            self.close()


class SessionManager:
    """Manages open SSE sessions."""

    def __init__(self):
        self._sessions: dict[str, SseSession] = {}

    def create_session(self) -> SseSession:
        """Create and register a new session."""
        session_id = str(uuid.uuid4())
        session = SseSession(session_id, on_close=self._unregister)
        self._sessions[session_id] = session
        logger.info(f"Created session: {session_id}")
        return session

    def get_session(self, session_id: str) -> SseSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def remove_session(self, session_id: str) -> None:
        """Close and remove a session."""
        session = self._sessions.get(session_id)
        if session is not None:
            session.close()

    def _unregister(self, session: SseSession) -> None:
        if self._sessions.pop(session.session_id, None) is not None:
            logger.info(f"Removed session: {session.session_id}")

    def close_all(self) -> None:
        """Close every open session (used on shutdown)."""
        for session in list(self._sessions.values()):
            session.close()

    @property
    def session_count(self) -> int:
        """Return the number of active sessions."""
        return len(self._sessions)


# Global session manager
_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """Get the global session manager."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


def reset_session_manager() -> None:
    """Reset the global session manager (useful for testing)."""
    global _session_manager
    if _session_manager is not None:
        _session_manager.close_all()
    _session_manager = None


def _ping_event() -> ServerSentEvent:
    return ServerSentEvent(comment="ping", sep=SSE_SEPARATOR)


def create_sse_response(
    session: SseSession, endpoint_url: str, keepalive_seconds: float = 30.0
) -> EventSourceResponse:
    """
    Create an SSE response for a session.

    The keep-alive ping runs inside the response's task group, so it stops
    with the stream.
    """
    return EventSourceResponse(
        session.events(endpoint_url),
        headers=SSE_HEADERS,
        ping=keepalive_seconds,
        ping_message_factory=_ping_event,
        sep=SSE_SEPARATOR,
    )
