"""Conversation sessions.

This module handles:
- The append-only turn log and its Idle/AwaitingResponse state machine
- In-memory storage of sessions keyed by id, with idle expiry
"""

import logging
import threading
import time
import uuid
from typing import Callable

from aiagent.config import get_settings
from aiagent.orchestrator.models import (
    ActionResult,
    ConversationView,
    Role,
    SessionState,
    Turn,
)

logger = logging.getLogger(__name__)

Responder = Callable[[str], ActionResult]


class SessionError(Exception):
    """Base class for session-level errors."""

    pass


class SessionBusyError(SessionError):
    """Raised when a request is submitted while another is in flight."""

    pass


class ConversationSession:
    """One conversation: ordered turns plus a pending flag.

    Only ``submit`` mutates the session. It appends the user turn, calls the
    responder, appends the assistant turn on success and always returns the
    session to IDLE, whatever the outcome.
    """

    def __init__(self, session_id: str | None = None):
        self.id = session_id or str(uuid.uuid4())
        self.state = SessionState.IDLE
        self.last_error: ActionResult | None = None
        self.updated_at = time.time()
        self._turns: list[Turn] = []
        self._lock = threading.Lock()

    @property
    def turns(self) -> list[Turn]:
        return list(self._turns)

    @property
    def pending(self) -> bool:
        return self.state == SessionState.AWAITING_RESPONSE

    def _append(self, role: Role, content: str) -> Turn:
        turn = Turn(role=role, content=content)
        self._turns.append(turn)
        self.updated_at = time.time()
        return turn

    def _begin(self, text: str) -> None:
        with self._lock:
            if self.state == SessionState.AWAITING_RESPONSE:
                raise SessionBusyError(f"Session {self.id} is awaiting a response")
            self.state = SessionState.AWAITING_RESPONSE
            self._append(Role.USER, text)

    def submit(self, text: str, responder: Responder) -> ActionResult | None:
        """
        Run one request/response cycle.

        Args:
            text: The user's input. Blank input is ignored.
            responder: Produces the ActionResult for the request text.

        Returns:
            The responder's result, or None if the input was blank.

        Raises:
            SessionBusyError: If a request is already in flight.
        """
        text = text.strip()
        if not text:
            return None

        self._begin(text)
        try:
            result = responder(text)
            if result.ok:
                self._append(Role.ASSISTANT, result.output or "")
                self.last_error = None
            else:
                logger.info(
                    f"Session {self.id}: {result.action.value} failed ({result.failure.value})"
                )
                self.last_error = result
            return result
        finally:
            self.state = SessionState.IDLE
            self.updated_at = time.time()

    def view(self) -> ConversationView:
        return ConversationView(
            session_id=self.id,
            state=self.state,
            pending=self.pending,
            turns=self.turns,
            last_error=self.last_error,
        )


class SessionStore:
    """In-memory sessions keyed by id. Nothing survives a restart."""

    def __init__(self, timeout: int | None = None):
        self.timeout = get_settings().session_timeout if timeout is None else timeout
        self._sessions: dict[str, ConversationSession] = {}
        self._lock = threading.Lock()

    def cleanup(self) -> None:
        """Remove idle sessions that have expired."""
        now = time.time()
        with self._lock:
            expired = [
                sid
                for sid, s in self._sessions.items()
                if not s.pending and now - s.updated_at > self.timeout
            ]
            for sid in expired:
                self._sessions.pop(sid, None)
        if expired:
            logger.debug(f"Expired {len(expired)} session(s)")

    def create(self) -> ConversationSession:
        session = ConversationSession()
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> ConversationSession | None:
        self.cleanup()
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str | None) -> ConversationSession:
        """Get a session by id, creating it (under that id) if missing."""
        if session_id is None:
            return self.create()
        self.cleanup()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = ConversationSession(session_id)
                self._sessions[session_id] = session
            return session

    def remove(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
