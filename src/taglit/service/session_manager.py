"""Sessions: TTL-scoped document workspaces for multi-client use."""

from __future__ import annotations

import secrets
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from taglit.html.collapse import DEFAULT_MAX_NESTING_DEPTH
from taglit.lexer.leaders import DEFAULT_LEADERS, normalize_leaders
from taglit.service.document_store import DocumentStore

_DEFAULT_SESSION_ID = "__default__"


class SessionNotFoundError(KeyError):
    """Raised when a session ID is unknown or has expired."""


@dataclass
class SessionInfo:
    """Public session metadata."""

    session_id: str
    created_at: datetime
    last_accessed_at: datetime
    document_count: int
    leaders: list[str]
    metadata: dict[str, str]


@dataclass
class _Session:
    session_id: str
    store: DocumentStore
    leaders: list[str]
    last_accessed: float  # monotonic, for TTL checks
    metadata: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_accessed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        self.last_accessed = time.monotonic()
        self.last_accessed_at = datetime.now(UTC)


class SessionManager:
    """Holds one ``DocumentStore`` per session and expires idle sessions.

    Each session may carry its own leader list; otherwise the manager's
    default leaders apply.  Thread-safe.  :meth:`start` launches the
    background cleanup thread, :meth:`stop` joins it.
    """

    def __init__(
        self,
        ttl_seconds: float = 1800,
        cleanup_interval: float = 60,
        leaders: Iterable[str] | None = None,
        max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    ) -> None:
        self._ttl = ttl_seconds
        self._cleanup_interval = cleanup_interval
        self._leaders = list(leaders) if leaders is not None else list(DEFAULT_LEADERS)
        self._max_nesting_depth = max_nesting_depth
        self._lock = threading.Lock()
        self._sessions: dict[str, _Session] = {}
        self._stop_event = threading.Event()
        self._cleanup_thread: threading.Thread | None = None

    # -- lifecycle -----------------------------------------------------------

    def start(self) -> None:
        if self._cleanup_thread is not None:
            return
        self._stop_event.clear()
        self._cleanup_thread = threading.Thread(
            target=self._cleanup_loop, daemon=True, name="session-cleanup"
        )
        self._cleanup_thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._cleanup_thread is not None:
            self._cleanup_thread.join(timeout=5)
            self._cleanup_thread = None

    # -- public API ----------------------------------------------------------

    def create_session(
        self,
        metadata: dict[str, str] | None = None,
        leaders: Iterable[str] | None = None,
    ) -> SessionInfo:
        session = self._new_session(secrets.token_hex(16), metadata, leaders)
        with self._lock:
            self._sessions[session.session_id] = session
        return self._info(session)

    def get_store(self, session_id: str) -> DocumentStore:
        """Return the session's store and refresh its TTL.

        Raises :class:`SessionNotFoundError` if the session is missing or expired.
        """
        with self._lock:
            return self._live(session_id).store

    def get_session(self, session_id: str) -> SessionInfo:
        with self._lock:
            session = self._live(session_id)
        return self._info(session)

    def close_session(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(f"Session '{session_id}' not found")

    def list_sessions(self) -> list[SessionInfo]:
        """Info for every non-expired session except the default one."""
        now = time.monotonic()
        with self._lock:
            live = [
                s
                for s in self._sessions.values()
                if s.session_id != _DEFAULT_SESSION_ID and now - s.last_accessed <= self._ttl
            ]
        return [self._info(s) for s in live]

    @property
    def active_count(self) -> int:
        now = time.monotonic()
        with self._lock:
            return sum(1 for s in self._sessions.values() if now - s.last_accessed <= self._ttl)

    def get_or_create_default(self) -> DocumentStore:
        """Store of the shared default session, created on first use."""
        with self._lock:
            session = self._sessions.get(_DEFAULT_SESSION_ID)
            if session is None:
                session = self._new_session(_DEFAULT_SESSION_ID, None, None)
                self._sessions[_DEFAULT_SESSION_ID] = session
            else:
                session.touch()
            return session.store

    # -- internal ------------------------------------------------------------

    def _new_session(
        self,
        session_id: str,
        metadata: dict[str, str] | None,
        leaders: Iterable[str] | None,
    ) -> _Session:
        chosen = list(normalize_leaders(leaders)) if leaders else list(self._leaders)
        return _Session(
            session_id=session_id,
            store=DocumentStore(chosen, max_nesting_depth=self._max_nesting_depth),
            leaders=chosen,
            last_accessed=time.monotonic(),
            metadata=metadata or {},
        )

    def _live(self, session_id: str) -> _Session:
        """Look up a session under the lock, expiring it lazily."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session '{session_id}' not found")
        if time.monotonic() - session.last_accessed > self._ttl:
            del self._sessions[session_id]
            raise SessionNotFoundError(f"Session '{session_id}' has expired")
        session.touch()
        return session

    @staticmethod
    def _info(session: _Session) -> SessionInfo:
        return SessionInfo(
            session_id=session.session_id,
            created_at=session.created_at,
            last_accessed_at=session.last_accessed_at,
            document_count=len(session.store.list_documents()),
            leaders=list(session.leaders),
            metadata=session.metadata,
        )

    def _purge_expired(self) -> None:
        now = time.monotonic()
        with self._lock:
            expired = [
                sid for sid, s in self._sessions.items() if now - s.last_accessed > self._ttl
            ]
            for sid in expired:
                del self._sessions[sid]

    def _cleanup_loop(self) -> None:
        while not self._stop_event.wait(timeout=self._cleanup_interval):
            self._purge_expired()
