"""In-memory session table shared by all requests of the process."""

import asyncio
from datetime import timedelta

from bucketgate.core.modules.session.models import Session, SessionToken
from bucketgate.utils import now


class SessionStore:
    """Session records keyed by token, guarded by a lock.

    With an ``idle_timeout`` a session not looked up for that long counts
    as expired, which bounds the table when clients drop their cookies
    without logging out.
    """

    def __init__(self, idle_timeout: timedelta | None = None) -> None:
        self._sessions: dict[SessionToken, Session] = {}
        self._lock = asyncio.Lock()
        self._idle_timeout = idle_timeout

    def __len__(self) -> int:
        return len(self._sessions)

    async def add(self, session: Session) -> None:
        async with self._lock:
            self._sessions[session.token] = session

    async def get(self, token: SessionToken) -> Session | None:
        """Return the live session for token, dropping it if it has expired."""
        at = now()
        async with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(at, self._idle_timeout):
                del self._sessions[token]
                return None
            session.last_seen_at = at
            return session

    async def remove(self, token: SessionToken) -> bool:
        async with self._lock:
            return self._sessions.pop(token, None) is not None

    async def purge_expired(self) -> int:
        """Remove every expired or idle session, returning how many were dropped."""
        at = now()
        async with self._lock:
            expired = [token for token, session in self._sessions.items() if session.is_expired(at, self._idle_timeout)]
            for token in expired:
                del self._sessions[token]
            return len(expired)

    async def clear(self) -> None:
        async with self._lock:
            self._sessions.clear()
