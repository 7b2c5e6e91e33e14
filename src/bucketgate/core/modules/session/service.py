import secrets
from datetime import timedelta

import structlog

from bucketgate.core.core import Service
from bucketgate.core.modules.session.models import REMEMBER_ME_TTL, Session, SessionToken
from bucketgate.core.modules.session.store import SessionStore
from bucketgate.errors import AuthenticationError, InvalidCredentialsError
from bucketgate.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Validates credentials and issues, looks up, and destroys sessions."""

    def __init__(self, store: SessionStore | None = None) -> None:
        super().__init__()
        self._store = store

    @property
    def store(self) -> SessionStore:
        if self._store is None:
            raise RuntimeError("Session store not started")
        return self._store

    async def login(
        self, username: str, password: str, remember_me: bool = False, current_token: SessionToken | None = None
    ) -> Session:
        """Create a session for a configured credential.

        A session already held by the caller (``current_token``) is replaced.

        Raises:
            InvalidCredentialsError: If no credential matches
        """
        credential = self.core.services.credential.find_credential(username, password)
        if credential is None:
            logger.info("login_failed", username=username)
            raise InvalidCredentialsError

        if current_token is not None:
            await self.store.remove(current_token)
        await self.store.purge_expired()

        issued_at = now()
        session = Session(
            token=SessionToken(secrets.token_urlsafe(32)),
            username=credential.username,
            created_at=issued_at,
            expires_at=issued_at + REMEMBER_ME_TTL if remember_me else None,
        )
        await self.store.add(session)
        logger.info("login_succeeded", username=credential.username, remember_me=remember_me)
        return session

    async def get_session(self, token: SessionToken | None) -> Session:
        """Get the live session referenced by token.

        Raises:
            AuthenticationError: If the token is absent, unknown, or expired
        """
        if token is None:
            raise AuthenticationError
        session = await self.store.get(token)
        if session is None:
            raise AuthenticationError
        return session

    async def is_authenticated(self, token: SessionToken | None) -> bool:
        if token is None:
            return False
        return await self.store.get(token) is not None

    async def logout(self, token: SessionToken | None) -> None:
        """Destroy the session referenced by token. Unknown tokens are ignored."""
        if token is None:
            return
        if await self.store.remove(token):
            logger.info("logout")

    async def on_start(self) -> None:
        """Create the session table for this process."""
        if self._store is None:
            idle_timeout = self.core.config.session_idle_timeout
            self._store = SessionStore(timedelta(seconds=idle_timeout) if idle_timeout else None)

    async def on_stop(self) -> None:
        await self.store.clear()
