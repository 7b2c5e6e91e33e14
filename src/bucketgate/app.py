from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import BinaryIO

from bucketgate.config import Config
from bucketgate.core.core import Core
from bucketgate.core.modules.access.models import GateDecision
from bucketgate.core.modules.session.models import Session, SessionToken
from bucketgate.core.modules.storage.content_store import ContentStore
from bucketgate.core.modules.storage.models import ObjectDownload, StoredObject


class App:
    """Facade for all application operations, validates sessions before delegating to Core."""

    def __init__(self, config: Config, content_store: ContentStore | None = None) -> None:
        self._core = Core(config, content_store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def check_configuration(self) -> None:
        """Load startup configuration eagerly. Raises ConfigurationError."""
        self._core.services.credential.load()

    # === Authentication ===
    async def login(
        self, username: str, password: str, remember_me: bool = False, current_token: SessionToken | None = None
    ) -> Session:
        """Authenticate against configured credentials and create a session."""
        return await self._core.services.session.login(username, password, remember_me, current_token)

    async def logout(self, token: SessionToken | None) -> None:
        """Invalidate the session, if any. Safe to call repeatedly."""
        await self._core.services.session.logout(token)

    async def is_authenticated(self, token: SessionToken | None) -> bool:
        """Check if the session token refers to a live session."""
        return await self._core.services.session.is_authenticated(token)

    async def check_access(self, path: str, token: SessionToken | None, accept: str | None) -> GateDecision:
        """Classify a request path for the access gate."""
        return await self._core.services.access.check_request(path, token, accept)

    # === Objects ===
    async def upload_object(self, token: SessionToken | None, original_name: str, data: BinaryIO) -> StoredObject:
        """Store an uploaded file (requires authentication)."""
        await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.storage.upload_object(original_name, data)

    async def list_objects(self, token: SessionToken | None) -> list[str]:
        """List object keys (requires authentication)."""
        await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.storage.list_keys()

    async def download_object(self, token: SessionToken | None, key: str) -> ObjectDownload:
        """Open an object for streaming (requires authentication)."""
        await self._core.services.access.ensure_authenticated(token)
        return await self._core.services.storage.download_object(key)

    async def delete_object(self, token: SessionToken | None, key: str) -> None:
        """Delete an object (requires authentication)."""
        await self._core.services.access.ensure_authenticated(token)
        await self._core.services.storage.delete_object(key)
