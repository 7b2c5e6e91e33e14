from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

from bucketgate.config import Config

if TYPE_CHECKING:
    from bucketgate.core.modules.access.service import AccessService
    from bucketgate.core.modules.credential.service import CredentialService
    from bucketgate.core.modules.session.service import SessionService
    from bucketgate.core.modules.storage.content_store import ContentStore
    from bucketgate.core.modules.storage.service import StorageService


class Service:
    """Base class for services sharing the core application context."""

    def __init__(self) -> None:
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    credential: CredentialService
    session: SessionService
    access: AccessService
    storage: StorageService

    def __init__(self) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - credentials must load before sessions are issued
        service_configs = [
            ("credential", "bucketgate.core.modules.credential.service", "CredentialService"),
            ("session", "bucketgate.core.modules.session.service", "SessionService"),
            ("access", "bucketgate.core.modules.access.service", "AccessService"),
            ("storage", "bucketgate.core.modules.storage.service", "StorageService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class()
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services in registration order."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services in reverse registration order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, the content store, and all service instances."""

    config: Config
    content_store: ContentStore
    services: Services

    def __init__(self, config: Config, content_store: ContentStore | None = None) -> None:
        """Initialize core with config and content store, and auto-register services."""
        from bucketgate.core.modules.storage.content_store import S3ContentStore  # noqa: PLC0415

        self.config = config
        self.content_store = content_store if content_store is not None else S3ContentStore(config)
        self.services = Services()
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Connect the content store, then start all services."""
        await self.content_store.start()
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and release the content store connection."""
        await self.services.stop_all()
        await self.content_store.stop()
