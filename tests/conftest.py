"""Shared pytest fixtures."""

import json
from collections.abc import AsyncIterator
from pathlib import Path
from typing import BinaryIO

import pytest
from fastapi.testclient import TestClient

from bucketgate.app import App
from bucketgate.config import Config
from bucketgate.core.core import Core
from bucketgate.core.modules.storage.models import ObjectDownload
from bucketgate.core.modules.storage.utils import download_filename
from bucketgate.errors import DeleteFailedError, ListFailedError, ObjectNotFoundError, WriteFailedError
from bucketgate.web.server import create_fastapi_app


class InMemoryContentStore:
    """Content store keeping objects in a dict, with switchable failures."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.failing: set[str] = set()  # Operation names that should fail: put, list, delete
        self.list_fail_after: int | None = None  # Fail enumeration after this many keys
        self.started = False
        self.closed_downloads: list[str] = []

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    async def put_object(self, key: str, data: BinaryIO) -> None:
        if "put" in self.failing:
            raise WriteFailedError
        parts = []
        while chunk := data.read(1024):
            parts.append(chunk)
        self.objects[key] = b"".join(parts)

    async def iter_keys(self) -> AsyncIterator[str]:
        if "list" in self.failing:
            raise ListFailedError
        for index, key in enumerate(sorted(self.objects)):
            if self.list_fail_after is not None and index >= self.list_fail_after:
                raise ListFailedError
            yield key

    async def open_object(self, key: str) -> ObjectDownload:
        if key not in self.objects:
            raise ObjectNotFoundError
        data = self.objects[key]

        async def chunks():
            try:
                for start in range(0, len(data), 4):
                    yield data[start : start + 4]
            finally:
                self.closed_downloads.append(key)

        return ObjectDownload(key=key, filename=download_filename(key), chunks=chunks(), size=len(data))

    async def delete_object(self, key: str) -> None:
        if "delete" in self.failing:
            raise DeleteFailedError
        self.objects.pop(key, None)


@pytest.fixture
def credentials_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps([{"username": "admin", "password": "secret"}, {"username": "viewer", "password": "pw"}]))
    return path


@pytest.fixture
def config(credentials_file: Path) -> Config:
    return Config(credentials_path=credentials_file, cors_origins=[], _env_file=None)


@pytest.fixture
def content_store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
async def core(config: Config, content_store: InMemoryContentStore) -> AsyncIterator[Core]:
    """Started core wired to the in-memory content store."""
    core = Core(config, content_store)
    async with core.lifespan():
        yield core


@pytest.fixture
def client(config: Config, content_store: InMemoryContentStore):
    """HTTP client for the FastAPI app, with lifespan running."""
    fastapi_app = create_fastapi_app(App(config, content_store), config)
    with TestClient(fastapi_app) as test_client:
        yield test_client


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    response = client.post("/login", json={"username": "admin", "password": "secret"})
    assert response.status_code == 200
    return client
