from typing import BinaryIO

import structlog

from bucketgate.core.core import Service
from bucketgate.core.modules.storage.models import ObjectDownload, StoredObject
from bucketgate.core.modules.storage.utils import UNNAMED, basename, make_object_key
from bucketgate.utils import now_millis

logger = structlog.get_logger(__name__)


class StorageService(Service):
    """Upload, list, download and delete objects in the shared bucket.

    Stateless between calls: each operation is one content store request,
    failures surface as StorageError subclasses and are never retried.
    """

    async def upload_object(self, original_name: str, data: BinaryIO) -> StoredObject:
        """Write an upload under a fresh '{epoch_millis}-{name}' key.

        The payload is read from ``data`` in bounded parts by the store. A
        failed write may leave no object, a full one, or a truncated one.

        Raises:
            WriteFailedError: If the store rejects or fails the write
        """
        name = basename(original_name) or UNNAMED
        stored = StoredObject(key=make_object_key(name, now_millis()), original_name=name)
        await self.core.content_store.put_object(stored.key, data)
        logger.info("object_uploaded", key=stored.key)
        return stored

    async def list_keys(self) -> list[str]:
        """List every key in the bucket, fetched fresh on each call.

        Raises:
            ListFailedError: If enumeration fails, keys read so far are discarded
        """
        keys = [key async for key in self.core.content_store.iter_keys()]
        logger.debug("objects_listed", count=len(keys))
        return keys

    async def download_object(self, key: str) -> ObjectDownload:
        """Open an object for streaming to the client.

        Raises:
            ObjectNotFoundError: If no object exists under key
        """
        download = await self.core.content_store.open_object(key)
        logger.info("object_download_started", key=key, size=download.size)
        return download

    async def delete_object(self, key: str) -> None:
        """Remove an object. Deleting a missing key is not an error.

        Raises:
            DeleteFailedError: If the store fails the delete
        """
        await self.core.content_store.delete_object(key)
        logger.info("object_deleted", key=key)
