"""Content store access: the protocol the gateway needs and its S3 implementation.

Works against AWS S3, MinIO, and other S3-compatible services through aioboto3.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import AsyncExitStack
from typing import Any, BinaryIO, Protocol

import aioboto3
import structlog
from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from bucketgate.config import Config
from bucketgate.core.modules.storage.models import ObjectDownload
from bucketgate.core.modules.storage.utils import download_filename
from bucketgate.errors import (
    DeleteFailedError,
    ListFailedError,
    ObjectNotFoundError,
    StorageError,
    WriteFailedError,
)

logger = structlog.get_logger(__name__)

NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class ContentStore(Protocol):
    """Remote object storage addressed by key within one bucket.

    Implementations raise the typed StorageError subclasses and never retry.
    """

    async def start(self) -> None: ...

    async def stop(self) -> None: ...

    async def put_object(self, key: str, data: BinaryIO) -> None:
        """Write data under key. Raises WriteFailedError."""
        ...

    def iter_keys(self) -> AsyncIterator[str]:
        """Enumerate every key in the bucket. Raises ListFailedError."""
        ...

    async def open_object(self, key: str) -> ObjectDownload:
        """Open key for streaming. Raises ObjectNotFoundError."""
        ...

    async def delete_object(self, key: str) -> None:
        """Remove key. Raises DeleteFailedError."""
        ...


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", "Unknown"))


async def _iter_body(body: Any, chunk_size: int) -> AsyncGenerator[bytes, None]:
    """Yield an object body in chunks, releasing the connection when finished or closed."""
    async with body:
        async for chunk in body.iter_chunks(chunk_size):
            yield chunk


class S3ContentStore:
    """S3-compatible content store bound to the configured bucket.

    Retries are disabled, and every call is bounded by the configured
    connect and read timeouts.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._bucket = config.storage_bucket
        self._session = aioboto3.Session()
        self._exit_stack: AsyncExitStack | None = None
        self._client: Any = None

    @property
    def bucket(self) -> str:
        return self._bucket

    def _client_kwargs(self) -> dict[str, Any]:
        config = self._config
        kwargs: dict[str, Any] = {
            "endpoint_url": config.storage_endpoint,
            "region_name": config.storage_region,
            "config": BotoConfig(
                connect_timeout=config.storage_connect_timeout,
                read_timeout=config.storage_read_timeout,
                retries={"total_max_attempts": 1, "mode": "standard"},
            ),
        }
        # Fall back to the default credential chain when no static keys are configured
        if config.storage_access_key.get_secret_value():
            kwargs["aws_access_key_id"] = config.storage_access_key.get_secret_value()
            kwargs["aws_secret_access_key"] = config.storage_secret_key.get_secret_value()
        return kwargs

    def _ensure_client(self) -> Any:
        if self._client is None:
            raise StorageError("Content store not started")
        return self._client

    async def start(self) -> None:
        """Open the S3 client and make sure the bucket exists."""
        if self._client is not None:
            return
        logger.info("content_store_starting", endpoint=self._config.storage_endpoint, bucket=self._bucket)
        exit_stack = AsyncExitStack()
        self._client = await exit_stack.enter_async_context(self._session.client("s3", **self._client_kwargs()))
        self._exit_stack = exit_stack
        if self._config.storage_create_bucket:
            await self._ensure_bucket()

    async def stop(self) -> None:
        if self._exit_stack is None:
            return
        try:
            await self._exit_stack.aclose()
        finally:
            self._exit_stack = None
            self._client = None
        logger.info("content_store_stopped")

    async def _ensure_bucket(self) -> None:
        client = self._ensure_client()
        try:
            await client.head_bucket(Bucket=self._bucket)
        except ClientError as e:
            if _error_code(e) not in NOT_FOUND_CODES | {"NoSuchBucket"}:
                raise StorageError(f"Cannot access bucket '{self._bucket}'") from e
        except BotoCoreError as e:
            raise StorageError(f"Cannot reach content store at {self._config.storage_endpoint}") from e
        else:
            return
        await client.create_bucket(Bucket=self._bucket)
        logger.info("bucket_created", bucket=self._bucket)

    async def put_object(self, key: str, data: BinaryIO) -> None:
        client = self._ensure_client()
        transfer_config = TransferConfig(
            multipart_threshold=self._config.upload_chunk_size,
            multipart_chunksize=self._config.upload_chunk_size,
            max_concurrency=1,
        )
        try:
            await client.upload_fileobj(data, self._bucket, key, Config=transfer_config)
        except (ClientError, BotoCoreError, S3UploadFailedError) as e:
            logger.exception("put_object_failed", key=key, bucket=self._bucket)
            raise WriteFailedError from e

    async def iter_keys(self) -> AsyncIterator[str]:
        client = self._ensure_client()
        paginator = client.get_paginator("list_objects_v2")
        try:
            async for page in paginator.paginate(Bucket=self._bucket):
                for item in page.get("Contents", []):
                    yield item["Key"]
        except (ClientError, BotoCoreError) as e:
            logger.exception("list_objects_failed", bucket=self._bucket)
            raise ListFailedError from e

    async def open_object(self, key: str) -> ObjectDownload:
        client = self._ensure_client()
        try:
            response = await client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise ObjectNotFoundError from e
            logger.exception("get_object_failed", key=key, bucket=self._bucket)
            raise StorageError("Download failed") from e
        except BotoCoreError as e:
            logger.exception("get_object_failed", key=key, bucket=self._bucket)
            raise StorageError("Download failed") from e

        return ObjectDownload(
            key=key,
            filename=download_filename(key),
            chunks=_iter_body(response["Body"], self._config.download_chunk_size),
            size=response.get("ContentLength"),
        )

    async def delete_object(self, key: str) -> None:
        client = self._ensure_client()
        try:
            await client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.exception("delete_object_failed", key=key, bucket=self._bucket)
            raise DeleteFailedError from e
