from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

from bucketgate.utils import now


class StoredObject(BaseModel):
    """An object written to the content store by an upload."""

    key: str = Field(..., description="Object key, '{epoch_millis}-{original_name}'")
    original_name: str = Field(..., description="Filename supplied by the uploader")
    created_at: datetime = Field(default_factory=now)


@dataclass
class ObjectDownload:
    """An object being streamed out of the content store."""

    key: str
    filename: str  # Value for the Content-Disposition hint
    chunks: AsyncGenerator[bytes, None]
    size: int | None = None

    async def aclose(self) -> None:
        """Stop the transfer and release store-side resources."""
        await self.chunks.aclose()
