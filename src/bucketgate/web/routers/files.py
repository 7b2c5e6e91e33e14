from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from bucketgate.core.modules.storage.models import ObjectDownload
from bucketgate.core.modules.storage.utils import content_disposition
from bucketgate.errors import ValidationError
from bucketgate.web.deps import AppDep, SessionDep
from bucketgate.web.openapi import ErrorResponse

router = APIRouter(tags=["files"])


class FileResult(BaseModel):
    """Outcome of an upload or delete."""

    success: bool = Field(True, description="Always true, failures use an error response")
    file_name: str = Field(..., serialization_alias="fileName", description="Object key")


async def _stream_download(download: ObjectDownload) -> AsyncIterator[bytes]:
    try:
        async for chunk in download.chunks:
            yield chunk
    finally:
        # Releases the store connection when the client goes away mid-transfer
        await download.aclose()


@router.post(
    "/upload",
    summary="Upload file",
    description="Upload a file from the multipart field `file`. It is stored under a new timestamp-prefixed key.",
    operation_id="uploadFile",
    responses={
        200: {"description": "File stored, returns its key"},
        400: {"model": ErrorResponse, "description": "No file in the request"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        500: {"model": ErrorResponse, "description": "Upload failed, outcome unknown"},
    },
)
async def upload_file(app: AppDep, token: SessionDep, file: Annotated[UploadFile | None, File()] = None) -> FileResult:
    if file is None:
        raise ValidationError("No file uploaded")
    try:
        stored = await app.upload_object(token, file.filename or "", file.file)
    finally:
        await file.close()
    return FileResult(file_name=stored.key)


@router.get(
    "/files",
    summary="List files",
    description="List the keys of all objects in the bucket.",
    operation_id="listFiles",
    responses={
        200: {"description": "Object keys"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        500: {"model": ErrorResponse, "description": "Listing failed"},
    },
)
async def list_files(app: AppDep, token: SessionDep) -> list[str]:
    return await app.list_objects(token)


@router.get(
    "/download/{key:path}",
    summary="Download file",
    description="Stream an object's bytes as an attachment named after the last segment of its key.",
    operation_id="downloadFile",
    response_class=StreamingResponse,
    responses={
        200: {"description": "File content", "content": {"application/octet-stream": {}}},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "File not found"},
    },
)
async def download_file(key: str, app: AppDep, token: SessionDep) -> StreamingResponse:
    download = await app.download_object(token, key)
    headers = {"Content-Disposition": content_disposition(download.filename)}
    if download.size is not None:
        headers["Content-Length"] = str(download.size)
    return StreamingResponse(_stream_download(download), media_type="application/octet-stream", headers=headers)


@router.delete(
    "/delete/{key:path}",
    summary="Delete file",
    description="Delete an object by key. Deleting a key that does not exist succeeds.",
    operation_id="deleteFile",
    responses={
        200: {"description": "File deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        500: {"model": ErrorResponse, "description": "Delete failed"},
    },
)
async def delete_file(key: str, app: AppDep, token: SessionDep) -> FileResult:
    await app.delete_object(token, key)
    return FileResult(file_name=key)
