"""Download controller — serves a shared file as an attachment."""

from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from errors import ShareError
from storage import get_blob_store, get_metadata_store
from api.download.services import download_service
from api.files.repositories.blob_repository import BlobStore
from api.files.repositories.files_repository import MetadataStore

router = APIRouter(prefix="/api/files", tags=["Download"])


def content_disposition(filename: str) -> str:
    ascii_name = filename.encode("ascii", "replace").decode("ascii")
    quoted = ascii_name.replace('"', "'")
    header = f'attachment; filename="{quoted}"'
    if ascii_name != filename:
        header += f"; filename*=UTF-8''{quote(filename)}"
    return header


@router.get("/{identifier}")
async def download_file(
    identifier: str,
    password: str | None = None,
    metadata: MetadataStore = Depends(get_metadata_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    """Download by share id or file id."""
    try:
        result = download_service.download(metadata, blobs, identifier, password)
    except ShareError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return Response(
        content=result.content,
        media_type=result.mime_type,
        headers={
            "Content-Disposition": content_disposition(result.original_name),
            "Content-Length": str(result.size),
        },
    )
