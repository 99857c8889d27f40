"""Files controller — API routes for file management and share info."""

from fastapi import APIRouter, Depends, HTTPException, Request

from auth import is_admin
from cleanup import run_cleanup
from errors import ShareError
from storage import get_blob_store, get_metadata_store
from api.files.dto.file import CleanupResponse, DeleteResponse, FileListResponse, FileMetadata
from api.files.repositories.blob_repository import BlobStore
from api.files.repositories.files_repository import MetadataStore
from api.files.services import files_service

router = APIRouter(tags=["Files"])


def _require_admin(request: Request):
    if not is_admin(request):
        raise HTTPException(status_code=401, detail="Admin access required")


@router.get("/api/files", response_model=FileListResponse)
async def list_files(
    request: Request,
    metadata: MetadataStore = Depends(get_metadata_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    _require_admin(request)
    try:
        return FileListResponse(files=files_service.list_files(metadata, blobs))
    except ShareError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/api/files/{file_id}", response_model=DeleteResponse)
async def delete_file(
    request: Request,
    file_id: str,
    metadata: MetadataStore = Depends(get_metadata_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    _require_admin(request)
    try:
        deleted = files_service.delete_file(metadata, blobs, file_id)
    except ShareError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="File not found or already deleted")
    return DeleteResponse()


@router.post("/api/cleanup", response_model=CleanupResponse)
async def cleanup(
    request: Request,
    metadata: MetadataStore = Depends(get_metadata_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    _require_admin(request)
    return CleanupResponse(removed=run_cleanup(metadata, blobs))


@router.get("/shared/{share_id}", response_model=FileMetadata)
async def shared_file(
    share_id: str,
    metadata: MetadataStore = Depends(get_metadata_store),
):
    """Public view of a share link: what the file is and whether it needs a password."""
    try:
        return files_service.get_share_info(metadata, share_id)
    except ShareError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
