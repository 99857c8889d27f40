"""Upload controller — handles multipart file uploads."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile

from config import BASE_URL, DEFAULT_EXPIRATION_DAYS, MAX_FILE_SIZE
from errors import ShareError
from storage import get_blob_store, get_metadata_store
from api.files.repositories.blob_repository import BlobStore
from api.files.repositories.files_repository import MetadataStore
from api.upload.dto.upload import UploadResponse
from api.upload.services import upload_service

router = APIRouter(prefix="/api", tags=["Upload"])

CHUNK_SIZE = 1024 * 1024  # 1MB


async def _read_capped(file: UploadFile, limit: int) -> bytes:
    """Read at most limit + 1 bytes so oversized uploads are not buffered whole."""
    chunks = []
    size = 0
    while chunk := await file.read(CHUNK_SIZE):
        chunks.append(chunk)
        size += len(chunk)
        if size > limit:
            break
    return b"".join(chunks)


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    request: Request,
    file: UploadFile | None = File(None),
    expiration_days: str | None = Form(None, alias="expirationDays"),
    password: str | None = Form(None),
    max_downloads: str | None = Form(None, alias="maxDownloads"),
    metadata: MetadataStore = Depends(get_metadata_store),
    blobs: BlobStore = Depends(get_blob_store),
):
    """Upload a file and get back its share link."""
    data = await _read_capped(file, MAX_FILE_SIZE) if file else b""

    try:
        days = upload_service.parse_int_field(
            expiration_days, "expirationDays", DEFAULT_EXPIRATION_DAYS
        )
        limit = upload_service.parse_int_field(max_downloads, "maxDownloads")
        return upload_service.save_upload(
            metadata,
            blobs,
            data=data,
            filename=file.filename if file else None,
            mime_type=file.content_type if file else None,
            base_url=BASE_URL or str(request.base_url),
            expiration_days=days,
            password=password,
            max_downloads=limit,
        )
    except ShareError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
