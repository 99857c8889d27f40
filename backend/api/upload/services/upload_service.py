"""Upload service — validates an upload, stores it and builds its share link."""

import logging
from datetime import datetime, timezone

from config import DEFAULT_EXPIRATION_DAYS, MAX_EXPIRATION_DAYS, MAX_FILE_SIZE
from errors import InternalError, TooLarge, UnsupportedType, ValidationError
from api.files.dto.file import FileRecord
from api.files.repositories.blob_repository import BlobStore, derive_name
from api.files.repositories.files_repository import MetadataStore
from api.files.services import lifecycle
from api.upload.dto.upload import ShareLink, UploadedFileInfo, UploadResponse
from api.upload.file_types import format_size, is_file_type_allowed

logger = logging.getLogger(__name__)


def create_share_link(base_url: str, share_id: str) -> str:
    return f"{base_url.rstrip('/')}/shared/{share_id}"


def parse_int_field(value: str | None, name: str, default: int | None = None) -> int | None:
    """Parse an optional integer form field; blank means 'use the default'."""
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def validate_upload(
    data: bytes,
    filename: str | None,
    mime_type: str | None,
    expiration_days: int,
    max_downloads: int | None,
    max_file_size: int = MAX_FILE_SIZE,
) -> None:
    """Raise a ValidationError subclass if the upload must be rejected."""
    if not filename:
        raise ValidationError("No file provided")
    if len(data) > max_file_size:
        raise TooLarge(f"File too large. Maximum size is {format_size(max_file_size)}")
    if not is_file_type_allowed(mime_type):
        raise UnsupportedType(f"File type not supported: {mime_type}")
    if expiration_days < 1:
        raise ValidationError("expirationDays must be at least 1")
    if expiration_days > MAX_EXPIRATION_DAYS:
        raise ValidationError(f"expirationDays must be at most {MAX_EXPIRATION_DAYS}")
    if max_downloads is not None and max_downloads < 1:
        raise ValidationError("maxDownloads must be at least 1")


def save_upload(
    metadata: MetadataStore,
    blobs: BlobStore,
    data: bytes,
    filename: str | None,
    mime_type: str | None,
    base_url: str,
    expiration_days: int = DEFAULT_EXPIRATION_DAYS,
    password: str | None = None,
    max_downloads: int | None = None,
    now: datetime | None = None,
    max_file_size: int = MAX_FILE_SIZE,
) -> UploadResponse:
    """Store the blob, then its metadata record, and return the share descriptor.

    Nothing is persisted when validation fails. If the metadata write fails
    after the blob write, the blob is left behind.
    """
    try:
        validate_upload(data, filename, mime_type, expiration_days, max_downloads, max_file_size)
    except ValidationError as e:
        logger.warning("Upload rejected (%s): %s", filename, e)
        raise

    now = now or datetime.now(timezone.utc)
    file_id = lifecycle.generate_file_id()
    share_id = lifecycle.generate_share_id()

    record = FileRecord(
        id=file_id,
        share_id=share_id,
        original_name=filename,
        stored_name=derive_name(file_id, filename),
        size=len(data),
        mime_type=mime_type,
        uploaded_at=now,
        expires_at=lifecycle.calculate_expiration(now, expiration_days),
        password_hash=lifecycle.hash_password(password) if password else None,
        download_count=0,
        max_downloads=max_downloads,
    )

    try:
        blobs.save(data, record.stored_name)
        metadata.put(record)
    except OSError:
        logger.exception("Failed to store upload %s", file_id)
        raise InternalError("Upload failed") from None

    logger.info(
        "Uploaded %s (%d bytes) as %s, expires %s",
        filename, record.size, file_id, record.expires_at.isoformat(),
    )

    return UploadResponse(
        file=UploadedFileInfo(id=file_id, name=filename, size=record.size, type=mime_type),
        share_link=ShareLink(
            url=create_share_link(base_url, share_id),
            share_id=share_id,
            expires_at=record.expires_at,
            is_password_protected=record.is_password_protected,
        ),
    )
