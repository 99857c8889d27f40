"""Files service — listing, share info and deletion."""

import logging
from datetime import datetime, timezone

from errors import Gone, InternalError, NotFound
from api.files.dto.file import FileMetadata
from api.files.repositories.blob_repository import BlobStore
from api.files.repositories.files_repository import MetadataStore
from api.files.services import lifecycle

logger = logging.getLogger(__name__)


def list_files(
    metadata: MetadataStore,
    blobs: BlobStore,
    now: datetime | None = None,
) -> list[FileMetadata]:
    """List live files, newest first. Expired files are purged along the way."""
    try:
        records = metadata.list_all(now, on_expire=lambda r: blobs.delete(r.stored_name))
    except OSError:
        logger.exception("Failed to list files")
        raise InternalError("Failed to retrieve files") from None
    records.sort(key=lambda r: r.uploaded_at, reverse=True)
    return [FileMetadata.from_record(r) for r in records]


def get_share_info(
    metadata: MetadataStore,
    share_id: str,
    now: datetime | None = None,
) -> FileMetadata:
    """Describe a shared file without counting a download."""
    now = now or datetime.now(timezone.utc)
    record = metadata.get_by_share_id(share_id)
    if record is None:
        raise NotFound()
    if not lifecycle.is_downloadable(record, now):
        raise Gone()
    return FileMetadata.from_record(record)


def delete_file(metadata: MetadataStore, blobs: BlobStore, file_id: str) -> bool:
    """Delete blob, then metadata. Returns False if there was nothing to delete."""
    record = metadata.get_by_id(file_id)
    if not record:
        return False

    try:
        blobs.delete(record.stored_name)
        metadata.delete(file_id)
    except OSError:
        logger.exception("Failed to delete file %s", file_id)
        raise InternalError("Failed to delete file") from None

    logger.info("Deleted file %s", file_id)
    return True
