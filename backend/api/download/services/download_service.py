"""Download service — resolves a file, enforces its lifecycle and returns its bytes."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from errors import Gone, InternalError, NotFound, Unauthorized
from api.files.dto.file import FileRecord
from api.files.repositories.blob_repository import BlobStore
from api.files.repositories.files_repository import MetadataStore
from api.files.services import lifecycle

logger = logging.getLogger(__name__)


@dataclass
class DownloadedFile:
    content: bytes
    original_name: str
    mime_type: str
    size: int


def resolve(metadata: MetadataStore, identifier: str) -> FileRecord:
    """Find a record by share id first, then by internal file id."""
    record = metadata.get_by_share_id(identifier)
    if record is None:
        record = metadata.get_by_id(identifier)
    if record is None:
        raise NotFound()
    return record


def check_password(record: FileRecord, password: str | None) -> None:
    if not record.password_hash:
        return
    if not password:
        raise Unauthorized("Password required")
    if not lifecycle.verify_password(password, record.password_hash):
        raise Unauthorized("Invalid password")


def download(
    metadata: MetadataStore,
    blobs: BlobStore,
    identifier: str,
    password: str | None = None,
    now: datetime | None = None,
) -> DownloadedFile:
    now = now or datetime.now(timezone.utc)
    try:
        record = resolve(metadata, identifier)
        if not lifecycle.is_downloadable(record, now):
            raise Gone()
        check_password(record, password)

        content = blobs.read(record.stored_name)

        # Not atomic with the limit check above
        record.download_count += 1
        metadata.put(record)
    except (Unauthorized, Gone) as e:
        logger.warning("Download of %s refused: %s", identifier, e)
        raise
    except NotFound:
        logger.info("Download of %s: not found", identifier)
        raise
    except OSError:
        logger.exception("Failed to read file %s", identifier)
        raise InternalError("Failed to retrieve file") from None

    logger.info("Downloaded %s (%d/%s)", record.id, record.download_count, record.max_downloads or "-")
    return DownloadedFile(
        content=content,
        original_name=record.original_name,
        mime_type=record.mime_type,
        size=len(content),
    )
