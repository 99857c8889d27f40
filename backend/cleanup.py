"""Cleanup — removes expired and download-exhausted files.

Run standalone: python cleanup.py
Nothing schedules it; it runs when an admin asks.
"""

import logging
from datetime import datetime, timezone

from api.files.repositories.blob_repository import BlobStore
from api.files.repositories.files_repository import MetadataStore
from api.files.services import lifecycle

logger = logging.getLogger(__name__)


def run_cleanup(
    metadata: MetadataStore,
    blobs: BlobStore,
    now: datetime | None = None,
) -> int:
    """Delete expired files and files that reached their download cap.
    Returns the number of files cleaned up."""
    now = now or datetime.now(timezone.utc)
    count = 0

    def _purge_blob(record):
        nonlocal count
        blobs.delete(record.stored_name)
        count += 1

    # Expired files (the listing scan purges them)
    live = metadata.list_all(now, on_expire=_purge_blob)

    # Max downloads reached
    for record in live:
        if not lifecycle.is_downloadable(record, now):
            blobs.delete(record.stored_name)
            metadata.delete(record.id)
            count += 1

    logger.info("Cleanup removed %d file%s", count, "" if count == 1 else "s")
    return count


if __name__ == "__main__":
    from config import LOG_LEVEL
    from storage import get_blob_store, get_metadata_store

    logging.basicConfig(level=LOG_LEVEL)
    run_cleanup(get_metadata_store(), get_blob_store())
