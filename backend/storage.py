"""Store wiring — FastAPI dependencies returning the configured stores.

Tests swap these out through ``app.dependency_overrides``.
"""

import logging
from functools import lru_cache

from config import METADATA_BACKEND, METADATA_DIR, UPLOADS_DIR
from api.files.repositories.blob_repository import BlobStore, FilesystemBlobStore
from api.files.repositories.files_repository import JsonMetadataStore, MetadataStore

logger = logging.getLogger(__name__)


@lru_cache
def get_metadata_store() -> MetadataStore:
    if METADATA_BACKEND == "sql":
        from database import init_db, make_session_factory
        from api.files.repositories.sql_files_repository import SqlMetadataStore

        session_factory = make_session_factory()
        init_db(session_factory)
        logger.info("Using SQL metadata store")
        return SqlMetadataStore(session_factory)
    if METADATA_BACKEND != "json":
        raise ValueError(f"Unknown metadata backend: {METADATA_BACKEND!r}")
    logger.info("Using JSON metadata store in %s", METADATA_DIR)
    return JsonMetadataStore(METADATA_DIR)


@lru_cache
def get_blob_store() -> BlobStore:
    return FilesystemBlobStore(UPLOADS_DIR)
