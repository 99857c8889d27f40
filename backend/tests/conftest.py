"""
Test configuration and fixtures.
Stores are swapped for in-memory ones through FastAPI's dependency overrides.
"""

import os
import tempfile

# Before any project import: config.py creates its directories at import time
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="share-test-"))

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from storage import get_blob_store, get_metadata_store
from api.files.repositories.blob_repository import InMemoryBlobStore
from api.files.repositories.files_repository import InMemoryMetadataStore


@pytest.fixture
def metadata_store() -> InMemoryMetadataStore:
    return InMemoryMetadataStore()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def client(metadata_store, blob_store) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_metadata_store] = lambda: metadata_store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
