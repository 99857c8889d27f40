"""Metadata and blob store tests, run against every backend."""

import json
from datetime import timedelta

import pytest

from errors import NotFound
from database import init_db, make_session_factory
from api.files.repositories.blob_repository import (
    FilesystemBlobStore,
    InMemoryBlobStore,
    derive_name,
)
from api.files.repositories.files_repository import InMemoryMetadataStore, JsonMetadataStore
from api.files.repositories.sql_files_repository import SqlMetadataStore
from api.files.services import lifecycle
from tests.test_lifecycle import make_record


@pytest.fixture(params=["memory", "json", "sql"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryMetadataStore()
    if request.param == "json":
        return JsonMetadataStore(tmp_path / "metadata")
    session_factory = make_session_factory(f"sqlite:///{tmp_path}/share.db")
    init_db(session_factory)
    return SqlMetadataStore(session_factory)


@pytest.fixture(params=["memory", "filesystem"])
def blobs(request, tmp_path):
    if request.param == "memory":
        return InMemoryBlobStore()
    return FilesystemBlobStore(tmp_path / "uploads")


class TestMetadataStore:
    def test_put_and_get_by_id(self, store, now):
        record = make_record(now, password_hash=lifecycle.hash_password("pw"))
        store.put(record)
        assert store.get_by_id(record.id) == record

    def test_get_missing(self, store):
        assert store.get_by_id("0" * 32) is None
        assert store.get_by_share_id("nope") is None

    def test_get_by_share_id(self, store, now):
        first = make_record(now, id="1" * 32, share_id="s1")
        second = make_record(now, id="2" * 32, share_id="s2")
        store.put(first)
        store.put(second)
        assert store.get_by_share_id("s2").id == second.id

    def test_put_overwrites(self, store, now):
        record = make_record(now)
        store.put(record)
        record.download_count = 4
        store.put(record)
        assert store.get_by_id(record.id).download_count == 4

    def test_delete(self, store, now):
        record = make_record(now)
        store.put(record)
        assert store.delete(record.id) is True
        assert store.delete(record.id) is False
        assert store.get_by_id(record.id) is None

    def test_list_all_purges_expired(self, store, now):
        live = make_record(now, id="1" * 32, share_id="live")
        stale = make_record(now - timedelta(days=10), id="2" * 32, share_id="stale")
        store.put(live)
        store.put(stale)
        purged = []

        records = store.list_all(now, on_expire=purged.append)

        assert [r.id for r in records] == [live.id]
        assert [r.id for r in purged] == [stale.id]
        assert store.get_by_id(stale.id) is None

    def test_list_all_keeps_exhausted(self, store, now):
        record = make_record(now, download_count=1, max_downloads=1)
        store.put(record)
        assert [r.id for r in store.list_all(now)] == [record.id]


class TestJsonMetadataStore:
    def test_record_layout(self, tmp_path, now):
        store = JsonMetadataStore(tmp_path)
        record = make_record(now, max_downloads=2)
        store.put(record)

        data = json.loads((tmp_path / f"{record.id}.json").read_text())
        assert data["shareId"] == "share"
        assert data["storedName"] == record.stored_name
        assert data["downloadCount"] == 0
        assert data["maxDownloads"] == 2
        assert "passwordHash" not in data

    def test_corrupt_file_skipped(self, tmp_path, now):
        store = JsonMetadataStore(tmp_path)
        record = make_record(now)
        store.put(record)
        (tmp_path / "broken.json").write_text("{not json")

        assert store.get_by_share_id("share").id == record.id
        assert len(store.list_all(now)) == 1

    def test_undecodable_file_skipped(self, tmp_path, now):
        store = JsonMetadataStore(tmp_path)
        record = make_record(now)
        store.put(record)
        (tmp_path / "broken.json").write_bytes(b"\xff\xfe{garbage")

        assert store.get_by_share_id("share").id == record.id
        assert [r.id for r in store.list_all(now)] == [record.id]

    def test_directory_entry_skipped(self, tmp_path, now):
        store = JsonMetadataStore(tmp_path)
        record = make_record(now)
        store.put(record)
        (tmp_path / "stray.json").mkdir()

        assert store.get_by_share_id("share").id == record.id

    def test_unsafe_id_not_found(self, tmp_path):
        store = JsonMetadataStore(tmp_path)
        assert store.get_by_id("../etc/passwd") is None
        assert store.delete("../x") is False


class TestBlobStore:
    def test_derive_name(self):
        assert derive_name("abc", "report.pdf") == "abc_report.pdf"
        assert derive_name("abc", "../../etc/passwd") == "abc_passwd"
        assert derive_name("abc", "C:\\Users\\me\\photo.png") == "abc_photo.png"

    def test_save_read_delete(self, blobs):
        name = blobs.save(b"hello", "abc_hello.txt")
        assert name == "abc_hello.txt"
        assert blobs.read(name) == b"hello"
        assert blobs.list_names() == [name]
        blobs.delete(name)
        with pytest.raises(NotFound):
            blobs.read(name)

    def test_delete_missing_is_ignored(self, blobs):
        blobs.delete("never-stored")

    def test_filesystem_rejects_nested_names(self, tmp_path):
        blobs = FilesystemBlobStore(tmp_path)
        with pytest.raises(NotFound):
            blobs.read("../outside")
