"""Lifecycle policy tests."""

import re
from datetime import timedelta

import pytest

from api.files.dto.file import FileRecord
from api.files.services import lifecycle


def make_record(now, **overrides) -> FileRecord:
    data = dict(
        id="a" * 32,
        share_id="share",
        original_name="notes.txt",
        stored_name="a" * 32 + "_notes.txt",
        size=10,
        mime_type="text/plain",
        uploaded_at=now,
        expires_at=now + timedelta(days=7),
    )
    data.update(overrides)
    return FileRecord(**data)


class TestIdentifiers:
    def test_file_id_is_128_bit_hex(self):
        assert re.fullmatch(r"[0-9a-f]{32}", lifecycle.generate_file_id())

    def test_share_id_is_160_bit_urlsafe(self):
        share_id = lifecycle.generate_share_id()
        assert re.fullmatch(r"[A-Za-z0-9_-]{27}", share_id)

    def test_ids_do_not_repeat(self):
        assert len({lifecycle.generate_share_id() for _ in range(200)}) == 200


class TestExpiry:
    def test_calculate_expiration(self, now):
        assert lifecycle.calculate_expiration(now, 7) == now + timedelta(days=7)

    def test_not_expired_at_boundary(self, now):
        record = make_record(now)
        assert not lifecycle.is_expired(record, record.expires_at)
        assert lifecycle.is_downloadable(record, record.expires_at)

    def test_expired_after_boundary(self, now):
        record = make_record(now)
        later = record.expires_at + timedelta(microseconds=1)
        assert lifecycle.is_expired(record, later)

    @pytest.mark.parametrize("count,limit", [(0, None), (0, 5), (3, 5)])
    def test_expired_never_downloadable(self, now, count, limit):
        record = make_record(now, download_count=count, max_downloads=limit)
        assert not lifecycle.is_downloadable(record, now + timedelta(days=8))


class TestDownloadLimit:
    def test_unlimited(self, now):
        record = make_record(now, download_count=1000)
        assert lifecycle.is_downloadable(record, now)

    def test_below_limit(self, now):
        record = make_record(now, download_count=2, max_downloads=3)
        assert lifecycle.is_downloadable(record, now)

    def test_limit_reached(self, now):
        record = make_record(now, download_count=3, max_downloads=3)
        assert not lifecycle.is_downloadable(record, now)


class TestPasswords:
    def test_hash_is_sha256_hex(self):
        assert lifecycle.hash_password("secret") == (
            "2bb80d537b1da3e38bd30361aa855686bde0eacd7162fef6a25fe97bf527a25b"
        )

    @pytest.mark.parametrize("password", ["secret", "", "pässwörd", "x" * 500])
    def test_verify_own_hash(self, password):
        assert lifecycle.verify_password(password, lifecycle.hash_password(password))

    def test_reject_other_hash(self):
        assert not lifecycle.verify_password("wrong", lifecycle.hash_password("secret"))

    def test_record_protection_follows_hash(self, now):
        assert not make_record(now).is_password_protected
        protected = make_record(now, password_hash=lifecycle.hash_password("secret"))
        assert protected.is_password_protected
