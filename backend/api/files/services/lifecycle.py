"""Lifecycle policy — expiry, download limits, passwords and identifiers.

Pure functions; nothing here touches storage.
"""

import hashlib
import secrets
from datetime import datetime, timedelta

from api.files.dto.file import FileRecord


def generate_file_id() -> str:
    """128-bit random id, hex encoded."""
    return secrets.token_hex(16)


def generate_share_id() -> str:
    """160-bit random id, URL-safe base64 without padding."""
    return secrets.token_urlsafe(20)


def calculate_expiration(now: datetime, days: int) -> datetime:
    return now + timedelta(days=days)


def is_expired(record: FileRecord, now: datetime) -> bool:
    return now > record.expires_at


def is_downloadable(record: FileRecord, now: datetime) -> bool:
    if is_expired(record, now):
        return False
    if record.max_downloads is not None and record.download_count >= record.max_downloads:
        return False
    return True


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return secrets.compare_digest(hash_password(password).encode(), password_hash.encode())
