"""File Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileRecord(CamelModel):
    """Persisted metadata for one uploaded file."""

    id: str
    share_id: str
    original_name: str
    stored_name: str
    size: int
    mime_type: str
    uploaded_at: datetime
    expires_at: datetime
    password_hash: str | None = None
    download_count: int = 0
    max_downloads: int | None = None

    @property
    def is_password_protected(self) -> bool:
        return bool(self.password_hash)


class FileMetadata(CamelModel):
    """Display-safe view of a FileRecord: no password hash, no stored name."""

    id: str
    original_name: str
    size: int
    mime_type: str
    uploaded_at: datetime
    expires_at: datetime
    is_password_protected: bool
    download_count: int
    max_downloads: int | None = None
    is_image: bool

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileMetadata":
        return cls(
            id=record.id,
            original_name=record.original_name,
            size=record.size,
            mime_type=record.mime_type,
            uploaded_at=record.uploaded_at,
            expires_at=record.expires_at,
            is_password_protected=record.is_password_protected,
            download_count=record.download_count,
            max_downloads=record.max_downloads,
            is_image=record.mime_type.startswith("image/"),
        )


class FileListResponse(BaseModel):
    success: bool = True
    files: list[FileMetadata]


class DeleteResponse(BaseModel):
    success: bool = True
    message: str = "File deleted successfully"


class CleanupResponse(BaseModel):
    removed: int
