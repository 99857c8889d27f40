"""Upload Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel

from api.files.dto.file import CamelModel


class UploadedFileInfo(BaseModel):
    id: str
    name: str
    size: int
    type: str


class ShareLink(CamelModel):
    url: str
    share_id: str
    expires_at: datetime
    is_password_protected: bool


class UploadResponse(CamelModel):
    success: bool = True
    file: UploadedFileInfo
    share_link: ShareLink
