"""File ORM model."""

from sqlalchemy import Column, DateTime, Integer, String

from database import Base


class FileModel(Base):
    __tablename__ = "files"

    id = Column(String(32), primary_key=True)
    share_id = Column(String, unique=True, nullable=False, index=True)
    original_name = Column(String, nullable=False)
    stored_name = Column(String, nullable=False)
    size = Column(Integer, default=0)
    mime_type = Column(String, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    password_hash = Column(String(64), nullable=True)
    download_count = Column(Integer, default=0)
    max_downloads = Column(Integer, nullable=True)
