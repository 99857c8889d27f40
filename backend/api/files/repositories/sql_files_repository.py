"""SQL metadata backend — same contract as the JSON store, backed by SQLAlchemy."""

from datetime import timezone

from sqlalchemy.orm import sessionmaker

from api.files.dto.file import FileRecord
from api.files.orm.file_model import FileModel
from api.files.repositories.files_repository import MetadataStore


def _model_to_record(model: FileModel) -> FileRecord:
    uploaded_at = model.uploaded_at
    expires_at = model.expires_at
    # SQLite drops the offset; everything is stored in UTC
    if uploaded_at.tzinfo is None:
        uploaded_at = uploaded_at.replace(tzinfo=timezone.utc)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return FileRecord(
        id=model.id,
        share_id=model.share_id,
        original_name=model.original_name,
        stored_name=model.stored_name,
        size=model.size or 0,
        mime_type=model.mime_type,
        uploaded_at=uploaded_at,
        expires_at=expires_at,
        password_hash=model.password_hash,
        download_count=model.download_count or 0,
        max_downloads=model.max_downloads,
    )


class SqlMetadataStore(MetadataStore):
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def put(self, record: FileRecord) -> None:
        with self._session_factory() as session:
            session.merge(FileModel(**record.model_dump()))
            session.commit()

    def get_by_id(self, file_id: str) -> FileRecord | None:
        with self._session_factory() as session:
            model = session.get(FileModel, file_id)
            return _model_to_record(model) if model else None

    def get_by_share_id(self, share_id: str) -> FileRecord | None:
        with self._session_factory() as session:
            model = session.query(FileModel).filter_by(share_id=share_id).first()
            return _model_to_record(model) if model else None

    def delete(self, file_id: str) -> bool:
        with self._session_factory() as session:
            model = session.get(FileModel, file_id)
            if not model:
                return False
            session.delete(model)
            session.commit()
            return True

    def _iter_records(self) -> list[FileRecord]:
        with self._session_factory() as session:
            models = session.query(FileModel).order_by(FileModel.uploaded_at.desc()).all()
            return [_model_to_record(m) for m in models]
