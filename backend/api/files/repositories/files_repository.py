"""Files repository — metadata persistence, one record per uploaded file.

Records are keyed by their internal ``id``. Lookups by ``share_id`` scan every
record, which is fine for the small record counts this service expects.
"""

import abc
import logging
import re
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError as RecordParseError

from api.files.dto.file import FileRecord

logger = logging.getLogger(__name__)

ExpireHook = Callable[[FileRecord], None]

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class MetadataStore(abc.ABC):
    @abc.abstractmethod
    def put(self, record: FileRecord) -> None:
        """Persist ``record``, overwriting any record with the same id."""

    @abc.abstractmethod
    def get_by_id(self, file_id: str) -> FileRecord | None:
        ...

    @abc.abstractmethod
    def get_by_share_id(self, share_id: str) -> FileRecord | None:
        ...

    @abc.abstractmethod
    def delete(self, file_id: str) -> bool:
        """Remove a record. Returns whether one was actually removed."""

    @abc.abstractmethod
    def _iter_records(self) -> list[FileRecord]:
        ...

    def list_all(
        self,
        now: datetime | None = None,
        on_expire: ExpireHook | None = None,
    ) -> list[FileRecord]:
        """Return every live record, deleting the expired ones on the way.

        ``on_expire`` is called with each expired record before it is deleted.
        """
        now = now or datetime.now(timezone.utc)
        live = []
        for record in self._iter_records():
            if now > record.expires_at:
                if on_expire:
                    on_expire(record)
                self.delete(record.id)
                logger.info("Purged expired file %s", record.id)
                continue
            live.append(record)
        return live


class JsonMetadataStore(MetadataStore):
    """Stores each record as ``<id>.json`` in a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, file_id: str) -> Path | None:
        if not _SAFE_ID.match(file_id):
            return None
        return self.directory / f"{file_id}.json"

    def _load(self, path: Path) -> FileRecord | None:
        try:
            return FileRecord.model_validate_json(path.read_bytes())
        except FileNotFoundError:
            # Deleted between listing and reading
            return None
        except (RecordParseError, UnicodeDecodeError, IsADirectoryError, PermissionError):
            logger.warning("Skipping unreadable metadata file %s", path.name)
            return None

    def put(self, record: FileRecord) -> None:
        path = self._path(record.id)
        if path is None:
            raise ValueError(f"Invalid file id: {record.id!r}")
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(
            record.model_dump_json(by_alias=True, exclude_none=True, indent=2),
            encoding="utf-8",
        )
        tmp.replace(path)

    def get_by_id(self, file_id: str) -> FileRecord | None:
        path = self._path(file_id)
        if path is None or not path.exists():
            return None
        return self._load(path)

    def get_by_share_id(self, share_id: str) -> FileRecord | None:
        for record in self._iter_records():
            if record.share_id == share_id:
                return record
        return None

    def delete(self, file_id: str) -> bool:
        path = self._path(file_id)
        if path is None:
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def _iter_records(self) -> list[FileRecord]:
        records = []
        for path in sorted(self.directory.glob("*.json")):
            record = self._load(path)
            if record is not None:
                records.append(record)
        return records


class InMemoryMetadataStore(MetadataStore):
    """Dict-backed store, used in tests."""

    def __init__(self):
        self._records: dict[str, FileRecord] = {}

    def put(self, record: FileRecord) -> None:
        self._records[record.id] = record.model_copy()

    def get_by_id(self, file_id: str) -> FileRecord | None:
        record = self._records.get(file_id)
        return record.model_copy() if record else None

    def get_by_share_id(self, share_id: str) -> FileRecord | None:
        for record in self._records.values():
            if record.share_id == share_id:
                return record.model_copy()
        return None

    def delete(self, file_id: str) -> bool:
        return self._records.pop(file_id, None) is not None

    def _iter_records(self) -> list[FileRecord]:
        return [r.model_copy() for r in self._records.values()]
