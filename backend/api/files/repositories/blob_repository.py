"""Blob repository — raw file bytes, one blob per uploaded file."""

import abc
import logging
from pathlib import Path, PurePosixPath, PureWindowsPath

from errors import NotFound

logger = logging.getLogger(__name__)


def derive_name(file_id: str, original_name: str) -> str:
    """Build a collision-free blob name that still shows the original filename."""
    # Browsers on Windows may send full paths
    basename = PureWindowsPath(PurePosixPath(original_name).name).name
    return f"{file_id}_{basename or 'file'}"


class BlobStore(abc.ABC):
    @abc.abstractmethod
    def save(self, data: bytes, stored_name: str) -> str:
        ...

    @abc.abstractmethod
    def read(self, stored_name: str) -> bytes:
        """Return the blob's bytes, raising NotFound if it is missing."""

    @abc.abstractmethod
    def delete(self, stored_name: str) -> None:
        """Remove the blob; a missing blob is not an error."""

    @abc.abstractmethod
    def list_names(self) -> list[str]:
        ...


class FilesystemBlobStore(BlobStore):
    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, stored_name: str) -> Path:
        path = self.directory / stored_name
        if path.parent != self.directory:
            raise NotFound()
        return path

    def save(self, data: bytes, stored_name: str) -> str:
        self._path(stored_name).write_bytes(data)
        return stored_name

    def read(self, stored_name: str) -> bytes:
        try:
            return self._path(stored_name).read_bytes()
        except FileNotFoundError:
            raise NotFound("File content is missing") from None

    def delete(self, stored_name: str) -> None:
        try:
            self._path(stored_name).unlink(missing_ok=True)
        except NotFound:
            logger.warning("Refusing to delete blob outside store: %s", stored_name)

    def list_names(self) -> list[str]:
        return sorted(p.name for p in self.directory.iterdir() if p.is_file())


class InMemoryBlobStore(BlobStore):
    def __init__(self):
        self.blobs: dict[str, bytes] = {}

    def save(self, data: bytes, stored_name: str) -> str:
        self.blobs[stored_name] = bytes(data)
        return stored_name

    def read(self, stored_name: str) -> bytes:
        try:
            return self.blobs[stored_name]
        except KeyError:
            raise NotFound("File content is missing") from None

    def delete(self, stored_name: str) -> None:
        self.blobs.pop(stored_name, None)

    def list_names(self) -> list[str]:
        return sorted(self.blobs)
