"""Central ORM module — imports all models so create_all sees them."""

from api.files.orm import FileModel

__all__ = [
    "FileModel",
]
