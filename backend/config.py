"""Application configuration."""

import os
from pathlib import Path

DATA_DIR = Path(os.environ.get("DATA_DIR", str(Path(__file__).parent.parent / "data")))
DATA_DIR.mkdir(parents=True, exist_ok=True)

UPLOADS_DIR = DATA_DIR / "uploads"
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)

METADATA_DIR = DATA_DIR / "metadata"
METADATA_DIR.mkdir(parents=True, exist_ok=True)

# Upload limits
MAX_FILE_SIZE = int(os.environ.get("SHARE_MAX_FILE_SIZE", str(50 * 1024 * 1024)))
DEFAULT_EXPIRATION_DAYS = int(os.environ.get("SHARE_DEFAULT_EXPIRATION_DAYS", "7"))
MAX_EXPIRATION_DAYS = int(os.environ.get("SHARE_MAX_EXPIRATION_DAYS", "3650"))

# Share links are built from this when set, else from the request's base URL
BASE_URL = os.environ.get("SHARE_BASE_URL", "").strip().rstrip("/")

# Metadata backend: "json" (one file per record) or "sql"
METADATA_BACKEND = os.environ.get("SHARE_METADATA_BACKEND", "json").strip().lower()
DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{DATA_DIR}/share.db")

# Admin authentication
SHARE_ADMIN_USER = os.environ.get("SHARE_ADMIN_USER", "").strip()
SHARE_ADMIN_PASS = os.environ.get("SHARE_ADMIN_PASS", "").strip()
ADMIN_ENABLED = bool(SHARE_ADMIN_USER and SHARE_ADMIN_PASS)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
