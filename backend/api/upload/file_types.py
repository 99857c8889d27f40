"""Allowed upload types."""

ALLOWED_MIME_TYPES = frozenset({
    # Images
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
    # Documents
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    # Text
    "text/plain",
    "text/csv",
    "application/json",
    "text/markdown",
    # Archives
    "application/zip",
    "application/x-rar-compressed",
    "application/x-7z-compressed",
    # Audio
    "audio/mpeg",
    "audio/wav",
    "audio/ogg",
    # Video
    "video/mp4",
    "video/mpeg",
    "video/quicktime",
    "video/x-msvideo",
})


def is_file_type_allowed(mime_type: str | None) -> bool:
    return mime_type in ALLOWED_MIME_TYPES


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024**2:
        return f"{size / 1024:.1f} KB"
    if size < 1024**3:
        return f"{size / 1024**2:.1f} MB"
    return f"{size / 1024**3:.1f} GB"
