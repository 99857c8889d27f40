"""Errors raised by the file lifecycle services.

Each error carries the HTTP status the controllers answer with.
"""


class ShareError(Exception):
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)


class ValidationError(ShareError):
    """Upload rejected; the caller must retry with different input."""

    status_code = 400
    default_message = "Invalid upload"


class TooLarge(ValidationError):
    default_message = "File too large"


class UnsupportedType(ValidationError):
    default_message = "File type not supported"


class NotFound(ShareError):
    status_code = 404
    default_message = "File not found"


class Unauthorized(ShareError):
    status_code = 401
    default_message = "Password required"


class Gone(ShareError):
    status_code = 410
    default_message = "File expired or download limit exceeded"


class InternalError(ShareError):
    """Store I/O failed. The message is generic; details go to the log."""

    status_code = 500
