"""Error taxonomy for the file-sharing API.

Every error carries the HTTP status it maps to. The exception handlers in
``fileshare.main`` turn them into ``{"error": message}`` payloads.
"""


class FileShareError(Exception):
    """Base class for errors reported to the client."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(FileShareError):
    status_code = 400
    default_message = "Bad request"


class FileTooLargeError(ClientInputError):
    """Raised when an upload exceeds MAX_UPLOAD_SIZE."""

    default_message = "File too large"

    def __init__(self, limit: int, message: str | None = None):
        self.limit = limit
        super().__init__(message)


class AuthorizationError(FileShareError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(FileShareError):
    status_code = 404
    default_message = "File not found"


class StorageFailure(FileShareError):
    status_code = 500
    default_message = "Storage failure"


class UploadFailedError(FileShareError):
    """The upload request could not be processed (e.g. unparsable ``user`` field)."""

    status_code = 500
    default_message = "Error uploading file"


def safe_error_message(e: Exception, fallback: str = "Internal server error") -> str:
    """Extract a meaningful error message from an exception.

    Some exceptions produce an empty str(e). This helper falls back to the
    exception class name.
    """
    msg = str(e).strip()
    if not msg:
        msg = f"{type(e).__name__}: {fallback}"
    return msg
