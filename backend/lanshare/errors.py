"""Request-terminal errors. Each one maps to a JSON `{"error": ...}` response."""


class ShareError(Exception):
    """Base class. `status_code` and `message` are what the client sees."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NoFileProvided(ShareError):
    status_code = 400
    message = "No file uploaded"


class WriteFailure(ShareError):
    status_code = 500
    message = "Failed to save file"


class ListError(ShareError):
    status_code = 500
    message = "Failed to list files"


class NotFound(ShareError):
    status_code = 404
    message = "File not found"


class InvalidFileName(NotFound):
    """A requested name that would leave the storage root.

    Rendered exactly like a missing file.
    """


class EncodingFailure(ShareError):
    status_code = 500
    message = "Failed to generate QR code"
