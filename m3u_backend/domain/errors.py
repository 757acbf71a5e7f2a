"""
Domain errors. Each one knows the HTTP status and message the API layer renders.
"""


class RegistryError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingIdentifier(RegistryError):
    status_code = 400
    message = "MAC ID is required"


class MissingReference(RegistryError):
    status_code = 400
    message = "Either M3U file or URL is required"


class NotFound(RegistryError):
    status_code = 404
    message = "MAC ID not found"


class StorageIOError(RegistryError):
    """Persistence failed. The client only sees the generic 500 message."""

    status_code = 500
    message = "Internal server error"


class InternalError(RegistryError):
    status_code = 500
    message = "Internal server error"


class MacLookupError(RegistryError):
    status_code = 500
    message = "Failed to get MAC address"


class InvalidRequest(RegistryError):
    status_code = 400
    message = "Invalid request"
