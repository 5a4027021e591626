"""
Domain errors raised by the link store and service layer.

The HTTP layer decides how each one is shown to the user:
- LinkNotFoundError       -> 404
- InvalidDestinationError -> 422
- StorageError            -> 500
"""


class LinkAnalyticsError(Exception):
    """Base class for all link analytics errors"""


class LinkNotFoundError(LinkAnalyticsError):
    """No storage unit exists for the identifier"""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Link not found: {identifier!r}")


class StorageError(LinkAnalyticsError):
    """I/O fault while reading or writing a storage unit"""


class InvalidDestinationError(LinkAnalyticsError):
    """Destination is empty or cannot be stored on a single line"""
