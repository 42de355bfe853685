"""Error taxonomy shared by the document cache and the upstream relay."""


class RelayError(Exception):
    """Base class for errors raised while serving a relay request."""


class MissingInputError(RelayError):
    """Raised when a request carries no file or payload to work on."""


class PayloadTooLargeError(RelayError):
    """Raised when an upload exceeds its configured size ceiling."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Payload of {size} bytes exceeds limit of {limit} bytes")
        self.size = size
        self.limit = limit


class UpstreamError(RelayError):
    """Raised when the upstream provider fails or answers with a non-success status.

    The upstream body is kept for server-side logging only.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
