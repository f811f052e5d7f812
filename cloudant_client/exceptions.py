from typing import Optional


class CloudantError(Exception):
    """Base class for every error raised by this package."""


class TransportError(CloudantError):
    """The request did not produce an HTTP response (connection, DNS, TLS or timeout failure)."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class APIError(CloudantError):
    """The server answered with a non-2xx status.

    ``error`` and ``reason`` are read from the JSON error body the server sends alongside
    most failures, e.g. ``{"error": "not_found", "reason": "missing"}``. They are ``None``
    when the body is empty or is not a JSON object.
    """

    def __init__(
        self,
        url: str,
        status_code: int,
        body: str = "",
        error: Optional[str] = None,
        reason: Optional[str] = None,
        http_reason: str = "",
    ):
        message = body or f"{status_code} {http_reason}".strip()
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
        self.error = error
        self.reason = reason


class BadRequestError(APIError):
    pass


class UnauthorizedError(APIError):
    pass


class NotFoundError(APIError):
    pass


class ConflictError(APIError):
    pass


class ServerError(APIError):
    pass


class ResponseDecodeError(CloudantError):
    """A successful response carried a body that is not the JSON we expected."""

    def __init__(self, url: str, body: str, message: str):
        super().__init__(message)
        self.url = url
        self.body = body


_STATUS_ERRORS = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: UnauthorizedError,
    404: NotFoundError,
    409: ConflictError,
}


def error_class_for_status(status_code: int) -> type:
    if status_code >= 500:
        return ServerError
    return _STATUS_ERRORS.get(status_code, APIError)
