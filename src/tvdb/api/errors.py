"""Exception hierarchy for TheTVDB client failures."""


class TVDBError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class AuthError(TVDBError):
    """Raised when the API key exchange for a token is rejected."""


class TransportError(TVDBError):
    """Raised when the server could not be reached."""


class HttpError(TVDBError):
    """Raised for any non-2xx response."""

    def __init__(self, status_code: int, status_text: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        message = f"HTTP {status_code}"
        if status_text:
            message += f": {status_text}"
        super().__init__(message)


class ParseError(TVDBError):
    """Raised when a response body is not a valid JSON envelope."""


class ApiError(TVDBError):
    """Raised when a 2xx response carries an ``Error`` message."""
