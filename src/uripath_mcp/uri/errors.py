"""Exceptions raised by the URI core."""


class URIError(Exception):
    """Base exception for URI path and resolution errors."""

    error_code = "uri_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_error_response(self) -> dict[str, str]:
        """Convert to MCP-compatible error response.

        Returns:
            Error dict with status, error_code, and message fields
        """
        return {
            "status": "error",
            "error_code": self.error_code,
            "message": self.message,
        }


class MalformedPercentEncoding(URIError, ValueError):
    """A '%' in a token is not followed by two hexadecimal digits."""

    error_code = "malformed_percent_encoding"

    def __init__(self, token: str, position: int) -> None:
        """Initialize malformed percent-encoding error.

        Args:
            token: The raw token that failed to decode
            position: Index of the offending '%' in the token
        """
        escape = token[position:position + 3]
        super().__init__(f"Malformed percent-encoding at index {position} in {token!r}: invalid escape {escape!r}")
        self.token = token
        self.position = position


class InvalidArgument(URIError, ValueError):
    """A required argument is missing or has the wrong type."""

    error_code = "invalid_argument"

    def __init__(self, argument: str, message: str) -> None:
        super().__init__(f"{argument}: {message}")
        self.argument = argument


class NullArgument(InvalidArgument):
    """A required argument is None."""

    def __init__(self, argument: str) -> None:
        super().__init__(argument, "must not be None")
