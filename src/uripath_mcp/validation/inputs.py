"""Input validation for MCP tool parameters."""

import re

# Whitespace and C0/C1 control characters never appear in a URI
_FORBIDDEN = re.compile(r"[\s\x00-\x1f\x7f-\x9f]")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, field: str, message: str) -> None:
        """Initialize validation error.

        Args:
            field: The field that failed validation
            message: Description of what went wrong
        """
        super().__init__(message)
        self.field = field
        self.message = message

    def to_error_response(self) -> dict[str, str]:
        """Convert to MCP-compatible error response.

        Returns:
            Error dict with status, error_code, and message fields
        """
        return {
            "status": "error",
            "error_code": "validation_error",
            "message": f"{self.field}: {self.message}",
        }


def validate_uri_text(field: str, value: str | None, *, max_length: int) -> str:
    """Validate a URI or path string passed to a tool.

    Empty strings are valid: the empty path, or a same-document reference.

    Args:
        field: Parameter name, used in error messages
        value: Value to validate
        max_length: Maximum number of characters

    Returns:
        The value unchanged

    Raises:
        ValidationError: If value is None, not a string, too long, or contains
            whitespace or control characters
    """
    if value is None:
        raise ValidationError(field, f"{field} parameter is required")
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} must be a string, got {type(value).__name__}")
    if len(value) > max_length:
        raise ValidationError(
            field, f"{field} is too long: {len(value)} characters (max {max_length})"
        )
    if match := _FORBIDDEN.search(value):
        raise ValidationError(
            field,
            f"{field} contains whitespace or control character {match.group()!r} "
            f"at index {match.start()}; percent-encode it",
        )
    return value
