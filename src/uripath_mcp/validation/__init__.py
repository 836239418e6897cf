"""Input validation utilities."""

from .inputs import ValidationError, validate_uri_text

__all__ = [
    "ValidationError",
    "validate_uri_text",
]
