"""Percent-encoding helpers for already-delimited URI tokens.

Decoding is only ever applied to finished tokens (segments, parameter keys and
values). Delimiter scanning happens on the raw text first, so an escaped
'/', ';' or '=' can never act as a delimiter.
"""

import re
from urllib.parse import quote, unquote

from .errors import MalformedPercentEncoding

# A '%' that does not start a two-digit hex escape
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def percent_decode(token: str) -> str:
    """Decode %XX escapes in a raw token.

    Consecutive escapes are decoded together as UTF-8; bytes that do not form
    valid UTF-8 become U+FFFD. Unlike form decoding, '+' is left alone.

    Args:
        token: Raw, percent-encoded token

    Returns:
        Decoded token

    Raises:
        MalformedPercentEncoding: If a '%' is not followed by two hex digits

    Example:
        >>> percent_decode("x%3Dy")
        'x=y'
        >>> percent_decode("caf%C3%A9+latte")
        'café+latte'
        >>> percent_decode("b%FF")
        'b\ufffd'
    """
    if "%" not in token:
        return token

    if match := _BAD_ESCAPE.search(token):
        raise MalformedPercentEncoding(token, match.start())

    return unquote(token, encoding="utf-8", errors="replace")


def percent_encode(text: str, safe: str = "") -> str:
    """Percent-encode text for use inside a path token.

    RFC 3986 unreserved characters are never encoded. Everything else is
    encoded as UTF-8 with uppercase hex digits, except characters in `safe`.

    Args:
        text: Decoded text
        safe: Additional characters to leave unencoded

    Returns:
        Percent-encoded text

    Example:
        >>> percent_encode("a b/c")
        'a%20b%2Fc'
        >>> percent_encode("a:b", safe=":")
        'a:b'
    """
    return quote(text, safe=safe, encoding="utf-8", errors="strict")
