"""Decomposition of the path component of a URI.

A URIPath is parsed once from a raw (percent-encoded) path and never changes.
The raw string is kept verbatim; everything else is derived from it:

    a/b;x=y;z=
    ^^            directory_name "a/"
      ^           file_name "b"
       ^^^^^^^^   parameters {"x": "y", "z": ""}

Delimiters are found in the raw text before any token is decoded, so
"a%2Fb" is one segment ("a/b") and "b%3Bx=y" is a file name without
parameters ("b;x=y").
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .codec import percent_decode, percent_encode
from .errors import InvalidArgument, NullArgument
from .reference import URIReference

# RFC 3986 sub-delims and '@' allowed unescaped in a segment, minus ';'
# which would start a parameter. ':' is added except in the first segment of
# a relative path, where it would read as a scheme.
_SEGMENT_SAFE = "@!$&'()*+,="
_SEGMENT_SAFE_COLON = _SEGMENT_SAFE + ":"


@dataclass(frozen=True)
class URIPath:
    """Immutable view of a raw URI path.

    Equality and hashing use the raw string only.

    Attributes:
        raw: The path exactly as given
        is_absolute: Path starts with '/'
        is_directory: Path is empty or ends with '/'
        segments: Decoded, non-empty segments; the last one without parameters
        parameters: Decoded matrix parameters of the final segment
        directory_name: Raw path up to and including the last '/'
        file_name: Decoded final segment without parameters ('' for directories)
    """

    raw: str
    is_absolute: bool = field(compare=False)
    is_directory: bool = field(compare=False)
    segments: tuple[str, ...] = field(compare=False)
    parameters: Mapping[str, str] = field(compare=False)
    directory_name: str = field(compare=False)
    file_name: str = field(compare=False)

    @classmethod
    def parse(cls, raw: str) -> "URIPath":
        """Parse a raw, percent-encoded path.

        Args:
            raw: Path component, e.g. "/a/b;type=i"

        Returns:
            URIPath for the given path

        Raises:
            NullArgument: If raw is None
            InvalidArgument: If raw is not a string
            MalformedPercentEncoding: If a token contains a bad escape

        Example:
            >>> path = URIPath.parse("a/b;x%3Dy=z")
            >>> path.segments, dict(path.parameters)
            (('a', 'b'), {'x=y': 'z'})
        """
        if raw is None:
            raise NullArgument("raw")
        if not isinstance(raw, str):
            raise InvalidArgument("raw", f"expected str, got {type(raw).__name__}")

        tokens = raw.split("/")
        last = tokens.pop()

        # Only the final segment carries parameters
        base, *parameter_tokens = last.split(";")
        parameters: dict[str, str] = {}
        for token in parameter_tokens:
            if not token:
                continue
            key, _, value = token.partition("=")
            parameters[percent_decode(key)] = percent_decode(value)

        segments = [percent_decode(token) for token in tokens if token]
        file_name = percent_decode(base)
        if file_name:
            segments.append(file_name)

        is_directory = raw == "" or raw.endswith("/")

        return cls(
            raw=raw,
            is_absolute=raw.startswith("/"),
            is_directory=is_directory,
            segments=tuple(segments),
            parameters=MappingProxyType(parameters),
            directory_name=raw[: raw.rfind("/") + 1],
            file_name="" if is_directory else file_name,
        )

    @classmethod
    def from_uri(cls, uri: URIReference | str) -> "URIPath":
        """Create a URIPath from the raw path of a URI.

        Note that a URI with an authority and an empty path (for example
        "scheme://example.com") has the empty path, which is not absolute.

        Args:
            uri: Parsed reference or URI string

        Returns:
            URIPath of the URI's raw path

        Raises:
            NullArgument: If uri is None
            InvalidArgument: If the URI is opaque and has no hierarchical path
        """
        if uri is None:
            raise NullArgument("uri")
        if isinstance(uri, str):
            uri = URIReference.parse(uri)

        raw_path = uri.raw_path
        if raw_path is None:
            raise InvalidArgument("uri", f"opaque URI has no hierarchical path: {uri}")
        return cls.parse(raw_path)

    @property
    def directory_without_slash(self) -> str:
        """Raw directory name without its final '/' ('' for the root)."""
        return self.directory_name[:-1] if self.directory_name else ""

    @property
    def path(self) -> str:
        """Decoded path without parameters.

        Decoded segments may contain '/' themselves, so this is for display
        only and cannot be parsed back.
        """
        result = "/".join(self.segments)
        if self.is_absolute:
            result = "/" + result
        if self.is_directory and self.segments:
            result += "/"
        return result

    def canonical(self) -> str:
        """Re-encode the decoded form into a normalized raw path.

        Escapes are normalized to uppercase hex, unneeded escapes are removed,
        and empty segments are collapsed. Parameters without a value are
        written without '='.

        Example:
            >>> URIPath.parse("a//b%2fc;x=").canonical()
            'a/b%2Fc;x'
        """
        directories = self.segments if self.is_directory or not self.file_name else self.segments[:-1]

        parts = []
        for index, segment in enumerate(directories):
            safe = _SEGMENT_SAFE_COLON if self.is_absolute or index > 0 else _SEGMENT_SAFE
            parts.append(percent_encode(segment, safe=safe) + "/")

        if not self.is_directory:
            safe = _SEGMENT_SAFE_COLON if self.is_absolute or directories else _SEGMENT_SAFE
            parts.append(percent_encode(self.file_name, safe=safe))
            for key, value in self.parameters.items():
                parts.append(";" + percent_encode(key))
                if value:
                    parts.append("=" + percent_encode(value))

        result = "".join(parts)
        return "/" + result if self.is_absolute else result

    def __str__(self) -> str:
        return self.raw
