"""URI reference value built on urllib.parse.

urlsplit() does the actual parsing. This wrapper only adds what the resolver
needs and SplitResult cannot tell apart: an absent component versus an empty
one (``file:/x`` vs ``file:///x``, ``a`` vs ``a?``). Components are kept
percent-encoded exactly as they appeared in the input.
"""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from .errors import InvalidArgument

# Characters urlsplit silently drops: tab, CR, LF anywhere, and leading C0
# controls or space
_DROPPED_BY_URLSPLIT = re.compile(r"[\t\r\n]|^[\x00-\x20]")


@dataclass(frozen=True)
class URIReference:
    """A parsed URI or relative reference.

    Attributes:
        scheme: Scheme without ':' (lowercased by urlsplit), None if absent
        authority: Raw authority, '' when empty, None when absent
        path: Raw path (may be empty)
        query: Raw query without '?', None when absent
        fragment: Raw fragment without '#', None when absent
    """

    scheme: str | None = None
    authority: str | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    @classmethod
    def parse(cls, text: str) -> "URIReference":
        """Parse a URI or relative reference.

        The scheme is lowercased, as urlsplit does; every other component is
        kept exactly as written. Text that urlsplit would alter by dropping
        characters is rejected instead.

        Args:
            text: URI reference string

        Returns:
            URIReference with raw components

        Raises:
            InvalidArgument: If text contains a tab, CR or LF, or starts with
                a control character or space
            ValueError: If urlsplit rejects the input (e.g. a bad IPv6 host)

        Example:
            >>> ref = URIReference.parse("file:////server/share/")
            >>> ref.authority, ref.path
            ('', '//server/share/')
        """
        if match := _DROPPED_BY_URLSPLIT.search(text):
            raise InvalidArgument(
                "text", f"{match.group()!r} at index {match.start()} must be percent-encoded"
            )

        parts = urlsplit(text)
        scheme = parts.scheme or None

        before_fragment, hash_sign, _ = text.partition("#")
        rest = before_fragment[len(parts.scheme) + 1:] if scheme else before_fragment

        return cls(
            scheme=scheme,
            authority=parts.netloc if rest.startswith("//") else None,
            path=parts.path,
            query=parts.query if "?" in rest else None,
            fragment=parts.fragment if hash_sign else None,
        )

    @property
    def has_authority(self) -> bool:
        return self.authority is not None

    @property
    def is_absolute(self) -> bool:
        """Whether the reference carries a scheme."""
        return self.scheme is not None

    @property
    def is_opaque(self) -> bool:
        """Whether this is an absolute URI whose scheme-specific part does not
        start with '/' (e.g. ``mailto:a@b`` or ``jar:file:/x.jar!/y``)."""
        return self.is_absolute and not self.scheme_specific_part.startswith("/")

    @property
    def scheme_specific_part(self) -> str:
        """Raw text between 'scheme:' and '#'."""
        result = self.path
        if self.authority is not None:
            result = f"//{self.authority}{result}"
        if self.query is not None:
            result = f"{result}?{self.query}"
        return result

    @property
    def raw_path(self) -> str | None:
        """Raw hierarchical path, or None for opaque URIs."""
        return None if self.is_opaque else self.path

    def __str__(self) -> str:
        """Recompose the reference (RFC 3986 section 5.3)."""
        out = []
        if self.scheme is not None:
            out.append(f"{self.scheme}:")
        out.append(self.scheme_specific_part)
        if self.fragment is not None:
            out.append(f"#{self.fragment}")
        return "".join(out)
