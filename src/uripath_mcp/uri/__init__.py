"""URI path decomposition and reference resolution."""

from .codec import percent_decode, percent_encode
from .errors import InvalidArgument, MalformedPercentEncoding, NullArgument, URIError
from .path import URIPath
from .reference import URIReference
from .resolver import remove_dot_segments, resolve

__all__ = [
    "InvalidArgument",
    "MalformedPercentEncoding",
    "NullArgument",
    "URIError",
    "URIPath",
    "URIReference",
    "percent_decode",
    "percent_encode",
    "remove_dot_segments",
    "resolve",
]
