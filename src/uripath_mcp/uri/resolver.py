"""Reference resolution (RFC 3986 section 5) with two real-world extensions.

resolve() follows the generic algorithm except for two URI shapes it gets
wrong:

- Composite URIs that embed an inner path after '!', as used for archive
  members (``jar:file:///a/b.jar!/c``). The part up to the '!' is kept as-is
  and only the inner path takes part in the merge.
- UNC-style file URIs (``file:////server/share/dir/``). The run of leading
  slashes is kept exactly as given and dot segments never climb into it.
"""

from collections.abc import Callable, Collection
from dataclasses import replace

from ..logging_config import get_logger
from .errors import InvalidArgument, NullArgument
from .reference import URIReference

logger = get_logger("uri.resolver")


def resolve(
    context: URIReference | str,
    reference: URIReference | str,
    *,
    composite_schemes: Collection[str] | None = None,
) -> URIReference:
    """Resolve a reference against a context (base) URI.

    Args:
        context: Base URI
        reference: Relative or absolute reference
        composite_schemes: Schemes for which a '!' in the scheme-specific part
            marks an inner path. None means any scheme.

    Returns:
        The resolved URI. When the reference is an absolute URI with another
        scheme, the reference itself is returned; a string reference is
        parsed first, so its scheme comes back lowercased.

    Raises:
        InvalidArgument: If context or reference is None, not a URI, or a
            string that URIReference.parse rejects
        ValueError: If a string argument is rejected by urllib.parse

    Example:
        >>> str(resolve("jar:file:///a/b.jar!/c", "d"))
        'jar:file:///a/b.jar!/d'
    """
    context = _coerce("context", context)
    reference = _coerce("reference", reference)

    if reference.is_absolute and (reference.scheme != context.scheme or reference.is_opaque):
        logger.debug("Reference is absolute", extra={"uri": str(reference), "strategy": "absolute"})
        return reference

    # Same scheme (RFC 3986 5.2.2 non-strict): resolve as if it were relative
    reference = replace(reference, scheme=None)

    if reference.has_authority:
        strategy = "network_path"
        result = _merge(context, reference)
    elif _is_composite(context, composite_schemes):
        strategy = "composite"
        result = _resolve_composite(context, reference)
    elif _is_unc(context) and not reference.path.startswith("/"):
        strategy = "unc"
        result = _resolve_unc(context, reference)
    else:
        strategy = "generic"
        result = _merge(context, reference)

    logger.debug(f"Resolved {reference} against {context}", extra={"uri": str(result), "strategy": strategy})
    return result


def remove_dot_segments(path: str) -> str:
    """Remove '.' and '..' segments from a path (RFC 3986 section 5.2.4).

    A '..' removes the preceding segment; at the root it is dropped.

    Example:
        >>> remove_dot_segments("/a/b/c/./../../g")
        '/a/g'
        >>> remove_dot_segments("mid/content=5/../6")
        'mid/6'
    """
    input_ = path
    output: list[str] = []

    while input_:
        # A
        if input_.startswith("../"):
            input_ = input_[3:]
        elif input_.startswith("./"):
            input_ = input_[2:]
        # B
        elif input_.startswith("/./"):
            input_ = input_[2:]
        elif input_ == "/.":
            input_ = "/"
        # C
        elif input_.startswith("/../"):
            input_ = input_[3:]
            if output:
                output.pop()
        elif input_ == "/..":
            input_ = "/"
            if output:
                output.pop()
        # D
        elif input_ in (".", ".."):
            input_ = ""
        # E
        else:
            start = 1 if input_.startswith("/") else 0
            end = input_.find("/", start)
            if end == -1:
                end = len(input_)
            output.append(input_[:end])
            input_ = input_[end:]

    return "".join(output)


def _coerce(name: str, value: URIReference | str) -> URIReference:
    if value is None:
        raise NullArgument(name)
    if isinstance(value, URIReference):
        return value
    if isinstance(value, str):
        return URIReference.parse(value)
    raise InvalidArgument(name, f"expected URIReference or str, got {type(value).__name__}")


def _merge(context: URIReference, reference: URIReference) -> URIReference:
    """Generic resolution of a scheme-less reference (RFC 3986 5.2.2)."""
    if reference.has_authority:
        return replace(
            reference,
            scheme=context.scheme,
            path=remove_dot_segments(reference.path),
        )

    path, query, fragment = _merge_path(context.path, context, reference, remove_dot_segments)
    if context.authority is None and path.startswith("//"):
        # A path starting with "//" must not print as an authority (RFC 3986 5.2.4)
        path = "/." + path
    return replace(context, path=path, query=query, fragment=fragment)


def _merge_path(
    base_path: str,
    context: URIReference,
    reference: URIReference,
    remove_dots: Callable[[str], str],
) -> tuple[str, str | None, str | None]:
    """Merge a reference into a base path, returning (path, query, fragment).

    Query and fragment come from the reference when present. Either one is
    inherited from the context only when the reference path is empty, so
    "?q" against "http://h/p#f" keeps "#f".
    """
    if not reference.path:
        query = reference.query if reference.query is not None else context.query
        fragment = reference.fragment if reference.fragment is not None else context.fragment
        return base_path, query, fragment

    if reference.path.startswith("/"):
        path = remove_dots(reference.path)
    else:
        directory = base_path[: base_path.rfind("/") + 1]
        if not base_path and context.has_authority:
            directory = "/"
        path = remove_dots(directory + reference.path)

    return path, reference.query, reference.fragment


def _is_composite(context: URIReference, composite_schemes: Collection[str] | None) -> bool:
    # A '!' in the query is data, not a separator
    if context.scheme is None or "!" not in context.scheme_specific_part.partition("?")[0]:
        return False
    return composite_schemes is None or context.scheme in composite_schemes


def _resolve_composite(context: URIReference, reference: URIReference) -> URIReference:
    """Resolve against the inner path of a '!'-delimited composite URI."""
    scheme_specific = context.scheme_specific_part
    head = scheme_specific.partition("?")[0]
    separator = head.rfind("!/")
    if separator == -1:
        separator = head.rfind("!")
    outer_prefix = scheme_specific[: separator + 1]

    inner = replace(
        URIReference.parse(scheme_specific[separator + 1:]),
        fragment=context.fragment,
    )
    resolved_inner = _merge(inner, reference)

    return URIReference.parse(f"{context.scheme}:{outer_prefix}{resolved_inner}")


def _is_unc(context: URIReference) -> bool:
    return context.scheme is not None and context.scheme_specific_part.startswith("///")


def _resolve_unc(context: URIReference, reference: URIReference) -> URIReference:
    """Merge on the raw scheme-specific part, keeping its leading slash run."""
    raw_path = context.scheme_specific_part.partition("?")[0]
    path, query, fragment = _merge_path(raw_path, context, reference, _remove_dot_segments_below_slash_run)

    result = f"{context.scheme}:{path}"
    if query is not None:
        result += f"?{query}"
    if fragment is not None:
        result += f"#{fragment}"
    return URIReference.parse(result)


def _remove_dot_segments_below_slash_run(path: str) -> str:
    # All but the last leading '/' are set aside; the last one is the root
    # that '..' cannot climb above.
    run = len(path) - len(path.lstrip("/"))
    if run <= 1:
        return remove_dot_segments(path)
    return path[: run - 1] + remove_dot_segments(path[run - 1:])
