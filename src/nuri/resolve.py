"""nuri.resolve
Reference resolution, RFC 3986 section 5.2.
"""

from typing import Iterable

from .errors import InvalidScheme, ParseError
from .logger import get_logger
from .normalize import guard_path, remove_dot_segments
from .parse import parse
from .uri import Authority, Uri

_logger = get_logger("resolve")


def _merge_paths(base: Uri, r: Uri) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3"""
    if base.authority is not None and len(base.path) == 0:
        return f"/{r.path}"
    dirname, slash, _ = base.path.rpartition("/")
    return dirname + slash + r.path


def resolve(base: Uri, r: Uri, *, strict: bool = True) -> Uri:
    """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2

    base must be absolute. With strict=False, a reference whose scheme equals the
    base's scheme is treated as if it had none, for backward compatibility (section 5.2.2).
    """
    if base.scheme is None:
        raise InvalidScheme("base URI is not absolute")

    scheme: str
    authority: Authority | None
    path: str
    query: str | None

    # This is a direct translation of the pseudocode in the RFC.
    # It could be made prettier, but it is easy to check against the RFC like this.
    r_scheme: str | None = r.scheme
    if not strict and r_scheme is not None and r_scheme.lower() == base.scheme.lower():
        r_scheme = None
    if r_scheme is not None:
        scheme = r_scheme
        authority = r.authority
        path = remove_dot_segments(r.path)
        query = r.query
    else:
        if r.authority is not None:
            authority = r.authority
            path = remove_dot_segments(r.path)
            query = r.query
        else:
            if len(r.path) == 0:
                path = base.path
                if r.query is not None:
                    query = r.query
                else:
                    query = base.query
            else:
                if r.path.startswith("/"):
                    path = remove_dot_segments(r.path)
                else:
                    path = _merge_paths(base, r)
                    path = remove_dot_segments(path)
                query = r.query
            authority = base.authority
        scheme = base.scheme
    fragment: str | None = r.fragment

    return Uri(
        scheme=scheme,
        authority=authority,
        path=guard_path(path, authority is not None),
        query=query,
        fragment=fragment,
    )


def resolve_all(base: Uri, references: Iterable[Uri | str], *, strict: bool = True) -> list[Uri | ParseError]:
    """Resolve each reference against base. Strings are parsed first.

    Returns one entry per reference, in order. A reference that fails gets its
    ParseError in place of a Uri; the others are still resolved.
    """
    results: list[Uri | ParseError] = []
    for i, reference in enumerate(references):
        try:
            r: Uri = parse(reference) if isinstance(reference, str) else reference
            results.append(resolve(base, r, strict=strict))
        except ParseError as e:
            _logger.debug(f"reference {i} ({reference!s}) failed: {e}")
            results.append(e)
    return results


def join(base: str, reference: str, *, strict: bool = True) -> str:
    """Resolve reference against base, both given as text."""
    return resolve(parse(base), parse(reference), strict=strict).serialize()
