"""nuri.normalize
Syntax-based normalization (RFC 3986 section 6.2.2) for comparing URIs.
"""

from .encoding import capitalize_percent_encodings, decode_unreserved
from .grammar import IPV4_PAT
from .ports import default_port
from .uri import Authority, Host, HostKind, Uri


def remove_dot_segments(path: str) -> str:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4"""
    result: str = ""
    while len(path) > 0:
        remaining: int = len(path)
        if path.startswith("./") or path.startswith("../"):
            _, _, path = path.partition("/")
        elif path.startswith("/./") or path == "/.":
            path = f"/{path[len('/./') :]}"
        elif path.startswith("/../") or path == "/..":
            path = f"/{path[len('/../') :]}"
            result, _, _ = result.rpartition("/")
        elif path in (".", ".."):
            path = ""
        else:
            if path.startswith("/"):
                _, _, path = path.partition("/")
                result += "/"
            first_seg, slash, rest = path.partition("/")
            path = slash + rest
            result += first_seg
        assert len(path) < remaining, "remove_dot_segments stopped making progress"
    return result


def guard_path(path: str, has_authority: bool) -> str:
    """Keep a path that starts with "//" from being read back as an authority."""
    if not has_authority and path.startswith("//"):
        return f"/.{path}"
    return path


def _normalize_escapes(component: str) -> str:
    return decode_unreserved(capitalize_percent_encodings(component))


def _normalize_host(host: Host) -> Host:
    if host.kind is not HostKind.REG_NAME:
        return host
    text: str = decode_unreserved(host.text)
    if text.isascii():
        text = text.lower()
    text = capitalize_percent_encodings(text)
    # Decoding can turn a reg-name into a dotted quad, which the parser would read as IPv4.
    if IPV4_PAT.fullmatch(text) is not None:
        return Host(text, HostKind.IPV4)
    return Host(text, HostKind.REG_NAME)


def _normalize_port(raw_port: str | None, scheme: str | None) -> str | None:
    if raw_port is None or len(raw_port) == 0:
        return None
    port: int = int(raw_port, base=10)
    if port == default_port(scheme):
        return None
    # Get rid of leading 0s.
    return str(port)


def _normalize_authority(authority: Authority, scheme: str | None) -> Authority:
    return Authority(
        host=_normalize_host(authority.host),
        userinfo=_normalize_escapes(authority.userinfo) if authority.userinfo is not None else None,
        raw_port=_normalize_port(authority.raw_port, scheme),
    )


def normalize(uri: Uri) -> Uri:
    """Case, percent-encoding, port, and path normalization. Never fails, and normalize(normalize(u)) == normalize(u).

    The path of a relative reference is only flattened when it is absolute,
    because leading ".." segments of a rootless path still mean something.
    """
    scheme: str | None = uri.scheme.lower() if uri.scheme is not None else None
    authority: Authority | None = None
    if uri.authority is not None:
        authority = _normalize_authority(uri.authority, scheme)

    path: str = _normalize_escapes(uri.path)
    if scheme is not None or path.startswith("/"):
        path = remove_dot_segments(path)
    if authority is not None and len(path) == 0:
        path = "/"
    path = guard_path(path, authority is not None)

    return Uri(
        scheme=scheme,
        authority=authority,
        path=path,
        query=_normalize_escapes(uri.query) if uri.query is not None else None,
        fragment=_normalize_escapes(uri.fragment) if uri.fragment is not None else None,
    )


def equals_normalized(a: Uri, b: Uri) -> bool:
    return normalize(a) == normalize(b)
