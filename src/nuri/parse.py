"""nuri.parse
RFC 3986 URI-reference parser, with an RFC 3987 IRI mode.

The input is split left to right into scheme, authority, path, query and fragment,
and each piece is checked against its ABNF rule from nuri.grammar.
Nothing is decoded or case-folded here; see nuri.normalize for that.
Every error position is an index into the string that was passed in.
"""

import re

from .errors import (
    EmptyInput,
    InvalidCharacter,
    InvalidHost,
    InvalidPercentEncoding,
    InvalidPort,
    InvalidScheme,
    ParseError,
)
from .grammar import (
    ALPHA,
    COMPONENT_PATS,
    IPV4_PAT,
    IPV6_PAT,
    IPV6Z_PAT,
    IPVFUTURE_PAT,
    PORT_PAT,
    SCHEME_PAT,
)
from .logger import get_logger
from .uri import Authority, Host, HostKind, Uri

_logger = get_logger("parse")

_SCHEME_END_PAT: re.Pattern[str] = re.compile(r"[:/?#]")
_AUTHORITY_END_PAT: re.Pattern[str] = re.compile(r"[/?#]")
_PATH_END_PAT: re.Pattern[str] = re.compile(r"[?#]")
_ALPHA_PAT: re.Pattern[str] = re.compile(ALPHA)


def _find(pattern: re.Pattern[str], data: str, start: int) -> int:
    """Index of the first match of pattern at or after start, or len(data)."""
    m: re.Match[str] | None = pattern.search(data, start)
    return m.start() if m is not None else len(data)


def _check_component(data: str, start: int, end: int, component: str, iri: bool) -> None:
    """Raise on the first character of data[start:end] that the component's rule rejects."""
    m: re.Match[str] | None = COMPONENT_PATS[(component, iri)].match(data, start, end)
    stop: int = m.end() if m is not None else start
    if stop < end:
        if data[stop] == "%":
            raise InvalidPercentEncoding(stop)
        raise InvalidCharacter(stop, data[stop])


def _parse_scheme(data: str, colon: int) -> str:
    scheme: str = data[:colon]
    if len(scheme) == 0:
        raise InvalidScheme("empty scheme")
    if _ALPHA_PAT.match(scheme) is None:
        raise InvalidScheme(f"{scheme!r} does not begin with a letter")
    m: re.Match[str] | None = SCHEME_PAT.match(scheme)
    assert m is not None
    if m.end() < len(scheme):
        raise InvalidScheme(f"{scheme[m.end()]!r} is not allowed in a scheme")
    return scheme


def _classify_ip_literal(literal: str, iri: bool) -> HostKind:
    """literal is the text between the brackets."""
    if literal[:1] in ("v", "V"):
        if IPVFUTURE_PAT.fullmatch(literal) is None:
            raise InvalidHost(f"malformed IPvFuture literal [{literal}]")
        return HostKind.IPVFUTURE
    # IRIs don't support zone ids.
    if (IPV6_PAT if iri else IPV6Z_PAT).fullmatch(literal) is None:
        raise InvalidHost(f"malformed IPv6 literal [{literal}]")
    return HostKind.IPV6


def _parse_authority(data: str, start: int, end: int, iri: bool) -> Authority:
    """authority = [ userinfo "@" ] host [ ":" port ]"""
    userinfo: str | None = None
    host_start: int = start
    at: int = data.rfind("@", start, end)
    if at != -1:
        _check_component(data, start, at, "userinfo", iri)
        userinfo = data[start:at]
        host_start = at + 1

    host: Host
    host_end: int
    if host_start < end and data[host_start] == "[":
        close: int = data.find("]", host_start, end)
        if close == -1:
            raise InvalidHost(f"no ']' to close the IP literal {data[host_start:end]!r}")
        host_end = close + 1
        host = Host(data[host_start:host_end], _classify_ip_literal(data[host_start + 1 : close], iri))
        if host_end < end and data[host_end] != ":":
            raise InvalidHost(f"unexpected {data[host_end]!r} after the IP literal {host.text}")
    else:
        colon: int = data.find(":", host_start, end)
        host_end = end if colon == -1 else colon
        host_text: str = data[host_start:host_end]
        if IPV4_PAT.fullmatch(host_text) is not None:
            host = Host(host_text, HostKind.IPV4)
        else:
            _check_component(data, host_start, host_end, "reg_name", iri)
            host = Host(host_text, HostKind.REG_NAME)

    raw_port: str | None = None
    if host_end < end:
        # data[host_end] is ":" here. An empty port is allowed.
        raw_port = data[host_end + 1 : end]
        if PORT_PAT.fullmatch(raw_port) is None:
            raise InvalidPort(raw_port)

    return Authority(host=host, userinfo=userinfo, raw_port=raw_port)


def _parse(data: str, iri: bool, require_scheme: bool | None) -> Uri:
    """require_scheme is True for URIs, False for relative references, and None for either."""
    if len(data) == 0:
        raise EmptyInput()

    scheme: str | None = None
    pos: int = 0
    scheme_end: int = _find(_SCHEME_END_PAT, data, 0)
    if scheme_end < len(data) and data[scheme_end] == ":":
        if require_scheme is False:
            # path-noscheme: the first segment of a relative-ref cannot contain ":"
            raise InvalidCharacter(scheme_end, ":")
        scheme = _parse_scheme(data, scheme_end)
        pos = scheme_end + 1
    elif require_scheme is True:
        raise InvalidScheme("missing scheme")

    authority: Authority | None = None
    if data.startswith("//", pos):
        authority_end: int = _find(_AUTHORITY_END_PAT, data, pos + 2)
        authority = _parse_authority(data, pos + 2, authority_end, iri)
        pos = authority_end

    path_end: int = _find(_PATH_END_PAT, data, pos)
    _check_component(data, pos, path_end, "path", iri)
    path: str = data[pos:path_end]
    pos = path_end

    query: str | None = None
    if pos < len(data) and data[pos] == "?":
        query_end: int = data.find("#", pos + 1)
        if query_end == -1:
            query_end = len(data)
        _check_component(data, pos + 1, query_end, "query", iri)
        query = data[pos + 1 : query_end]
        pos = query_end

    fragment: str | None = None
    if pos < len(data):
        # data[pos] is "#" here.
        _check_component(data, pos + 1, len(data), "fragment", iri)
        fragment = data[pos + 1 :]

    return Uri(scheme=scheme, authority=authority, path=path, query=query, fragment=fragment)


def _parse_logged(data: str, iri: bool, require_scheme: bool | None) -> Uri:
    try:
        return _parse(data, iri, require_scheme)
    except ParseError as e:
        _logger.debug(f"could not parse {data!r}: {e}")
        raise


def parse(data: str, *, iri: bool = False) -> Uri:
    """Parse a URI-reference: either an absolute URI or a relative reference.
    With iri=True, the non-ASCII characters that RFC 3987 allows are accepted too.
    """
    return _parse_logged(data, iri, None)


def parse_uri(data: str) -> Uri:
    """Parse an absolute URI (RFC 3986). Input without a scheme raises InvalidScheme.
    Only ASCII is accepted. Components come back as written, with no case folding and no decoding.
    """
    return _parse_logged(data, False, True)


def parse_iri(data: str) -> Uri:
    """Parse an absolute IRI (RFC 3987). Input without a scheme raises InvalidScheme.
    Non-ASCII characters stay as characters; nothing is folded or decoded, so the result is not converted to a URI.
    IPv6 zone ids are rejected.
    """
    return _parse_logged(data, True, True)


def parse_relative_ref(data: str) -> Uri:
    """RFC 3986-compliant relative-ref parser. A scheme is not allowed.
    e.g. "//example.org/path?query#fragment" or "../path"
    """
    return _parse_logged(data, False, False)


def parse_irelative_ref(data: str) -> Uri:
    """RFC 3987-compliant irelative-ref parser. A scheme is not allowed."""
    return _parse_logged(data, True, False)


def parse_uri_reference(data: str) -> Uri:
    """RFC 3986-compliant URI-Reference parser.
    Only use this when you don't know whether you want to parse a URI or a relative-ref.
    """
    return _parse_logged(data, False, None)


def parse_iri_reference(data: str) -> Uri:
    """RFC 3987-compliant IRI-Reference parser.
    Only use this when you don't know whether you want to parse an IRI or an irelative-ref.
    """
    return _parse_logged(data, True, None)


def is_valid(data: str, *, iri: bool = False) -> bool:
    try:
        _parse(data, iri, None)
    except ParseError:
        return False
    return True
