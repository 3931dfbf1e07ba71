"""nuri.uri
Immutable values produced by the parser and the resolver, and their serialization.
"""

import dataclasses
import enum
import re

from typing import Any, Self

from .errors import InvalidHost, InvalidPort, InvalidScheme
from .grammar import COMPONENT_PATS, IPV4_PAT, IPV6Z_PAT, IPVFUTURE_PAT, PORT_PAT, SCHEME_PAT


class HostKind(enum.Enum):
    """Which alternative of the host rule matched. Decided once, at parse time."""

    REG_NAME = "reg-name"
    IPV4 = "IPv4address"
    IPV6 = "IPv6address"
    IPVFUTURE = "IPvFuture"


@dataclasses.dataclass(frozen=True)
class Host:
    text: str
    kind: HostKind = HostKind.REG_NAME

    def __post_init__(self: Self) -> None:
        if self.is_ip_literal and not (self.text.startswith("[") and self.text.endswith("]")):
            raise InvalidHost(f"{self.kind.value} literal {self.text!r} is not enclosed in brackets")
        if _HOST_PATS[self.kind].fullmatch(self.address) is None:
            raise InvalidHost(f"{self.text!r} is not a valid {self.kind.value}")

    @property
    def is_ip_literal(self: Self) -> bool:
        """True for the bracketed forms."""
        return self.kind in (HostKind.IPV6, HostKind.IPVFUTURE)

    @property
    def address(self: Self) -> str:
        """The host without the brackets around IP literals."""
        if self.is_ip_literal:
            return self.text[1:-1]
        return self.text

    def __str__(self: Self) -> str:
        return self.text


# The IRI alphabets are supersets of the URI ones, so a Host built by either parser passes.
_HOST_PATS: dict[HostKind, re.Pattern[str]] = {
    HostKind.REG_NAME: COMPONENT_PATS[("reg_name", True)],
    HostKind.IPV4: IPV4_PAT,
    HostKind.IPV6: IPV6Z_PAT,
    HostKind.IPVFUTURE: IPVFUTURE_PAT,
}


@dataclasses.dataclass(frozen=True)
class Authority:
    """userinfo@host:port

    raw_port is the port exactly as written. None means there was no ":" at all,
    and "" means there was a ":" with nothing after it.
    """

    host: Host
    userinfo: str | None = None
    raw_port: str | None = None

    def __post_init__(self: Self) -> None:
        if self.userinfo is not None and COMPONENT_PATS[("userinfo", True)].fullmatch(self.userinfo) is None:
            raise ValueError(f"{self.userinfo!r} is not valid userinfo")
        if self.raw_port is not None and PORT_PAT.fullmatch(self.raw_port) is None:
            raise InvalidPort(self.raw_port)

    @property
    def port(self: Self) -> int | None:
        if self.raw_port is not None and len(self.raw_port) > 0:
            return int(self.raw_port, base=10)
        return None

    @property
    def username(self: Self) -> str | None:
        if self.userinfo is None:
            return None
        return self.userinfo.partition(":")[0]

    @property
    def password(self: Self) -> str | None:
        if self.userinfo is None:
            return None
        _, colon, password = self.userinfo.partition(":")
        if len(colon) == 0:
            return None
        return password

    def serialize(self: Self) -> str:
        result: str = ""
        if self.userinfo is not None:
            result += f"{self.userinfo}@"
        result += self.host.text
        if self.raw_port is not None:
            result += f":{self.raw_port}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()


@dataclasses.dataclass(frozen=True)
class Uri:
    """A parsed URI-reference. A scheme of None makes it a relative reference.
    Percent-escapes are kept exactly as written in every component.
    You should not usually instantiate this directly. Instead use one of the parse_* functions.
    """

    scheme: str | None
    authority: Authority | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    def __post_init__(self: Self) -> None:
        if self.scheme is not None and SCHEME_PAT.fullmatch(self.scheme) is None:
            raise InvalidScheme(f"{self.scheme!r} does not match the scheme rule")
        if self.authority is None and self.path.startswith("//"):
            raise ValueError("a path without an authority cannot begin with '//'")
        if self.authority is not None and self.path and not self.path.startswith("/"):
            raise ValueError("a path following an authority must be empty or begin with '/'")

    @property
    def is_absolute(self: Self) -> bool:
        return self.scheme is not None

    @property
    def is_relative(self: Self) -> bool:
        return self.scheme is None

    @property
    def userinfo(self: Self) -> str | None:
        return self.authority.userinfo if self.authority is not None else None

    @property
    def host(self: Self) -> Host | None:
        return self.authority.host if self.authority is not None else None

    @property
    def port(self: Self) -> int | None:
        return self.authority.port if self.authority is not None else None

    def replace(self: Self, **changes: Any) -> Self:
        """Returns a new Uri with the given fields replaced. The invariants are checked again."""
        return dataclasses.replace(self, **changes)

    def serialize(self: Self) -> str:
        """Component recomposition, RFC 3986 section 5.3"""
        result: str = ""
        if self.scheme is not None:
            result += f"{self.scheme}:"
        if self.authority is not None:
            result += f"//{self.authority.serialize()}"
        result += self.path
        if self.query is not None:
            result += f"?{self.query}"
        if self.fragment is not None:
            result += f"#{self.fragment}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()


def to_text(uri: Uri) -> str:
    return uri.serialize()
