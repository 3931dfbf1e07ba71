"""Well-known default ports, consulted when normalizing and by effective_port."""

import types

from typing import Mapping

from .uri import Uri

DEFAULT_PORTS: Mapping[str, int] = types.MappingProxyType(
    {
        "ftp": 21,
        "ssh": 22,
        "sftp": 22,
        "telnet": 23,
        "smtp": 25,
        "gopher": 70,
        "http": 80,
        "ws": 80,
        "pop": 110,
        "nntp": 119,
        "imap": 143,
        "ldap": 389,
        "https": 443,
        "wss": 443,
        "rtsp": 554,
        "ldaps": 636,
        "imaps": 993,
        "pop3s": 995,
        "sip": 5060,
        "sips": 5061,
        "redis": 6379,
        "git": 9418,
    }
)


def default_port(scheme: str | None) -> int | None:
    if scheme is None:
        return None
    return DEFAULT_PORTS.get(scheme.lower())


def effective_port(uri: Uri) -> int | None:
    """The explicit port if there is one, else the scheme's default."""
    if uri.port is not None:
        return uri.port
    return default_port(uri.scheme)
