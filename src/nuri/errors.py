"""nuri.errors
Structured failures raised by the parser, the codec, and the resolver.
Each error carries the data needed to build a message; the message is derived from it.
"""

import enum

from typing import Self


class ErrorKind(enum.Enum):
    INVALID_SCHEME = "invalid scheme"
    INVALID_PORT = "invalid port"
    INVALID_HOST = "invalid host"
    INVALID_PERCENT_ENCODING = "invalid percent-encoding"
    INVALID_CHARACTER = "invalid character"
    EMPTY = "empty input"
    INVALID_UTF8 = "invalid UTF-8"


class _StructuredError(ValueError):
    """Errors compare equal when they are of the same kind and carry the same data."""

    kind: ErrorKind

    def __str__(self: Self) -> str:
        return self.kind.value

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, _StructuredError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self: Self) -> int:
        return hash((type(self), self.args))


class ParseError(_StructuredError):
    """Base class for everything that can go wrong while parsing a URI-reference."""


class DecodeError(_StructuredError):
    """Base class for percent-decoding failures."""


class InvalidScheme(ParseError):
    kind = ErrorKind.INVALID_SCHEME

    def __init__(self: Self, reason: str) -> None:
        super().__init__(reason)
        self.reason: str = reason

    def __str__(self: Self) -> str:
        return f"invalid scheme: {self.reason}"


class InvalidPort(ParseError):
    kind = ErrorKind.INVALID_PORT

    def __init__(self: Self, raw: str) -> None:
        super().__init__(raw)
        self.raw: str = raw

    def __str__(self: Self) -> str:
        return f"invalid port: {self.raw!r}"


class InvalidHost(ParseError):
    kind = ErrorKind.INVALID_HOST

    def __init__(self: Self, reason: str) -> None:
        super().__init__(reason)
        self.reason: str = reason

    def __str__(self: Self) -> str:
        return f"invalid host: {self.reason}"


class InvalidPercentEncoding(ParseError, DecodeError):
    """A "%" that is not followed by two hex digits."""

    kind = ErrorKind.INVALID_PERCENT_ENCODING

    def __init__(self: Self, position: int) -> None:
        super().__init__(position)
        self.position: int = position

    def __str__(self: Self) -> str:
        return f"invalid percent-encoding at position {self.position}"


class InvalidCharacter(ParseError):
    kind = ErrorKind.INVALID_CHARACTER

    def __init__(self: Self, position: int, char: str) -> None:
        super().__init__(position, char)
        self.position: int = position
        self.char: str = char

    def __str__(self: Self) -> str:
        return f"invalid character {self.char!r} at position {self.position}"


class EmptyInput(ParseError):
    kind = ErrorKind.EMPTY


class InvalidUTF8(DecodeError):
    """The decoded octets are not valid UTF-8.
    position is an offset into the decoded octets, not into the escaped text.
    """

    kind = ErrorKind.INVALID_UTF8

    def __init__(self: Self, position: int) -> None:
        super().__init__(position)
        self.position: int = position

    def __str__(self: Self) -> str:
        return f"invalid UTF-8 sequence at byte {self.position}"
