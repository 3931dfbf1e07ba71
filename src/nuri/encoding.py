"""nuri.encoding
Percent-encoding and percent-decoding (RFC 3986 section 2.1),
with one named set of pass-through characters per syntactic context.
"""

import enum
import re

from typing import Self

from .errors import InvalidPercentEncoding, InvalidUTF8
from .grammar import PCT_ENCODED_PAT, SUB_DELIMS_CHARS, UNRESERVED_CHARS


class EncodeSet(enum.Enum):
    """Which characters `encode` may emit unescaped. Unreserved characters are in every set."""

    UNRESERVED = "unreserved"
    COMPONENT = "component"
    QUERY = "query"
    QUERY_FORM_VALUE = "query_form_value"
    USERINFO = "userinfo"
    FRAGMENT = "fragment"

    def allows(self: Self, char: str) -> bool:
        return char in _ALLOWED[self]


_ALLOWED: dict[EncodeSet, frozenset[str]] = {
    EncodeSet.UNRESERVED: frozenset(UNRESERVED_CHARS),
    # A single path segment, so no "/".
    EncodeSet.COMPONENT: frozenset(UNRESERVED_CHARS + SUB_DELIMS_CHARS + ":@"),
    EncodeSet.QUERY: frozenset(UNRESERVED_CHARS + SUB_DELIMS_CHARS + ":@/?"),
    # application/x-www-form-urlencoded: "&", "=" and "+" delimit, so they never pass through.
    EncodeSet.QUERY_FORM_VALUE: frozenset(UNRESERVED_CHARS + "!$'()*,;:@/?"),
    EncodeSet.USERINFO: frozenset(UNRESERVED_CHARS + SUB_DELIMS_CHARS + ":"),
    EncodeSet.FRAGMENT: frozenset(UNRESERVED_CHARS + SUB_DELIMS_CHARS + ":@/?"),
}


def _escape(char: str) -> str:
    return "".join(f"%{byte:02X}" for byte in char.encode("utf-8", "surrogatepass"))


def encode(text: str, encode_set: EncodeSet = EncodeSet.UNRESERVED) -> str:
    """Percent-encode every character of text that encode_set does not allow.
    Not idempotent: a "%" is always escaped, so encoding twice turns "%20" into "%2520".
    """
    allowed: frozenset[str] = _ALLOWED[encode_set]
    form: bool = encode_set is EncodeSet.QUERY_FORM_VALUE
    result: list[str] = []
    for char in text:
        if char in allowed:
            result.append(char)
        elif form and char == " ":
            result.append("+")
        else:
            result.append(_escape(char))
    return "".join(result)


def decode_to_bytes(text: str, *, form: bool = False) -> bytes:
    """Undo percent-encoding without interpreting the resulting octets.
    Literal characters contribute their UTF-8 encoding.
    """
    result: bytearray = bytearray()
    i: int = 0
    while i < len(text):
        char: str = text[i]
        if char == "%":
            if PCT_ENCODED_PAT.match(text, i) is None:
                raise InvalidPercentEncoding(i)
            result.append(int(text[i + 1 : i + 3], base=16))
            i += 3
            continue
        if form and char == "+":
            result.append(ord(" "))
        else:
            result.extend(char.encode("utf-8", "surrogatepass"))
        i += 1
    return bytes(result)


def decode(text: str, *, form: bool = False) -> str:
    """Undo percent-encoding. With form=True, "+" also decodes to a space."""
    octets: bytes = decode_to_bytes(text, form=form)
    try:
        return octets.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUTF8(e.start) from e


def decode_form(text: str) -> str:
    """Decode an application/x-www-form-urlencoded value."""
    return decode(text, form=True)


def validate(text: str) -> None:
    """Raise the first error that decode(text) would raise, if any."""
    decode(text)


_LOWERCASE_PCT_PAT: re.Pattern[str] = re.compile(r"%(?:[a-f][0-9A-Fa-f]|[0-9A-F][a-f])")


def capitalize_percent_encodings(text: str) -> str:
    """Returns text with all percent-encoded sequences expressed in capital letters.
    e.g. capitalize_percent_encodings("example%2ecom") == "example%2Ecom"
    """
    return _LOWERCASE_PCT_PAT.sub(lambda m: m[0].upper(), text)


def _decode_if_unreserved(m: re.Match[str]) -> str:
    char: str = chr(int(m[0][1:], base=16))
    return char if char in UNRESERVED_CHARS else m[0]


def decode_unreserved(text: str) -> str:
    """Decode only the escapes that stand for unreserved characters (RFC 3986 section 6.2.2.2).
    e.g. decode_unreserved("%7Euser%2Fx") == "~user%2Fx"
    """
    return PCT_ENCODED_PAT.sub(_decode_if_unreserved, text)
