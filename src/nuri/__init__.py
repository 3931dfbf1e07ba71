"""nuri
Parsing, percent-encoding, normalization, and reference resolution for URIs.
Shooting for compatibility with RFCs 3986 and 3987
"""

__version__ = "0.1"

from .encoding import (
    EncodeSet,
    capitalize_percent_encodings,
    decode,
    decode_form,
    decode_to_bytes,
    decode_unreserved,
    encode,
    validate,
)
from .errors import (
    DecodeError,
    EmptyInput,
    ErrorKind,
    InvalidCharacter,
    InvalidHost,
    InvalidPercentEncoding,
    InvalidPort,
    InvalidScheme,
    InvalidUTF8,
    ParseError,
)
from .normalize import equals_normalized, normalize, remove_dot_segments
from .parse import (
    is_valid,
    parse,
    parse_iri,
    parse_iri_reference,
    parse_irelative_ref,
    parse_relative_ref,
    parse_uri,
    parse_uri_reference,
)
from .ports import DEFAULT_PORTS, default_port, effective_port
from .resolve import join, resolve, resolve_all
from .uri import Authority, Host, HostKind, Uri, to_text
