"""nuri.grammar
ABNF rules from RFCs 3986, 3987, 6874, and 5234, expressed as regex fragments.
Fragments are composed bottom-up; the compiled patterns at the end are what the parser uses.
"""

import re

# ALPHA = %x41-5A / %x61-7A
ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
HEXDIG: str = r"[0-9A-Fa-f]"

# ucschar = %xA0-D7FF / %xF900-FDCF / %xFDF0-FFEF
#         / %x10000-1FFFD / %x20000-2FFFD / %x30000-3FFFD
#         / %x40000-4FFFD / %x50000-5FFFD / %x60000-6FFFD
#         / %x70000-7FFFD / %x80000-8FFFD / %x90000-9FFFD
#         / %xA0000-AFFFD / %xB0000-BFFFD / %xC0000-CFFFD
#         / %xD0000-DFFFD / %xE1000-EFFFD
_UCSCHAR_RANGES: tuple[tuple[int, int], ...] = (
    (0xA0, 0xD7FF), (0xF900, 0xFDCF), (0xFDF0, 0xFFEF),
    (0x10000, 0x1FFFD), (0x20000, 0x2FFFD), (0x30000, 0x3FFFD),
    (0x40000, 0x4FFFD), (0x50000, 0x5FFFD), (0x60000, 0x6FFFD),
    (0x70000, 0x7FFFD), (0x80000, 0x8FFFD), (0x90000, 0x9FFFD),
    (0xA0000, 0xAFFFD), (0xB0000, 0xBFFFD), (0xC0000, 0xCFFFD),
    (0xD0000, 0xDFFFD), (0xE1000, 0xEFFFD),
)


def _char_class(ranges: tuple[tuple[int, int], ...]) -> str:
    return "[" + "".join(f"{chr(lo)}-{chr(hi)}" for lo, hi in ranges) + "]"


UCSCHAR: str = _char_class(_UCSCHAR_RANGES)

# iprivate = %xE000-F8FF / %xF0000-FFFFD / %x100000-10FFFD
IPRIVATE: str = _char_class(((0xE000, 0xF8FF), (0xF0000, 0xFFFFD), (0x100000, 0x10FFFD)))

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED_CHARS: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
UNRESERVED: str = r"[A-Za-z0-9\-._~]"

# iunreserved = ALPHA / DIGIT / "-" / "." / "_" / "~" / ucschar
IUNRESERVED: str = rf"(?:{UNRESERVED}|{UCSCHAR})"

# pct-encoded = "%" HEXDIG HEXDIG
PCT_ENCODED: str = rf"%{HEXDIG}{HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS_CHARS: str = "!$&'()*+,;="
SUB_DELIMS: str = r"[!$&'()*+,;=]"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME: str = rf"{ALPHA}[A-Za-z0-9+\-.]*"


def _pchar(unreserved: str) -> str:
    # pchar  = unreserved / pct-encoded / sub-delims / ":" / "@"
    # ipchar = iunreserved / pct-encoded / sub-delims / ":" / "@"
    return rf"(?:{unreserved}|{PCT_ENCODED}|{SUB_DELIMS}|[:@])"


PCHAR: str = _pchar(UNRESERVED)
IPCHAR: str = _pchar(IUNRESERVED)

# path-abempty, path-absolute, path-rootless, path-noscheme are all
# runs of pchar separated by "/"; which one applies is decided by the
# parser from what precedes the path, so only the alphabet is needed here.
PATH_CHAR: str = rf"(?:{PCHAR}|/)"
IPATH_CHAR: str = rf"(?:{IPCHAR}|/)"

# query = *( pchar / "/" / "?" )
QUERY_CHAR: str = rf"(?:{PCHAR}|[/?])"

# iquery = *( ipchar / iprivate / "/" / "?" )
IQUERY_CHAR: str = rf"(?:{IPCHAR}|{IPRIVATE}|[/?])"

# fragment = *( pchar / "/" / "?" )
FRAGMENT_CHAR: str = QUERY_CHAR

# ifragment = *( ipchar / "/" / "?" )
IFRAGMENT_CHAR: str = rf"(?:{IPCHAR}|[/?])"

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
USERINFO_CHAR: str = rf"(?:{UNRESERVED}|{PCT_ENCODED}|{SUB_DELIMS}|:)"

# iuserinfo = *( iunreserved / pct-encoded / sub-delims / ":" )
IUSERINFO_CHAR: str = rf"(?:{IUNRESERVED}|{PCT_ENCODED}|{SUB_DELIMS}|:)"

# reg-name = *( unreserved / pct-encoded / sub-delims )
REG_NAME_CHAR: str = rf"(?:{UNRESERVED}|{PCT_ENCODED}|{SUB_DELIMS})"

# ireg-name = *( iunreserved / pct-encoded / sub-delims )
IREG_NAME_CHAR: str = rf"(?:{IUNRESERVED}|{PCT_ENCODED}|{SUB_DELIMS})"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
DEC_OCTET: str = rf"(?:25[0-5]|2[0-4]{DIGIT}|1{DIGIT}{{2}}|[1-9]{DIGIT}|{DIGIT})"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
IPV4ADDRESS: str = rf"{DEC_OCTET}\.{DEC_OCTET}\.{DEC_OCTET}\.{DEC_OCTET}"

# h16 = 1*4HEXDIG
H16: str = rf"(?:{HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
LS32: str = rf"(?:{H16}:{H16}|{IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{H16}:){{6}}{LS32}",
                                         rf"::(?:{H16}:){{5}}{LS32}",
                               rf"(?:{H16})?::(?:{H16}:){{4}}{LS32}",
             rf"(?:(?:{H16}:){{0,1}}{H16})?::(?:{H16}:){{3}}{LS32}",
             rf"(?:(?:{H16}:){{0,2}}{H16})?::(?:{H16}:){{2}}{LS32}",
                  rf"(?:(?:{H16}:){{0,3}}{H16})?::{H16}:{LS32}",
                  rf"(?:(?:{H16}:){{0,4}}{H16})?::{LS32}",
                  rf"(?:(?:{H16}:){{0,5}}{H16})?::{H16}",
                  rf"(?:(?:{H16}:){{0,6}}{H16})?::",
        )
    )
    + ")"
)

# ZoneID = 1*( unreserved / pct-encoded )
ZONEID: str = rf"(?:{UNRESERVED}|{PCT_ENCODED})+"

# IPv6addrz = IPv6address "%25" ZoneID
IPV6ADDRZ: str = rf"{IPV6ADDRESS}%25{ZONEID}"

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
IPVFUTURE: str = rf"[vV]{HEXDIG}+\.(?:{UNRESERVED}|{SUB_DELIMS}|:)+"

# port = *DIGIT
PORT: str = rf"{DIGIT}*"


SCHEME_PAT: re.Pattern[str] = re.compile(SCHEME)
IPV4_PAT: re.Pattern[str] = re.compile(IPV4ADDRESS)
# IRIs don't support zone ids, so the IRI parser only takes the first alternative.
IPV6_PAT: re.Pattern[str] = re.compile(IPV6ADDRESS)
IPV6Z_PAT: re.Pattern[str] = re.compile(rf"{IPV6ADDRZ}|{IPV6ADDRESS}")
IPVFUTURE_PAT: re.Pattern[str] = re.compile(IPVFUTURE)
PORT_PAT: re.Pattern[str] = re.compile(PORT)
PCT_ENCODED_PAT: re.Pattern[str] = re.compile(PCT_ENCODED)


def _run(char: str) -> re.Pattern[str]:
    """Compile a pattern that matches the longest prefix built out of char."""
    return re.compile(rf"{char}*")


# Keyed by (component, iri).
COMPONENT_PATS: dict[tuple[str, bool], re.Pattern[str]] = {
    ("userinfo", False): _run(USERINFO_CHAR),
    ("userinfo", True): _run(IUSERINFO_CHAR),
    ("reg_name", False): _run(REG_NAME_CHAR),
    ("reg_name", True): _run(IREG_NAME_CHAR),
    ("path", False): _run(PATH_CHAR),
    ("path", True): _run(IPATH_CHAR),
    ("query", False): _run(QUERY_CHAR),
    ("query", True): _run(IQUERY_CHAR),
    ("fragment", False): _run(FRAGMENT_CHAR),
    ("fragment", True): _run(IFRAGMENT_CHAR),
}
