"""
=============================================================================
COOKIE PAIR VALIDATOR
=============================================================================

Parses the name=value part of a "Set-Cookie:" line written by a procedure.

=============================================================================
STRICT VS LOOSE
=============================================================================

RFC 6265 section 4.1.1 defines the cookie-pair grammar:

    cookie-pair  = cookie-name "=" cookie-value
    cookie-name  = token
    cookie-value = *cookie-octet / ( DQUOTE *cookie-octet DQUOTE )
    cookie-octet = %x21 / %x23-2B / %x2D-3A / %x3C-5B / %x5D-7E

Procedures written for old gateways rarely follow that grammar, so two
levels are offered:

    STRICT: RFC 6265 exactly. 'c1=v1' passes, 'c1=a b' does not.
    LOOSE:  any value, spaces included. '"a b"' is unquoted to 'a b'.

By default strict is tried first and loose is the fallback. Both levels
reject whitespace next to the "=" ('key = value'), which signals a broken
declaration rather than a value containing a space.

Anything after the first ";" is attribute text (Path, Expires, ...) and is
ignored here.

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote
import logging
import re


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cookie:
    """A single cookie declared by a procedure."""

    key: str
    value: str

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value}

    def to_header(self) -> str:
        """
        Format as a Set-Cookie header value.

        Values accepted only by loose parsing are written back so the line
        stays a single cookie-pair:

            Cookie("a", "v1")          → a=v1
            Cookie("a", "dark mode")   → a="dark mode"
            Cookie("a", 'say "hi";')   → a=say%20%22hi%22%3B
        """
        if COOKIE_VALUE_PATTERN.fullmatch(self.value):
            return f"{self.key}={self.value}"
        if QUOTABLE_VALUE_PATTERN.fullmatch(self.value):
            return f'{self.key}="{self.value}"'
        return f"{self.key}={quote(self.value, safe=PERCENT_SAFE)}"


# RFC 7230 tchar / RFC 6265 cookie-octet
STRICT_PAIR_PATTERN = re.compile(
    r"^([!#$%&'*+\-.^_`|~0-9A-Za-z]+)="
    r'(?:"([\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*)"'
    r"|([\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*))$"
)
COOKIE_VALUE_PATTERN = re.compile(r"[\x21\x23-\x2B\x2D-\x3A\x3C-\x5B\x5D-\x7E]*")
# Printable ASCII with spaces, minus the characters that end or escape a quote
QUOTABLE_VALUE_PATTERN = re.compile(r'[\x20\x21\x23-\x3A\x3C-\x5B\x5D-\x7E]*')
# cookie-octets left alone by percent-encoding; "%" itself is always encoded
PERCENT_SAFE = "!#$&'()*+./:<=>?@[]^`{|}~"
LOOSE_KEY_PATTERN = re.compile(r"^[^\s=;]+$")


def _split_pair(text: str) -> Optional[tuple[str, str]]:
    """Cut off attributes and split at "=". None if the pair is malformed."""
    pair = text.split(";", 1)[0].strip()
    key, sep, value = pair.partition("=")
    if not sep or not key:
        return None
    # "key = value" is a broken declaration, not a value with a space
    if key[-1].isspace() or (value and value[0].isspace()):
        return None
    return key, value


def _parse_strict(key: str, value: str) -> Optional[Cookie]:
    match = STRICT_PAIR_PATTERN.match(f"{key}={value}")
    if match is None:
        return None
    name, quoted, bare = match.groups()
    return Cookie(key=name, value=quoted if quoted is not None else bare)


def _parse_loose(key: str, value: str) -> Optional[Cookie]:
    if not LOOSE_KEY_PATTERN.match(key):
        return None
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return Cookie(key=key, value=value)


def parse_cookie_pair(text: Optional[str], loose: Optional[bool] = None) -> Optional[Cookie]:
    """
    Parse a "key=value" cookie declaration.

    Args:
        text: The value of a Set-Cookie line, e.g. 'c1=v1' or
              'c2="another value"'.
        loose: False for strict parsing only, True for loose parsing only,
               None (default) to try strict and fall back to loose.

    Returns:
        Cookie, or None if the declaration is rejected. Rejection never
        raises.

    Example:
        parse_cookie_pair("c1=v1")                   # Cookie("c1", "v1")
        parse_cookie_pair("c2=another value")        # Cookie("c2", "another value")
        parse_cookie_pair("illegalKey = illegal")    # None
    """
    if not text or not isinstance(text, str):
        return None

    pair = _split_pair(text)
    if pair is None:
        logger.debug("Rejected cookie declaration: %r", text)
        return None
    key, value = pair

    cookie = None
    if loose is not True:
        cookie = _parse_strict(key, value)
    if cookie is None and loose is not False:
        cookie = _parse_loose(key, value)

    if cookie is None:
        logger.debug("Rejected cookie declaration: %r", text)
    return cookie
