"""
=============================================================================
PROCEDURE HEADER CLASSIFIER
=============================================================================

Turns the header block of a procedure page into structured data.

=============================================================================
HEADER ROUTING
=============================================================================

Every "Name: value" line is routed to exactly one of three places:

    Location: /app/home          ──►  ParsedHeader.redirect_location
    Content-type: text/html      ──►  ParsedHeader.content_type
    Status: 404 Not here         ──►  ParsedHeader.status_code = 404
                                      ParsedHeader.status_description = "Not here"
    X-DB-Content-length: 4711    ──►  ParsedHeader.content_length = 4711
    Set-Cookie: sid=abc          ──►  cookies.append(Cookie("sid", "abc"))
    Cache-Control: no-cache      ──►  other["Cache-Control"] = "no-cache"

Name matching is case-insensitive. Overflow names keep their original
spelling, because the caller writes them back to the client unchanged.

=============================================================================
LENIENT PARSING
=============================================================================

Procedure output is not under our control, so nothing in here raises:

    - a line without ":" is skipped
    - "Status: abc" (no leading digits) is skipped as a whole
    - "Content-length: lots" leaves content_length unset
    - a malformed Set-Cookie is dropped

One bad line never stops the lines that follow it.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging
import re

from .cookies import Cookie, parse_cookie_pair


logger = logging.getLogger(__name__)


@dataclass
class ParsedHeader:
    """
    The well-known fields of a procedure header block.

    Every field is optional; None means the procedure did not send it
    (or sent something unusable). status_code and status_description
    always come from the same Status line.
    """

    content_type: Optional[str] = None
    redirect_location: Optional[str] = None
    status_code: Optional[int] = None
    status_description: Optional[str] = None
    content_length: Optional[int] = None

    def to_dict(self) -> dict:
        """
        Convert to a dictionary holding only the fields that were set.

        Keys use the gateway's camelCase names, so an empty header
        becomes {}.
        """
        names = {
            "content_type": "contentType",
            "redirect_location": "redirectLocation",
            "status_code": "statusCode",
            "status_description": "statusDescription",
            "content_length": "contentLength",
        }
        return {
            wire: getattr(self, attr)
            for attr, wire in names.items()
            if getattr(self, attr) is not None
        }


@dataclass
class HeaderParseResult:
    """
    Everything found in one header block.

    Attributes:
        main: Typed well-known fields.
        other: Unrecognized headers, name as written → value.
        cookies: Valid cookie declarations in order of appearance.
    """

    main: ParsedHeader = field(default_factory=ParsedHeader)
    other: Dict[str, str] = field(default_factory=dict)
    cookies: List[Cookie] = field(default_factory=list)

    def __iter__(self):
        # Allows: main, other, cookies = parse_header(text)
        return iter((self.main, self.other, self.cookies))


# "400 error status" → ("400", "error status")
STATUS_PATTERN = re.compile(r"^([0-9]+)(.*)$", re.DOTALL)
DECIMAL_PATTERN = re.compile(r"[0-9]+")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

CONTENT_LENGTH_SUFFIX = "content-length"


def split_header_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Split a header line at its first colon.

    Returns:
        (name, value), both stripped, or None when the line has no colon.
    """
    name, sep, value = line.partition(":")
    if not sep:
        return None
    return name.strip(), value.strip()


def parse_status(value: str) -> Optional[Tuple[int, str]]:
    """
    Parse a Status header value into (code, description).

    "400 error status" → (400, "error status")
    "302"              → (302, "")
    "error"            → None
    """
    match = STATUS_PATTERN.match(value)
    if match is None:
        return None
    code, description = match.groups()
    return int(code), description.strip()


def parse_integer(value: str) -> Optional[int]:
    """Parse an ASCII decimal header value, None if it is not one."""
    if not DECIMAL_PATTERN.fullmatch(value):
        return None
    return int(value)


def parse_header(header_text: Optional[str]) -> HeaderParseResult:
    """
    Classify every line of a procedure header block.

    =====================================================================
    ALGORITHM
    =====================================================================

    1. Split the block into lines, skip blank ones
    2. Split each line at the first ":" into name and value
    3. Dispatch on the lowercased name
    4. Collect into a fresh HeaderParseResult

    =====================================================================

    Args:
        header_text: The header part returned by split_header_and_body().

    Returns:
        HeaderParseResult with main fields, overflow headers and cookies.
        An empty or blank block gives an empty result.
    """
    result = HeaderParseResult()
    if not header_text:
        return result

    main = result.main

    for line in LINE_BREAK_PATTERN.split(header_text):
        if not line.strip():
            continue

        parts = split_header_line(line)
        if parts is None:
            logger.debug("Skipping header line without colon: %r", line)
            continue
        name, value = parts
        key = name.lower()

        if key == "location":
            main.redirect_location = value

        elif key == "content-type":
            main.content_type = value

        elif key == "status":
            status = parse_status(value)
            if status is None:
                logger.debug("Skipping invalid Status value: %r", value)
                continue
            main.status_code, main.status_description = status

        elif key.endswith(CONTENT_LENGTH_SUFFIX):
            length = parse_integer(value)
            if length is None:
                logger.debug("Skipping invalid %s value: %r", name, value)
                continue
            main.content_length = length

        elif key == "set-cookie":
            cookie = parse_cookie_pair(value)
            if cookie is not None:
                result.cookies.append(cookie)

        else:
            result.other[name] = value

    return result
