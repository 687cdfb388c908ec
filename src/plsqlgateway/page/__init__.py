"""
=============================================================================
PAGE PARSING PACKAGE
=============================================================================

Interprets the raw text written by a stored procedure as an HTTP-like
response: optional header lines, a blank line, then the body.

=============================================================================
MODULE STRUCTURE
=============================================================================

    page/
    ├── __init__.py   # Page + parse_page() (this file)
    ├── splitter.py   # contains_header_line(), split_header_and_body()
    ├── header.py     # parse_header() → ParsedHeader, overflow, cookies
    └── cookies.py    # parse_cookie_pair() → Cookie

=============================================================================
DATA FLOW
=============================================================================

    raw procedure output
            │
            ▼
    split_header_and_body()  ──►  (header text, body)
            │
            ▼
    parse_header(header text) ──►  ParsedHeader, other headers, cookies
            │
            ▼
    Page(header, other, cookies, body)

Every function in this package is pure: no I/O, no shared state, safe to
call from any number of worker threads at once.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .cookies import Cookie, parse_cookie_pair
from .header import (
    HeaderParseResult,
    ParsedHeader,
    parse_header,
    parse_status,
    split_header_line,
)
from .splitter import contains_header_line, split_header_and_body


@dataclass
class Page:
    """
    One parsed procedure page, ready to be rendered as a response.

    Attributes:
        header: Well-known fields (content type, status, redirect, length).
        other: Remaining headers, name as written → value.
        cookies: Valid cookie declarations in order.
        body: Everything after the header block, untouched.
    """

    header: ParsedHeader = field(default_factory=ParsedHeader)
    other: Dict[str, str] = field(default_factory=dict)
    cookies: List[Cookie] = field(default_factory=list)
    body: str = ""

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "header": self.header.to_dict(),
            "other": dict(self.other),
            "cookies": [cookie.to_dict() for cookie in self.cookies],
            "body": self.body,
        }


def parse_page(text: Optional[str]) -> Page:
    """
    Parse the complete output of one procedure invocation.

    Example:
        page = parse_page("Content-type: text/plain\\n\\nhello")
        page.header.content_type  # "text/plain"
        page.body                 # "hello"
    """
    header_text, body = split_header_and_body(text or "")
    main, other, cookies = parse_header(header_text)
    return Page(header=main, other=other, cookies=cookies, body=body)


__all__ = [
    "Page",
    "parse_page",
    "ParsedHeader",
    "HeaderParseResult",
    "parse_header",
    "parse_status",
    "split_header_line",
    "Cookie",
    "parse_cookie_pair",
    "contains_header_line",
    "split_header_and_body",
]
