"""
=============================================================================
PAGE RESPONSE RENDERING
=============================================================================

Turns a parsed procedure Page into an HTTP/1.1 response.

=============================================================================
FROM PROCEDURE PAGE TO HTTP RESPONSE
=============================================================================

    Procedure output                       HTTP response
    ────────────────                       ─────────────
    Status: 404 No such order      ──►     HTTP/1.1 404 No such order
    Content-type: text/plain       ──►     Content-Type: text/plain
    Set-Cookie: sid=abc            ──►     Set-Cookie: sid=abc
    X-Trace: 17                    ──►     X-Trace: 17
                                           Content-Length: 8     (computed)
                                           Date: ...             (added)
                                           Server: ...           (added)
    \\n
    No order               ──►     No order

DEFAULTS:
    - Other header whose name is no token  → dropped ("some attribute")
    - No Status line, but a Location       → 302 Found
    - No Status line, no Location          → 200 OK
    - No Content-type line                 → configured default
    - Status line without a description    → standard reason phrase

The length a procedure declares (X-DB-Content-length) is informational
only: Content-Length is always computed from the encoded body.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Dict, List, Optional, Union
import logging
import re

from ..page import Cookie, Page


logger = logging.getLogger(__name__)


DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"
DEFAULT_SERVER_NAME = "plsqlgateway"

# RFC 7230 field-name = token
FIELD_NAME_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def reason_phrase(status: int) -> str:
    """Standard reason phrase for a status code, "Unknown" if there is none."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    Unlike a plain header dictionary, cookies are kept as a list so a page
    can set any number of them (one Set-Cookie line each).
    """

    status: int = 200                        # HTTP status code
    reason: str = ""                         # Empty → standard phrase
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: List[Cookie] = field(default_factory=list)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {self.status} {self.reason or reason_phrase(self.status)}"

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a response header. Returns self for chaining."""
        self.headers[name] = value
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """Set the response body, encoding strings as UTF-8."""
        if isinstance(body, str):
            self.body = body.encode("utf-8")
        else:
            self.body = body
        return self

    def to_bytes(self, server_name: str = DEFAULT_SERVER_NAME) -> bytes:
        """
        Serialize the response to bytes for sending over a socket.

        =====================================================================
        SERIALIZATION FORMAT
        =====================================================================

            HTTP/1.1 200 OK\\r\\n          ← Status line
            Content-Type: text/html\\r\\n
            Set-Cookie: sid=abc\\r\\n       ← One line per cookie
            Content-Length: 11\\r\\n        ← Auto-calculated
            Date: Mon, 19 Oct 2026 ...\\r\\n ← Auto-added
            Server: plsqlgateway\\r\\n      ← Auto-added
            \\r\\n                           ← Empty line (separator)
            sample page                    ← Body bytes

        =====================================================================
        """
        response_headers = dict(self.headers)

        # Length of what we actually send, whatever the procedure claimed
        response_headers["Content-Length"] = str(len(self.body))

        if "Date" not in response_headers:
            response_headers["Date"] = format_http_date(datetime.now(timezone.utc))

        if "Server" not in response_headers:
            response_headers["Server"] = server_name

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")
        for cookie in self.cookies:
            lines.append(f"Set-Cookie: {cookie.to_header()}")
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


def build_response(
    page: Page,
    default_content_type: str = DEFAULT_CONTENT_TYPE,
) -> HTTPResponse:
    """
    Render a parsed procedure page as an HTTPResponse.

    Args:
        page: Result of parse_page().
        default_content_type: Used when the procedure sent no Content-type.

    Returns:
        HTTPResponse carrying status, headers, cookies and encoded body.
    """
    header = page.header

    # ─────────────────────────────────────────────────────────────────
    # STATUS
    # ─────────────────────────────────────────────────────────────────
    if header.status_code is not None:
        status = header.status_code
        reason = header.status_description or ""
    elif header.redirect_location:
        status = HTTPStatus.FOUND.value
        reason = ""
    else:
        status = HTTPStatus.OK.value
        reason = ""

    response = HTTPResponse(status=status, reason=reason)

    # ─────────────────────────────────────────────────────────────────
    # HEADERS
    # ─────────────────────────────────────────────────────────────────
    # Overflow headers first, so the typed fields win on a name clash
    for name, value in page.other.items():
        if not FIELD_NAME_PATTERN.fullmatch(name):
            logger.debug("Dropping header with invalid field name: %r", name)
            continue
        response.set_header(name, value)

    if header.redirect_location:
        response.set_header("Location", header.redirect_location)

    response.set_header("Content-Type", header.content_type or default_content_type)

    response.cookies = list(page.cookies)
    response.set_body(page.body)
    return response


def error_response(status: int, message: str = "") -> HTTPResponse:
    """
    Create a plain-text error response for a failed page request.

    Args:
        status: HTTP status code (404, 413, 500, ...)
        message: Body text; defaults to the reason phrase.
    """
    return (HTTPResponse(status=status)
        .set_header("Content-Type", "text/plain; charset=utf-8")
        .set_body(message or reason_phrase(status)))


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Mon, 19 Oct 2026 12:00:00 GMT

    HTTP dates are always in GMT, so aware datetimes are converted to UTC
    first.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )
