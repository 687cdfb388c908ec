"""
=============================================================================
PLSQLGATEWAY - Stored-Procedure Pages as HTTP Responses
=============================================================================

Database web toolkits let a stored procedure "print" a web page. The text
it prints may begin with CGI-style header lines:

    Status: 302 Moved
    Location: /app/home
    Set-Cookie: sid=4f2a
    X-DB-Content-length: 0

followed by a blank line and the body. This package interprets such
output and renders it as a real HTTP response.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    plsqlgateway/
    ├── __init__.py        # Package exports (this file)
    ├── __main__.py        # CLI: parse or render procedure output
    ├── config.py          # GatewayConfig + logging setup
    ├── gateway.py         # PageHandler: invoke → parse → render
    ├── statistics.py      # Thread-safe request counters
    ├── version.py         # Installed version lookup
    ├── page/              # Pure parsing core
    │   ├── splitter.py    # Header detector, header/body splitter
    │   ├── header.py      # Header classifier
    │   └── cookies.py     # Cookie pair validator
    └── http/
        └── response.py    # Page → HTTP/1.1 response

=============================================================================
QUICK START
=============================================================================

    from plsqlgateway import parse_page
    from plsqlgateway.http import build_response

    page = parse_page("Content-type: text/plain\\n\\nhello")
    page.header.content_type   # "text/plain"
    page.body                  # "hello"

    build_response(page).to_bytes()

=============================================================================
"""

__version__ = "0.9.0"

from .page import (
    Cookie,
    Page,
    ParsedHeader,
    contains_header_line,
    parse_cookie_pair,
    parse_header,
    parse_page,
    split_header_and_body,
)
from .config import GatewayConfig
from .gateway import PageHandler, GatewayError, ProcedureNotFoundError, PageTooLargeError

__all__ = [
    "Cookie",
    "Page",
    "ParsedHeader",
    "contains_header_line",
    "parse_cookie_pair",
    "parse_header",
    "parse_page",
    "split_header_and_body",
    "GatewayConfig",
    "PageHandler",
    "GatewayError",
    "ProcedureNotFoundError",
    "PageTooLargeError",
    "__version__",
]
