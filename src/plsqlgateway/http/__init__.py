"""
HTTP response rendering for procedure pages.

    from plsqlgateway.http import build_response

    response = build_response(parse_page(text))
    sock.sendall(response.to_bytes())
"""

from .response import (
    HTTPResponse,
    build_response,
    error_response,
    format_http_date,
    reason_phrase,
    DEFAULT_CONTENT_TYPE,
)

__all__ = [
    "HTTPResponse",
    "build_response",
    "error_response",
    "format_http_date",
    "reason_phrase",
    "DEFAULT_CONTENT_TYPE",
]
