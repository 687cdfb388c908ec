"""
=============================================================================
PAGE GATEWAY
=============================================================================

Runs a stored procedure and renders whatever it wrote as an HTTP response.

=============================================================================
REQUEST FLOW
=============================================================================

    handle("orders.list", {"page": "2"})
        │
        ├─► statistics.request_started()
        │
        ├─► invoke("orders.list", {"page": "2"})     ← database layer
        │       returns raw text
        │
        ├─► parse_page(text)                          ← header/body split,
        │                                               header classification
        ├─► build_response(page)
        │
        ├─► statistics.request_completed()
        └─► access log line

The database side (connection pools, credentials, argument binding) is not
part of this package. It is passed in as the `invoke` callable:

    def invoke(procedure: str, args: Dict[str, str]) -> str:
        ...

An invoker signals "no such procedure" by raising ProcedureNotFoundError.
Any other exception becomes a 500 response; it never escapes handle().

=============================================================================
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .config import GatewayConfig
from .http.response import HTTPResponse, build_response, error_response
from .page import Page, parse_page
from .statistics import RequestStatistics


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("plsqlgateway.access")


Invoker = Callable[[str, Dict[str, str]], str]


class GatewayError(Exception):
    """
    Raised when a page request cannot be served.

    Carries the HTTP status code returned to the client.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class ProcedureNotFoundError(GatewayError):
    """The requested procedure does not exist (404)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class PageTooLargeError(GatewayError):
    """The procedure wrote more than max_page_size characters (413)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=413)


@dataclass
class PageLog:
    """One access-log entry for a page request."""

    request_id: int
    procedure: str
    status_code: int
    content_length: int
    cookie_count: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "procedure": self.procedure,
            "status_code": self.status_code,
            "content_length": self.content_length,
            "cookie_count": self.cookie_count,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        return (
            f'#{self.request_id} [{self.timestamp}] "{self.procedure}" '
            f'{self.status_code} {self.content_length} {self.duration_ms:.2f}ms'
        )


class PageHandler:
    """
    Serves procedure pages.

    =========================================================================
    USAGE EXAMPLE
    =========================================================================

        def invoke(procedure, args):
            with pool.acquire() as conn:
                return run_procedure(conn, procedure, args)

        handler = PageHandler(invoke, GatewayConfig(default_page="home"))

        response = handler.handle("orders.list", {"page": "2"})
        sock.sendall(response.to_bytes())

    =========================================================================
    """

    def __init__(
        self,
        invoke: Invoker,
        config: Optional[GatewayConfig] = None,
        statistics: Optional[RequestStatistics] = None,
    ):
        self.invoke = invoke
        self.config = config or GatewayConfig()
        self.statistics = statistics or RequestStatistics()

    def handle(
        self,
        procedure: Optional[str] = None,
        args: Optional[Dict[str, str]] = None,
    ) -> HTTPResponse:
        """
        Invoke a procedure and render its output.

        Args:
            procedure: Procedure name; None or "" uses config.default_page.
            args: Procedure arguments (request parameters).

        Returns:
            The rendered page, or an error response on failure.
        """
        ticket = self.statistics.request_started()
        name = procedure or self.config.default_page or ""
        cookie_count = 0

        try:
            page = self.render(name, args or {})
            cookie_count = len(page.cookies)
            response = build_response(page, self.config.default_content_type)
        except GatewayError as e:
            logger.warning(f"Page request for {name!r} failed: {e}")
            response = error_response(e.status_code, str(e))
        except Exception as e:
            logger.exception(f"Procedure {name!r} raised: {e}")
            response = error_response(500)

        duration_ms = self.statistics.request_completed(ticket)

        if self.config.request_logging:
            self._log(PageLog(
                request_id=ticket.id,
                procedure=name,
                status_code=response.status,
                content_length=len(response.body),
                cookie_count=cookie_count,
                duration_ms=duration_ms,
                timestamp=datetime.now(timezone.utc).isoformat(),
            ))

        return response

    def render(self, procedure: str, args: Dict[str, str]) -> Page:
        """
        Invoke a procedure and parse its output, without building a response.

        Raises:
            ProcedureNotFoundError: No procedure given and no default page.
            PageTooLargeError: Output exceeds config.max_page_size.
        """
        if not procedure:
            raise ProcedureNotFoundError("No procedure requested and no default page configured")

        text = self.invoke(procedure, args)
        if text is None:
            text = ""

        if len(text) > self.config.max_page_size:
            raise PageTooLargeError(
                f"Procedure output too large: {len(text)} characters"
            )

        page = parse_page(text)
        logger.debug(
            f"Procedure {procedure!r}: {len(page.other)} other headers, "
            f"{len(page.cookies)} cookies, {len(page.body)} body characters"
        )
        return page

    def _log(self, entry: PageLog) -> None:
        if self.config.log_format == "json":
            access_logger.info(json.dumps(entry.to_dict()))
        else:
            access_logger.info(entry.to_text())
