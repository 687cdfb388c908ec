"""
=============================================================================
GATEWAY CONFIGURATION
=============================================================================

Centralized configuration for rendering procedure pages.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    1. Code:         GatewayConfig(default_page="home")
    2. Environment:  GatewayConfig.from_env()   (PLSQL_* variables)
    3. CLI:          python -m plsqlgateway --log-level DEBUG

Settings are validated once at startup with validate(), not at first use.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from . import __version__


@dataclass
class GatewayConfig:
    """
    Configuration for the page gateway.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    PAGE SETTINGS
    - default_content_type, default_page, max_page_size

    LOGGING
    - request_logging, log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # PAGE SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    default_content_type: str = "text/html; charset=utf-8"
    """
    Content-Type sent when a procedure writes no Content-type line.
    """

    default_page: Optional[str] = None
    """
    Procedure invoked when a request names none (e.g. "home").
    None = such requests fail with 404.
    """

    max_page_size: int = 10 * 1024 * 1024  # 10 MB
    """
    Largest procedure output accepted, in characters.
    Larger pages are refused with 413.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    request_logging: bool = True
    """
    Write one access-log line per page request.
    """

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG also reports skipped header lines and dropped cookies.
    """

    log_format: str = "text"
    """
    Access log format: 'json' or 'text'.
    """

    # ─────────────────────────────────────────────────────────────────────
    # SERVER IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = f"plsqlgateway/{__version__}"
    """
    Value of the Server response header.
    """

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        PLSQL_DEFAULT_CONTENT_TYPE  Fallback Content-Type
        PLSQL_DEFAULT_PAGE          Default procedure (default: none)
        PLSQL_MAX_PAGE_SIZE         Max page size (default: 10485760)
        PLSQL_REQUEST_LOGGING       "0"/"false"/"no" disables access log
        PLSQL_LOG_LEVEL             Logging level (default: INFO)
        PLSQL_LOG_FORMAT            'text' or 'json' (default: text)

        =====================================================================
        """
        defaults = cls()
        return cls(
            default_content_type=os.getenv(
                "PLSQL_DEFAULT_CONTENT_TYPE", defaults.default_content_type
            ),
            default_page=os.getenv("PLSQL_DEFAULT_PAGE") or None,
            max_page_size=int(os.getenv("PLSQL_MAX_PAGE_SIZE", str(defaults.max_page_size))),
            request_logging=os.getenv("PLSQL_REQUEST_LOGGING", "1").lower()
            not in ("0", "false", "no", "off"),
            log_level=os.getenv("PLSQL_LOG_LEVEL", defaults.log_level),
            log_format=os.getenv("PLSQL_LOG_FORMAT", defaults.log_format),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting.
        """
        if not self.default_content_type.strip():
            raise ValueError("default_content_type must not be empty")

        if self.max_page_size < 1:
            raise ValueError("max_page_size must be >= 1")

        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ValueError(f"Invalid log_level: {self.log_level}")

        if self.log_format not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")


def setup_logging(config: GatewayConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("plsqlgateway").setLevel(level)
