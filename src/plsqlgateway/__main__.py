"""
=============================================================================
PLSQLGATEWAY CLI ENTRY POINT
=============================================================================

Inspect procedure output from the command line.

=============================================================================
USAGE
=============================================================================

    # Parse a saved page and print the result as JSON
    python -m plsqlgateway page.txt

    # Read from stdin
    echo -e "Status: 404 Gone\\n\\nbye" | python -m plsqlgateway

    # Show the HTTP response the gateway would send
    python -m plsqlgateway --render page.txt

=============================================================================
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import GatewayConfig, setup_logging
from .http.response import build_response
from .page import parse_page
from .version import get_version


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plsqlgateway",
        description="Parse stored-procedure page output into header fields, cookies and body",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m plsqlgateway page.txt             # Parsed page as JSON
  python -m plsqlgateway --render page.txt    # Rendered HTTP response
  cat page.txt | python -m plsqlgateway       # Read from stdin
        """
    )

    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="File holding procedure output (default: stdin)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--json", "-j",
        dest="render",
        action="store_false",
        help="Print the parsed page as JSON (default)"
    )
    mode.add_argument(
        "--render", "-r",
        dest="render",
        action="store_true",
        help="Print the HTTP response the gateway would send"
    )
    parser.set_defaults(render=False)

    parser.add_argument(
        "--default-content-type", "-c",
        default=GatewayConfig.default_content_type,
        help="Content-Type used when the page has none"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"plsqlgateway {get_version()}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    config = GatewayConfig(
        default_content_type=args.default_content_type,
        log_level=args.log_level,
    )
    config.validate()
    setup_logging(config)

    if args.file:
        # newline="" keeps "\r\n" separators intact
        with open(args.file, encoding="utf-8", newline="") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    page = parse_page(text)

    if args.render:
        response = build_response(page, config.default_content_type)
        sys.stdout.buffer.write(response.to_bytes(server_name=config.server_name))
        sys.stdout.buffer.flush()
    else:
        print(json.dumps(page.to_dict(), indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
