"""
=============================================================================
HEADER / BODY SPLITTER
=============================================================================

Decides where the header block of a stored-procedure page ends and the
body begins.

=============================================================================
THE THREE SHAPES OF PROCEDURE OUTPUT
=============================================================================

A web-enabled stored procedure writes plain text. By long-standing gateway
convention that text MAY start with CGI-style header lines:

    1. HEADER + BLANK LINE + BODY

        Content-type: text/html\\n
        X-DB-Content-length: 11\\n
        \\n                               <-- separator
        sample page                     <-- body

    2. HEADER ONLY (the procedure forgot the blank line)

        Location: /app/home\\n

    3. BODY ONLY (no headers at all)

        <html><body>...</body></html>

There is no length prefix and no marker telling us which shape we got.
We decide in two stages:

    ┌───────────────────────┐   found   ┌──────────────────────────────┐
    │ search blank line     │ ────────► │ header = text[:end]          │
    │ (LF LF or CRLF CRLF)  │           │ body   = text[end:]          │
    └──────────┬────────────┘           └──────────────────────────────┘
               │ not found
               ▼
    ┌───────────────────────┐   yes     ┌──────────────────────────────┐
    │ contains_header_line? │ ────────► │ header = text, body = ""     │
    └──────────┬────────────┘           └──────────────────────────────┘
               │ no
               ▼
    ┌──────────────────────────────┐
    │ header = "", body = text     │
    └──────────────────────────────┘

This is a best-effort compatibility shim for legacy procedure output, not
a general HTTP message parser.

=============================================================================
"""

from typing import Any, Tuple
import re


# =============================================================================
# COMPILED REGEX PATTERNS
# =============================================================================
#
# HEADER_LINE_PATTERN: (?:^|:)[ \t]*[a-z0-9-]+: (case-insensitive, multiline)
#
#     (?:^|:)     - Name starts a line or directly follows another colon
#     [ \t]*      - Optional indentation
#     [a-z0-9-]+  - Header name: letters, digits and hyphen only
#     :           - Literal colon
#     ` `         - At least one space after the colon
#
# "Location:Status: " matches at "Status: ", "Content type: " never does.
#
# BLANK_LINE_PATTERN: two line terminators with nothing in between,
# either LF LF or CRLF CRLF.
#
HEADER_LINE_PATTERN = re.compile(r"(?:^|:)[ \t]*[a-z0-9-]+: ", re.IGNORECASE | re.MULTILINE)
BLANK_LINE_PATTERN = re.compile(r"\r?\n\r?\n")


def contains_header_line(text: Any) -> bool:
    """
    Check whether a block of text contains at least one header line.

    A header line is a name made of letters, digits and hyphens, directly
    followed by ": ". The name must start a line (indentation allowed) or
    follow directly after another colon, as in "Location:Status: ".

    Args:
        text: Text to inspect. None, empty and non-string values are
              accepted and simply return False.

    Returns:
        True as soon as one header-like "Name: " sequence is found.

    Example:
        contains_header_line("Content-type: ")   # True
        contains_header_line("Content type: ")   # False (space in name)
        contains_header_line("Content-type:")    # False (no space)
    """
    if not text or not isinstance(text, str):
        return False
    return HEADER_LINE_PATTERN.search(text) is not None


def find_separator(text: str) -> int:
    """
    Return the index just past the first blank-line separator, or -1.

    The returned index is where the body starts.
    """
    match = BLANK_LINE_PATTERN.search(text)
    if match is None:
        return -1
    return match.end()


def split_header_and_body(text: str) -> Tuple[str, str]:
    """
    Split raw procedure output into its header block and body.

    No characters are dropped or duplicated: the separator stays at the end
    of the header block, so header + body == text for every input.

    Args:
        text: Complete output of one procedure invocation.

    Returns:
        Tuple of (header, body). Either part may be empty.

    Example:
        split_header_and_body("Content-type: text/html\\n\\n<html>")
        # ("Content-type: text/html\\n\\n", "<html>")

        split_header_and_body("<html>")
        # ("", "<html>")
    """
    if not text:
        return "", ""

    body_start = find_separator(text)
    if body_start != -1:
        return text[:body_start], text[body_start:]

    # No blank line: either all header or all body
    if contains_header_line(text):
        return text, ""
    return "", text
