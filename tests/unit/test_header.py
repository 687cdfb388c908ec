"""
Unit tests for header classification.
"""

import pytest

from plsqlgateway.page.cookies import Cookie
from plsqlgateway.page.header import (
    HeaderParseResult,
    ParsedHeader,
    parse_header,
    parse_integer,
    parse_status,
    split_header_line,
)


class TestParseHeader:
    """Tests for parse_header()."""

    @pytest.mark.parametrize("text", ["", "\n\n", "   \n\t\n", None])
    def test_empty_header(self, text):
        """Test that empty and blank blocks give an empty result."""
        main, other, cookies = parse_header(text)

        assert main.to_dict() == {}
        assert other == {}
        assert cookies == []

    def test_location_and_content_type(self):
        """Test the two simple string fields."""
        main, other, cookies = parse_header("Location: index.html\nContent-type: text/html")

        assert main.to_dict() == {
            "contentType": "text/html",
            "redirectLocation": "index.html",
        }
        assert other == {}
        assert cookies == []

    def test_surrounding_blank_lines(self):
        """Test that leading and trailing blank lines are ignored."""
        main, other, cookies = parse_header("\nContent-type: text/html\n")

        assert main.to_dict() == {"contentType": "text/html"}
        assert other == {}

    def test_status_and_content_length(self):
        """Test numeric fields and the status description."""
        main, other, cookies = parse_header(
            "Status: 400 error status\nContent-type: text/html\nX-DB-Content-length: 4711"
        )

        assert main.status_code == 400
        assert main.status_description == "error status"
        assert main.content_type == "text/html"
        assert main.content_length == 4711
        assert other == {}
        assert cookies == []

    def test_cookies(self):
        """Test that Set-Cookie lines become cookies in order."""
        main, other, cookies = parse_header("Set-Cookie: c1=v1\nSet-Cookie: c2=another value")

        assert main.to_dict() == {}
        assert other == {}
        assert cookies == [Cookie("c1", "v1"), Cookie("c2", "another value")]

    def test_illegal_cookie_dropped(self):
        """Test that a malformed cookie is dropped without affecting others."""
        main, other, cookies = parse_header(
            "Set-Cookie: c1=v1\n"
            "Set-Cookie: illegalKey = illegalValue\n"
            "Set-Cookie: c2=another value"
        )

        assert cookies == [Cookie("c1", "v1"), Cookie("c2", "another value")]
        assert other == {}

    def test_illegal_cookie_between_blank_lines(self):
        text = (
            "\nSet-Cookie: correctKey=correctValue"
            "\nSet-Cookie: illegalKey = illigalValue"
            "\nSet-Cookie: key=value\n"
        )
        _, _, cookies = parse_header(text)

        assert [c.to_dict() for c in cookies] == [
            {"key": "correctKey", "value": "correctValue"},
            {"key": "key", "value": "value"},
        ]

    def test_overflow_header(self):
        """Test that unknown names keep their spelling in the overflow map."""
        main, other, cookies = parse_header("some attribute: some value")

        assert main.to_dict() == {}
        assert other == {"some attribute": "some value"}
        assert cookies == []

    def test_everything_together(self, full_header: str):
        """Test a block using every kind of header line."""
        main, other, cookies = parse_header(full_header)

        assert main.to_dict() == {
            "statusCode": 400,
            "statusDescription": "error status",
            "contentType": "text/html",
            "contentLength": 4711,
        }
        assert other == {"some attribute": "some value"}
        assert cookies == [Cookie("c1", "v1"), Cookie("c2", "another value")]

    def test_case_insensitive_names(self):
        """Test that well-known names match in any case."""
        lower = parse_header("content-type: x").main
        upper = parse_header("CONTENT-TYPE: x").main

        assert lower.content_type == upper.content_type == "x"
        assert parse_header("LOCATION: /a").main.redirect_location == "/a"
        assert parse_header("status: 201 Made").main.status_code == 201
        assert parse_header("set-cookie: a=b").cookies == [Cookie("a", "b")]

    @pytest.mark.parametrize("name", [
        "Content-length",
        "content-LENGTH",
        "X-DB-Content-length",
        "X-ORACLE-IGNORE-Content-Length",
    ])
    def test_content_length_suffix(self, name: str):
        """Test that any name ending in Content-length sets the length."""
        main = parse_header(f"{name}: 12").main
        assert main.content_length == 12

    def test_invalid_status_skipped(self):
        """Test that a Status without a leading number sets nothing."""
        main, other, _ = parse_header("Status: error\nContent-type: text/plain")

        assert main.status_code is None
        assert main.status_description is None
        assert main.content_type == "text/plain"
        assert other == {}

    def test_status_without_description(self):
        main = parse_header("Status: 302").main

        assert main.status_code == 302
        assert main.status_description == ""

    def test_invalid_content_length_skipped(self):
        """Test that a non-numeric length leaves the field unset."""
        main, other, _ = parse_header("X-DB-Content-length: lots\nLocation: /x")

        assert main.content_length is None
        assert main.redirect_location == "/x"
        assert other == {}

    def test_lines_without_colon_skipped(self):
        """Test that lines without a colon are ignored."""
        main, other, cookies = parse_header("garbage\nLocation: /a\nmore garbage")

        assert main.redirect_location == "/a"
        assert other == {}

    def test_repeated_overflow_header_last_wins(self):
        _, other, _ = parse_header("X-Trace: 1\nX-Trace: 2")
        assert other == {"X-Trace": "2"}

    def test_repeated_field_last_wins(self):
        main = parse_header("Content-type: a\nContent-type: b").main
        assert main.content_type == "b"

    def test_value_with_colon(self):
        """Test that only the first colon splits name and value."""
        main, other, _ = parse_header("Location: http://example.com:8080/a\nX-Time: 12:30")

        assert main.redirect_location == "http://example.com:8080/a"
        assert other == {"X-Time": "12:30"}

    def test_crlf_lines(self):
        main, other, _ = parse_header("Content-type: text/plain\r\nX-A: b\r\n\r\n")

        assert main.content_type == "text/plain"
        assert other == {"X-A": "b"}

    def test_only_lf_and_cr_break_lines(self):
        """Test that form feeds and Unicode separators stay inside values."""
        _, other, _ = parse_header("X-A: a\x0cb\nX-B: c d\x85e\rX-C: f")

        assert other == {"X-A": "a\x0cb", "X-B": "c d\x85e", "X-C": "f"}

    @pytest.mark.parametrize("line", [
        "Status: ٤٠٤ gone",
        "Status: ４０４",
    ])
    def test_non_ascii_status_digits_skipped(self, line: str):
        main = parse_header(line).main

        assert main.status_code is None
        assert main.status_description is None

    @pytest.mark.parametrize("value", ["1_000", "+12", "-5", "٤٠"])
    def test_non_decimal_content_length_skipped(self, value: str):
        assert parse_header(f"Content-length: {value}").main.content_length is None

    def test_fresh_result_per_call(self):
        """Test that results of separate calls never share state."""
        first = parse_header("X-A: 1\nSet-Cookie: a=1")
        second = parse_header("X-B: 2")

        assert first.other == {"X-A": "1"}
        assert second.other == {"X-B": "2"}
        assert second.cookies == []

    def test_result_type(self):
        result = parse_header("Location: /a")

        assert isinstance(result, HeaderParseResult)
        assert isinstance(result.main, ParsedHeader)


class TestHelpers:
    """Tests for the per-line helpers."""

    def test_split_header_line(self):
        assert split_header_line("  Name :  value  ") == ("Name", "value")
        assert split_header_line("no colon") is None

    @pytest.mark.parametrize("value,expected", [
        ("400 error status", (400, "error status")),
        ("200", (200, "")),
        ("404Not Found", (404, "Not Found")),
        ("error", None),
        ("", None),
    ])
    def test_parse_status(self, value: str, expected):
        assert parse_status(value) == expected

    def test_parse_integer(self):
        assert parse_integer("4711") == 4711
        assert parse_integer("47x") is None
        assert parse_integer("") is None
        assert parse_integer("1_000") is None
        assert parse_integer("٤٠") is None


class TestParsedHeader:
    """Tests for the ParsedHeader dataclass."""

    def test_to_dict_omits_unset_fields(self):
        header = ParsedHeader(content_type="text/html", status_code=200, status_description="")

        assert header.to_dict() == {
            "contentType": "text/html",
            "statusCode": 200,
            "statusDescription": "",
        }
