"""
pytest configuration and fixtures.
"""

from typing import Dict, List, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from plsqlgateway import GatewayConfig, PageHandler
from plsqlgateway.gateway import ProcedureNotFoundError
from plsqlgateway.statistics import RequestStatistics


def make_page(body: str) -> str:
    """Procedure output the way a typical web procedure writes it."""
    return (
        "Content-type: text/html; charset=UTF-8\n"
        f"X-DB-Content-length: {len(body)}\n"
        "\n"
        + body
    )


@pytest.fixture
def sample_page() -> str:
    """Page with headers, a blank line and a body."""
    return make_page("sample page")


@pytest.fixture
def full_header() -> str:
    """Header block using every kind of header line."""
    return (
        "Status: 400 error status\n"
        "Content-type: text/html\n"
        "X-DB-Content-length: 4711\n"
        "Set-Cookie: c1=v1\n"
        "Set-Cookie: c2=another value\n"
        "some attribute: some value"
    )


class FakeDatabase:
    """Stand-in for the stored-procedure layer; records every call."""

    def __init__(self, pages: Dict[str, str]):
        self.pages = pages
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    def invoke(self, procedure: str, args: Dict[str, str]) -> str:
        self.calls.append((procedure, args))
        key = procedure.lower()
        if key == "broken":
            raise RuntimeError("ORA-06550: line 1, column 7")
        if key not in self.pages:
            raise ProcedureNotFoundError(f"Procedure not found: {procedure}")
        return self.pages[key]


@pytest.fixture
def database(sample_page: str) -> FakeDatabase:
    return FakeDatabase({
        "samplepage": sample_page,
        "redirect": "Location: /app/home\n",
        "plain": "just a body",
        "login": "Set-Cookie: sid=4f2a\nSet-Cookie: theme=\"dark mode\"\n\nwelcome",
    })


@pytest.fixture
def config() -> GatewayConfig:
    """Default test gateway configuration."""
    return GatewayConfig(default_page="samplePage", log_level="DEBUG")


@pytest.fixture
def handler(database: FakeDatabase, config: GatewayConfig) -> PageHandler:
    return PageHandler(database.invoke, config, RequestStatistics())
