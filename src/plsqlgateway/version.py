"""Version lookup for status pages and the Server header."""

from importlib.metadata import PackageNotFoundError, version

from . import __version__


DISTRIBUTION_NAME = "plsqlgateway"


def get_version() -> str:
    """
    Return the installed distribution version.

    Falls back to the package's __version__ when running from a source
    checkout that was never installed.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return __version__
