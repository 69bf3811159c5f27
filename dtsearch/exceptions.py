"""
dtsearch exception hierarchy.

Kept in one module so config, the search client and the column catalog can
share it without importing each other.
"""
from typing import Optional


class DtsearchError(Exception):
    exit_code = 1


class ConfigError(DtsearchError):
    """Exit code 2: conflicting options, missing credentials, bad .env values."""

    exit_code = 2


class SearchClientError(DtsearchError):
    def __init__(self, message: str, *, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class UnknownColumnError(LookupError):
    """An importance override names a header that is not in the catalog."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Unable to find column with header {header!r}")
