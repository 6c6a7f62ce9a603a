"""Custom exceptions for pagereader.

The extraction core never raises for missing nodes, attributes or
candidates; these errors only surface at the edges (parsing input and
reading or fetching it from the command line).
"""

from typing import Any


class PagereaderError(Exception):
    """Base exception for pagereader."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ParseError(PagereaderError):
    """HTML could not be turned into a document tree."""

    def __init__(self, message: str, base_uri: str | None = None):
        details = {"base_uri": base_uri} if base_uri else {}
        super().__init__(
            message=message,
            code="parse_error",
            details=details,
        )


class FetchError(PagereaderError):
    """A remote page could not be fetched."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        details: dict[str, Any] = {"url": url}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message=f"{url}: {message}",
            code="fetch_error",
            details=details,
        )


class SourceReadError(PagereaderError):
    """A local input file could not be read."""

    def __init__(self, path: str, message: str):
        super().__init__(
            message=f"{path}: {message}",
            code="source_read_error",
            details={"path": path},
        )
