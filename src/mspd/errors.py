"""
MSPD pipeline errors.

Every gate fails loud: nothing here is caught inside the pipeline.
"""

from __future__ import annotations

from typing import Optional


class MSPDError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(MSPDError, ValueError):
    """Bad request parameters or settings."""


class NetworkError(MSPDError, ConnectionError):
    """Transport failure: connection refused, DNS, timeout."""


class HttpStatusError(MSPDError):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, url: Optional[str] = None, body: str = ""):
        self.status_code = status_code
        self.url = url
        self.body = body
        detail = f" url={url}" if url else ""
        super().__init__(f"HTTP {status_code}{detail}")


class ParseError(MSPDError, ValueError):
    """Body is not JSON or is missing the expected structure."""


class IncompletePageError(ParseError):
    """The API reports more rows than were retrieved."""

    def __init__(self, total_count: int, received: int):
        self.total_count = total_count
        self.received = received
        super().__init__(
            f"API reports total-count={total_count} but only {received} rows were received. "
            "Increase page_size or follow pagination."
        )


class FormatError(MSPDError, ValueError):
    """A field could not be coerced to its expected type."""
