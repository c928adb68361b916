"""
Step 2: Fetch the raw response body.

One blocking GET, no retry adapter: a failed call is surfaced to the caller
(CLI or notebook), which decides whether to try again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .errors import HttpStatusError, NetworkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    body: str
    status_code: int
    url: str


def fetch_text(
    url: str,
    timeout: float = 30.0,
    session: Optional[requests.Session] = None,
) -> FetchResult:
    """
    GET `url` and return the body as text.

    Raises:
        NetworkError: connection failure or timeout
        HttpStatusError: any non-2xx status (carries status_code)
    """
    getter = session.get if session is not None else requests.get

    logger.info("[fetch] GET %s", url)
    try:
        response = getter(url, timeout=timeout)
    except requests.Timeout as exc:
        raise NetworkError(f"Timed out after {timeout}s: {url}") from exc
    except requests.RequestException as exc:
        raise NetworkError(f"Request failed: {url}: {exc}") from exc

    status = response.status_code
    if not 200 <= status < 300:
        logger.error("[fetch] HTTP %s for %s", status, url)
        raise HttpStatusError(status, url=url, body=response.text[:500])

    body = response.text
    logger.info("[fetch] HTTP %s, %d bytes", status, len(body))
    return FetchResult(body=body, status_code=status, url=url)
