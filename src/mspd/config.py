"""
Configuration for the MSPD pipeline.

The Fiscal Data API is public, so there are no secrets. A .env file (or the
environment) may still override a few knobs so every run logs the same config:

    MSPD_BASE_URL, MSPD_PAGE_SIZE, MSPD_TIMEOUT, MSPD_OUTPUT_DIR, MSPD_ROLLING_WINDOW
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigurationError
from .request import (BASE_URL, DEFAULT_FIELDS, MSPD_TABLE_1_ENDPOINT,
                      RequestOptions, ResponseFormat, build_query_url)


@dataclass(frozen=True)
class Settings:
    # Request
    base_url: str = BASE_URL
    endpoint: str = MSPD_TABLE_1_ENDPOINT
    sort_field: str = "-record_date"
    response_format: ResponseFormat = ResponseFormat.JSON
    page_size: int = 10000
    fields: Tuple[str, ...] = DEFAULT_FIELDS
    timeout: float = 30.0

    # Pagination
    follow_pages: bool = True
    max_pages: int = 50

    # Derived series
    rolling_window: int = 12

    # IO
    output_dir: str = "artifacts/mspd"

    def request_options(self, page_number: int = 1) -> RequestOptions:
        return RequestOptions(
            sort_field=self.sort_field,
            response_format=self.response_format,
            page_number=page_number,
            page_size=self.page_size,
            fields=self.fields,
        )

    def url(self, page_number: int = 1) -> str:
        return build_query_url(self.base_url, self.endpoint, self.request_options(page_number))

    def output_path(self) -> Path:
        return Path(self.output_dir)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def load_settings(
    page_size: Optional[int] = None,
    output_dir: Optional[str] = None,
    rolling_window: Optional[int] = None,
) -> Settings:
    """
    Load settings from .env / environment, with explicit arguments winning.
    """
    load_dotenv()

    defaults = Settings()
    settings = Settings(
        base_url=os.getenv("MSPD_BASE_URL") or defaults.base_url,
        page_size=page_size if page_size is not None else _env_int("MSPD_PAGE_SIZE", defaults.page_size),
        timeout=_env_float("MSPD_TIMEOUT", defaults.timeout),
        rolling_window=(
            rolling_window if rolling_window is not None
            else _env_int("MSPD_ROLLING_WINDOW", defaults.rolling_window)
        ),
        output_dir=output_dir or os.getenv("MSPD_OUTPUT_DIR") or defaults.output_dir,
    )

    if not math.isfinite(settings.timeout) or settings.timeout <= 0:
        raise ConfigurationError(f"timeout must be positive, got {settings.timeout}")
    if settings.rolling_window <= 0:
        raise ConfigurationError(f"rolling_window must be positive, got {settings.rolling_window}")
    # Surface page_size / fields problems before any network call
    settings.url()

    return settings
