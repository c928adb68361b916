"""
Step 3: Parse the JSON body into text-typed rows.

Fiscal Data responses look like:

    {"data": [{"record_date": "2023-12-31", "total_mil_amt": "34001493.6", ...}],
     "meta": {"count": 1, "total-count": 3110, "total-pages": 1, "labels": {...}, ...},
     "links": {"self": "...", "next": null, ...}}

Every value in `data` is a string (or null). `links` is ignored; `meta` is kept
so the pipeline can check that the requested pages covered the whole table.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import IncompletePageError, ParseError

logger = logging.getLogger(__name__)

RawRow = Dict[str, Optional[str]]


@dataclass(frozen=True)
class PageMeta:
    count: Optional[int] = None
    total_count: Optional[int] = None
    total_pages: Optional[int] = None
    labels: Dict[str, str] = field(default_factory=dict)
    data_types: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ParsedPage:
    rows: List[RawRow]
    meta: PageMeta


def _optional_int(meta: dict, key: str) -> Optional[int]:
    value = meta.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ParseError(f"meta[{key!r}] is not an integer: {value!r}") from None


def _mapping(meta: dict, key: str) -> Dict[str, str]:
    # Only needed for display; a malformed block is dropped, not fatal
    value = meta.get(key)
    if not isinstance(value, dict):
        if value is not None:
            logger.warning("[parse] meta[%r] is not an object; ignoring", key)
        return {}
    return {str(k): str(v) for k, v in value.items()}


def parse_meta(payload: dict) -> PageMeta:
    meta = payload.get("meta")
    if not isinstance(meta, dict):
        return PageMeta()
    return PageMeta(
        count=_optional_int(meta, "count"),
        total_count=_optional_int(meta, "total-count"),
        total_pages=_optional_int(meta, "total-pages"),
        labels=_mapping(meta, "labels"),
        data_types=_mapping(meta, "dataTypes"),
    )


def parse_response(body: str) -> ParsedPage:
    """
    Extract the `data` array (order preserved) and page metadata.

    Raises:
        ParseError: invalid JSON, non-object body, missing or malformed `data`
    """
    try:
        payload = json.loads(body)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ParseError(f"Response body is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ParseError(f"Expected a JSON object, got {type(payload).__name__}")
    if "data" not in payload:
        raise ParseError(f"Response has no 'data' key (keys: {sorted(payload)})")

    data = payload["data"]
    if not isinstance(data, list):
        raise ParseError(f"'data' must be an array, got {type(data).__name__}")

    rows: List[RawRow] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ParseError(f"data[{i}] is not an object: {item!r}")
        rows.append({k: (None if v is None else str(v)) for k, v in item.items()})

    meta = parse_meta(payload)
    logger.info(
        "[parse] %d rows (total-count=%s, total-pages=%s)",
        len(rows), meta.total_count, meta.total_pages,
    )
    return ParsedPage(rows=rows, meta=meta)


def check_page_coverage(meta: PageMeta, rows_received: int) -> None:
    """
    Fail loud when the API reports more rows than were retrieved.

    A missing total-count (e.g. a trimmed fixture) is not an error.
    """
    if meta.total_count is None:
        logger.warning("[parse] no total-count in meta; cannot confirm full coverage")
        return
    if meta.total_count > rows_received:
        raise IncompletePageError(meta.total_count, rows_received)
