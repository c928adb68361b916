"""
Step 1: Build the Fiscal Data query URL.

    https://api.fiscaldata.treasury.gov/services/api/fiscal_service
        /v1/debt/mspd/mspd_table_1
        ?sort=-record_date&format=json&page%5Bnumber%5D=1&page%5Bsize%5D=10000&fields=...

Bracketed parameter names are percent-encoded; comma separators inside
`fields` stay literal so the URL matches the API documentation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Tuple
from urllib.parse import urlencode

from .errors import ConfigurationError

BASE_URL = "https://api.fiscaldata.treasury.gov/services/api/fiscal_service"
MSPD_TABLE_1_ENDPOINT = "/v1/debt/mspd/mspd_table_1"

DEFAULT_FIELDS: Tuple[str, ...] = (
    "record_date",
    "security_type_desc",
    "security_class_desc",
    "debt_held_public_mil_amt",
    "intragov_hold_mil_amt",
    "total_mil_amt",
)


class ResponseFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    XML = "xml"


@dataclass(frozen=True)
class RequestOptions:
    sort_field: str = "-record_date"
    response_format: ResponseFormat = ResponseFormat.JSON
    page_number: int = 1
    page_size: int = 10000  # one page holds the full series (low thousands of rows)
    fields: Tuple[str, ...] = DEFAULT_FIELDS

    def with_page(self, page_number: int) -> "RequestOptions":
        return replace(self, page_number=page_number)


def _ordered_unique(fields: Iterable[str]) -> list[str]:
    seen = set()
    out = []
    for name in fields:
        name = name.strip()
        if name and name not in seen:
            seen.add(name)
            out.append(name)
    return out


def _coerce_format(value) -> ResponseFormat:
    try:
        return ResponseFormat(value)
    except ValueError:
        allowed = ", ".join(f.value for f in ResponseFormat)
        raise ConfigurationError(f"response_format must be one of {allowed}, got {value!r}") from None


def build_query_params(options: RequestOptions, filter_fields: bool = True) -> list[tuple[str, str]]:
    """
    Validate options and return ordered (name, value) pairs.

    Raises:
        ConfigurationError: non-positive page size/number, unknown format,
            or an empty field list when field filtering is requested.
    """
    if options.page_size <= 0:
        raise ConfigurationError(f"page_size must be positive, got {options.page_size}")
    if options.page_number <= 0:
        raise ConfigurationError(f"page_number must be positive, got {options.page_number}")

    fmt = _coerce_format(options.response_format)

    params = []
    if options.sort_field:
        params.append(("sort", options.sort_field))
    params.append(("format", fmt.value))
    params.append(("page[number]", str(options.page_number)))
    params.append(("page[size]", str(options.page_size)))

    if filter_fields:
        if isinstance(options.fields, str):
            raise ConfigurationError(f"fields must be a sequence of names, not a string: {options.fields!r}")
        fields = _ordered_unique(options.fields)
        if not fields:
            raise ConfigurationError("fields must not be empty when field filtering is requested")
        params.append(("fields", ",".join(fields)))

    return params


def build_query_url(
    base_url: str = BASE_URL,
    endpoint: str = MSPD_TABLE_1_ENDPOINT,
    options: RequestOptions = RequestOptions(),
    filter_fields: bool = True,
) -> str:
    """
    Join base URL, endpoint path and encoded query string.

    Example:
        >>> build_query_url(options=RequestOptions(page_size=5, fields=("record_date",)))
        'https://api.fiscaldata.treasury.gov/services/api/fiscal_service/v1/debt/mspd/mspd_table_1?sort=-record_date&format=json&page%5Bnumber%5D=1&page%5Bsize%5D=5&fields=record_date'
    """
    if not base_url:
        raise ConfigurationError("base_url must not be empty")
    if "?" in base_url or "?" in endpoint:
        raise ConfigurationError("base_url and endpoint must not carry a query string")

    params = build_query_params(options, filter_fields=filter_fields)
    path = base_url.rstrip("/") + "/" + endpoint.lstrip("/") if endpoint else base_url
    return f"{path}?{urlencode(params, safe=',')}"
