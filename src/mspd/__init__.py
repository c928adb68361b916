"""
MSPD: U.S. national debt from the Treasury Fiscal Data API

Simple, step-by-step functions for learning:
1. request - Build the query URL (sort, format, page, fields)
2. fetch - One GET, fail loud on transport or HTTP errors
3. parse - JSON body -> text rows + page metadata
4. normalize - Typed DebtRecords, trillions, annualized growth
5. views - Total-only, holder split, marketability, security class
6. report - Summary statistics and charts
"""

from .config import Settings, load_settings
from .errors import (ConfigurationError, FormatError, HttpStatusError,
                     IncompletePageError, MSPDError, NetworkError, ParseError)
from .fetch import FetchResult, fetch_text
from .models import DebtRecord, GrowthPoint, HolderAmount, RollingPoint
from .normalize import (annualized_growth, normalize_records, parse_amount,
                        parse_record_date, rolling_mean)
from .parse import PageMeta, ParsedPage, check_page_coverage, parse_response
from .pipeline import PipelineResult, build_result, run_from_payload, run_pipeline
from .request import RequestOptions, ResponseFormat, build_query_url
from .views import holder_split, marketability, security_class, total_only

__all__ = [
    "Settings",
    "load_settings",
    "MSPDError",
    "ConfigurationError",
    "NetworkError",
    "HttpStatusError",
    "ParseError",
    "IncompletePageError",
    "FormatError",
    "FetchResult",
    "fetch_text",
    "DebtRecord",
    "GrowthPoint",
    "HolderAmount",
    "RollingPoint",
    "annualized_growth",
    "normalize_records",
    "parse_amount",
    "parse_record_date",
    "rolling_mean",
    "PageMeta",
    "ParsedPage",
    "check_page_coverage",
    "parse_response",
    "PipelineResult",
    "build_result",
    "run_from_payload",
    "run_pipeline",
    "RequestOptions",
    "ResponseFormat",
    "build_query_url",
    "holder_split",
    "marketability",
    "security_class",
    "total_only",
]
