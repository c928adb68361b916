"""
MSPD pipeline: fetch -> parse -> normalize -> views.

Usage:
    from src.mspd.config import load_settings
    from src.mspd.pipeline import run_pipeline

    result = run_pipeline(load_settings())
    print(len(result.total_only), "months")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import requests

from . import views
from .config import Settings
from .fetch import fetch_text
from .models import DebtRecord, GrowthPoint, HolderAmount, RollingPoint
from .normalize import annualized_growth, normalize_records, rolling_mean
from .parse import PageMeta, RawRow, check_page_coverage, parse_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    records: List[DebtRecord]
    total_only: List[DebtRecord]
    holder_split: List[HolderAmount]
    marketability: List[DebtRecord]
    security_class: List[DebtRecord]
    growth: List[GrowthPoint]
    growth_rolling: List[RollingPoint]
    meta: PageMeta = field(default_factory=PageMeta)

    def summary(self) -> dict:
        dates = [r.record_date for r in self.total_only]
        return {
            "records": len(self.records),
            "months": len(self.total_only),
            "first_month": dates[0].isoformat() if dates else None,
            "last_month": dates[-1].isoformat() if dates else None,
            "latest_total_trillions": (
                round(self.total_only[-1].total_amt_trillions, 5) if self.total_only else None
            ),
            "growth_values": sum(1 for p in self.growth if p.annualized_growth_pct is not None),
        }


def build_result(
    rows: Sequence[RawRow],
    meta: Optional[PageMeta] = None,
    rolling_window: int = 12,
) -> PipelineResult:
    """Pure part of the pipeline: typed records plus every derived view."""
    records = normalize_records(rows)
    growth = annualized_growth(records)
    return PipelineResult(
        records=records,
        total_only=views.total_only(records),
        holder_split=views.holder_split(records),
        marketability=views.marketability(records),
        security_class=views.security_class(records),
        growth=growth,
        growth_rolling=rolling_mean(growth, window=rolling_window),
        meta=meta or PageMeta(),
    )


def run_from_payload(body: str, rolling_window: int = 12) -> PipelineResult:
    """Run the pipeline on an already-fetched response body (e.g. a saved fixture)."""
    page = parse_response(body)
    return build_result(page.rows, page.meta, rolling_window=rolling_window)


def fetch_rows(
    settings: Settings,
    session: Optional[requests.Session] = None,
) -> tuple[List[RawRow], PageMeta]:
    """
    Fetch page 1 and, when the API reports more pages, the rest.

    The final row count is checked against meta total-count so a truncated
    pull fails loud instead of producing a silently shorter series.
    """
    first = parse_response(fetch_text(settings.url(1), timeout=settings.timeout, session=session).body)
    rows = list(first.rows)
    meta = first.meta
    print(f"  Page 1: {len(first.rows)} rows (total-count={meta.total_count})")

    total_pages = meta.total_pages or 1
    if total_pages > 1:
        if not settings.follow_pages:
            logger.warning("[pipeline] %d pages reported but follow_pages is off", total_pages)
        else:
            last_page = min(total_pages, settings.max_pages)
            for page_number in range(2, last_page + 1):
                page = parse_response(
                    fetch_text(settings.url(page_number), timeout=settings.timeout, session=session).body
                )
                rows.extend(page.rows)
                print(f"  Page {page_number}: {len(page.rows)} rows")

    check_page_coverage(meta, len(rows))
    return rows, meta


def run_pipeline(
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> PipelineResult:
    """Fetch MSPD table 1 and build every derived view."""
    settings = settings or Settings()
    print("Pulling MSPD table 1...")
    logger.info("[pipeline] start page_size=%s url=%s", settings.page_size, settings.url(1))

    rows, meta = fetch_rows(settings, session=session)
    result = build_result(rows, meta, rolling_window=settings.rolling_window)

    logger.info("[pipeline] done %s", result.summary())
    print(f"  Total: {len(result.records)} records, {len(result.total_only)} months")
    return result
