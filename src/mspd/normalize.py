"""
Step 4: Normalize text rows into typed DebtRecords and derive series.

Parse, don't cast: every field is validated once here and carried typed
afterwards. Non-numeric amounts and malformed dates raise FormatError
instead of silently becoming zero or NaN.
"""

from __future__ import annotations

import logging
import math
import re
from collections import deque
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Mapping, Optional, Sequence

from .errors import ConfigurationError, FormatError
from .models import (AMOUNT_FIELDS, NOT_APPLICABLE, DebtRecord, GrowthPoint,
                     RollingPoint, is_not_applicable)

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_AMOUNT_RE = re.compile(r"^[0-9]+(\.[0-9]+)?$")

MONTHS_PER_YEAR = 12
PERCENT = 100


def parse_record_date(text: Optional[str]) -> date:
    """Parse a YYYY-MM-DD string. Anything else raises FormatError."""
    if text is None or not _DATE_RE.match(text.strip()):
        raise FormatError(f"record_date must be YYYY-MM-DD, got {text!r}")
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise FormatError(f"record_date is not a calendar date: {text!r}") from exc


def format_record_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_amount(text: Optional[str], field: str = "amount") -> Decimal:
    """Parse a non-negative decimal amount (millions)."""
    if text is None or text.strip() == "":
        raise FormatError(f"{field} is empty")
    if not _AMOUNT_RE.match(text.strip()):
        raise FormatError(f"{field} is not a plain non-negative number: {text!r}")
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        raise FormatError(f"{field} is not numeric: {text!r}") from None
    if not value.is_finite():
        raise FormatError(f"{field} is not finite: {text!r}")
    if value < 0:
        raise FormatError(f"{field} is negative: {text!r}")
    return value


def _require(row: Mapping[str, Optional[str]], name: str, index: int) -> Optional[str]:
    if name not in row:
        raise FormatError(f"row {index}: missing field {name!r} (available: {sorted(row)})")
    return row[name]


def _amount(row: Mapping[str, Optional[str]], attr: str, index: int) -> Decimal:
    for wire_name in AMOUNT_FIELDS[attr]:
        if wire_name in row:
            return parse_amount(row[wire_name], field=f"row {index}: {wire_name}")
    raise FormatError(
        f"row {index}: missing amount field {AMOUNT_FIELDS[attr][0]!r} (available: {sorted(row)})"
    )


def normalize_row(row: Mapping[str, Optional[str]], index: int = 0) -> DebtRecord:
    type_desc = _require(row, "security_type_desc", index)
    if type_desc is None or type_desc.strip() == "":
        raise FormatError(f"row {index}: security_type_desc is empty")

    class_desc = _require(row, "security_class_desc", index)
    class_desc = NOT_APPLICABLE if is_not_applicable(class_desc) else class_desc.strip()

    return DebtRecord(
        record_date=parse_record_date(_require(row, "record_date", index)),
        security_type_desc=type_desc.strip(),
        security_class_desc=class_desc,
        debt_held_public_amt=_amount(row, "debt_held_public_amt", index),
        intragov_hold_amt=_amount(row, "intragov_hold_amt", index),
        total_amt=_amount(row, "total_amt", index),
    )


def normalize_records(rows: Iterable[Mapping[str, Optional[str]]]) -> List[DebtRecord]:
    """
    Type every row, preserving input order.

    Raises:
        FormatError: malformed date/amount, missing field, duplicate
            (record_date, security_type_desc, security_class_desc)
    """
    records = []
    seen = set()
    for i, row in enumerate(rows):
        record = normalize_row(row, i)
        if record.key in seen:
            raise FormatError(f"row {i}: duplicate record {record.key}")
        seen.add(record.key)
        records.append(record)

    logger.info("[normalize] %d typed records", len(records))
    return records


def annualized_growth(records: Sequence[DebtRecord]) -> List[GrowthPoint]:
    """
    Annualized continuously-compounded growth of total public debt.

    Only "Total Public Debt Outstanding" rows are used, in ascending date order:

        growth[t] = (ln(x[t]) - ln(x[t-1])) * 12 * 100

    with x in trillions. Positive when debt grew. The oldest period has no
    prior month and carries None.
    """
    totals = sorted((r for r in records if r.is_total), key=lambda r: r.record_date)

    points: List[GrowthPoint] = []
    prev_log: Optional[float] = None
    for record in totals:
        trillions = record.total_amt_trillions
        if trillions <= 0:
            raise FormatError(f"{record.record_date}: total_amt must be positive for log growth")
        current_log = math.log(trillions)
        growth = None
        if prev_log is not None:
            growth = (current_log - prev_log) * MONTHS_PER_YEAR * PERCENT
        points.append(GrowthPoint(record.record_date, trillions, growth))
        prev_log = current_log

    return points


def rolling_mean(points: Sequence[GrowthPoint], window: int = 12) -> List[RollingPoint]:
    """
    Trailing mean of annualized growth over `window` periods.

    Like pandas rolling(window).mean(): undefined until the window holds
    `window` defined values.
    """
    if window <= 0:
        raise ConfigurationError(f"window must be positive, got {window}")

    buf: deque = deque(maxlen=window)
    out = []
    for point in points:
        buf.append(point.annualized_growth_pct)
        value = None
        if len(buf) == window and all(v is not None for v in buf):
            value = sum(buf) / window
        out.append(RollingPoint(point.record_date, value))
    return out
