"""
Step 5: Views over normalized records.

Pure selections: each call returns a fresh list in ascending date order and
never mutates its input.
"""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

from .models import (HOLDER_INTRAGOVERNMENTAL, HOLDER_PUBLIC,
                     MARKETABILITY_TOTALS, DebtRecord, HolderAmount)


def _ascending(records) -> List[DebtRecord]:
    return sorted(records, key=lambda r: (r.record_date, r.security_type_desc, r.security_class_desc))


def distinct_dates(records: Sequence[DebtRecord]) -> List[date]:
    return sorted({r.record_date for r in records})


def total_only(records: Sequence[DebtRecord]) -> List[DebtRecord]:
    """Rows where security_type_desc is "Total Public Debt Outstanding"."""
    return _ascending(r for r in records if r.is_total)


def holder_split(records: Sequence[DebtRecord]) -> List[HolderAmount]:
    """
    Wide -> long pivot of the total-only view:

        (date, public_amt, intragov_amt) -> (date, "public", amt), (date, "intragovernmental", amt)
    """
    out = []
    for r in total_only(records):
        out.append(HolderAmount(r.record_date, HOLDER_PUBLIC, r.debt_held_public_amt))
        out.append(HolderAmount(r.record_date, HOLDER_INTRAGOVERNMENTAL, r.intragov_hold_amt))
    return out


def marketability(records: Sequence[DebtRecord]) -> List[DebtRecord]:
    """"Total Marketable" and "Total Nonmarketable" subtotal rows."""
    return _ascending(r for r in records if r.security_type_desc in MARKETABILITY_TOTALS)


def security_class(records: Sequence[DebtRecord]) -> List[DebtRecord]:
    """Leaf rows only: security_class_desc is an actual class, not the placeholder."""
    return _ascending(r for r in records if r.is_leaf)
