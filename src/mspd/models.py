"""
Typed records for MSPD table 1 (Summary of Treasury Securities Outstanding).

Amounts arrive from the API in millions of dollars as text. Once parsed,
records are immutable; derived series live in their own small types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

# security_type_desc labels used by the views
TOTAL_PUBLIC_DEBT = "Total Public Debt Outstanding"
TOTAL_MARKETABLE = "Total Marketable"
TOTAL_NONMARKETABLE = "Total Nonmarketable"
MARKETABILITY_TOTALS = frozenset({TOTAL_MARKETABLE, TOTAL_NONMARKETABLE})

# security_class_desc on subtotal / total rows
NOT_APPLICABLE = "_"
_NOT_APPLICABLE_ALIASES = frozenset({NOT_APPLICABLE, "", "null"})

HOLDER_PUBLIC = "public"
HOLDER_INTRAGOVERNMENTAL = "intragovernmental"

MILLIONS_PER_TRILLION = 1_000_000

# Typed attribute -> accepted wire column names (first match wins).
# The live endpoint suffixes amounts with "_mil"; the short names are accepted too.
AMOUNT_FIELDS = {
    "debt_held_public_amt": ("debt_held_public_mil_amt", "debt_held_public_amt"),
    "intragov_hold_amt": ("intragov_hold_mil_amt", "intragov_hold_amt"),
    "total_amt": ("total_mil_amt", "total_amt"),
}


def is_not_applicable(security_class_desc: Optional[str]) -> bool:
    """True for the class placeholder carried by subtotal and total rows."""
    if security_class_desc is None:
        return True
    return security_class_desc.strip() in _NOT_APPLICABLE_ALIASES


@dataclass(frozen=True)
class DebtRecord:
    """One row of MSPD table 1. Amounts are in millions of dollars."""
    record_date: date
    security_type_desc: str
    security_class_desc: str
    debt_held_public_amt: Decimal
    intragov_hold_amt: Decimal
    total_amt: Decimal

    @property
    def key(self) -> Tuple[date, str, str]:
        return (self.record_date, self.security_type_desc, self.security_class_desc)

    @property
    def total_amt_trillions(self) -> float:
        return float(self.total_amt) / MILLIONS_PER_TRILLION

    @property
    def is_total(self) -> bool:
        return self.security_type_desc == TOTAL_PUBLIC_DEBT

    @property
    def is_leaf(self) -> bool:
        return not is_not_applicable(self.security_class_desc)


@dataclass(frozen=True)
class GrowthPoint:
    record_date: date
    total_amt_trillions: float
    annualized_growth_pct: Optional[float]  # None for the oldest period


@dataclass(frozen=True)
class HolderAmount:
    record_date: date
    holder: str
    amount: Decimal


@dataclass(frozen=True)
class RollingPoint:
    record_date: date
    value: Optional[float]
