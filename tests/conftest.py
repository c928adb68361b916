"""Shared fixtures: a 3-month MSPD table 1 payload, newest month first."""

import json
from decimal import Decimal

import matplotlib
import pytest

matplotlib.use("Agg")

# (record_date, public, intragov) for the Total Public Debt Outstanding rows, descending
TOTALS = [
    ("2023-12-31", "26947180.00", "7054313.63"),
    ("2023-11-30", "26837450.10", "7041229.90"),
    ("2023-10-31", "26631120.50", "7069879.50"),
]

# (security_type_desc, security_class_desc, public, intragov) rows repeated every month
DETAIL_ROWS = [
    ("Marketable", "Bills", "5700000.00", "1200.50"),
    ("Marketable", "Notes", "14100000.25", "2300.75"),
    ("Marketable", "Bonds", "4400000.00", "3100.00"),
    ("Total Marketable", "_", "24200000.25", "6601.25"),
    ("Nonmarketable", "Domestic Series", "18000.00", "0.00"),
    ("Nonmarketable", "Government Account Series", "210000.00", "6900000.00"),
    ("Total Nonmarketable", "_", "228000.00", "6900000.00"),
]


def _row(record_date, type_desc, class_desc, public, intragov, total):
    return {
        "record_date": record_date,
        "security_type_desc": type_desc,
        "security_class_desc": class_desc,
        "debt_held_public_mil_amt": public,
        "intragov_hold_mil_amt": intragov,
        "total_mil_amt": total,
    }


def _total(public, intragov):
    return str(Decimal(public) + Decimal(intragov))


def build_rows():
    rows = []
    for record_date, public, intragov in TOTALS:
        for type_desc, class_desc, p, i in DETAIL_ROWS:
            rows.append(_row(record_date, type_desc, class_desc, p, i, _total(p, i)))
        rows.append(
            _row(record_date, "Total Public Debt Outstanding", "_", public, intragov, _total(public, intragov))
        )
    return rows


def build_payload(rows, total_count=None, total_pages=1):
    return json.dumps({
        "data": rows,
        "meta": {
            "count": len(rows),
            "labels": {"record_date": "Record Date", "total_mil_amt": "Total Public Debt Outstanding (in Millions)"},
            "dataTypes": {"record_date": "DATE", "total_mil_amt": "CURRENCY"},
            "total-count": len(rows) if total_count is None else total_count,
            "total-pages": total_pages,
        },
        "links": {"self": "&page%5Bnumber%5D=1&page%5Bsize%5D=10000", "first": None, "prev": None,
                  "next": None, "last": None},
    })


def pytest_configure(config):
    config.addinivalue_line("markers", "fail_loud: data quality gates must raise, not coerce")


@pytest.fixture
def mspd_rows():
    return build_rows()


@pytest.fixture
def mspd_payload(mspd_rows):
    return build_payload(mspd_rows)
