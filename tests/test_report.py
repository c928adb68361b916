"""Presentation layer: frames, summary statistics, charts."""

import math
from datetime import date

import pandas as pd
import pytest

from src.mspd.models import GrowthPoint
from src.mspd.pipeline import run_from_payload
from src.mspd.report import (growth_frame, holders_frame, print_summary,
                             records_frame, render_all_charts,
                             summary_statistics)


@pytest.fixture
def result(mspd_payload):
    return run_from_payload(mspd_payload, rolling_window=2)


class TestFrames:

    def test_records_frame(self, result):
        df = records_frame(result.total_only)
        assert len(df) == 3
        assert df["record_date"].is_monotonic_increasing
        assert df["total_amt_trillions"].iloc[-1] == pytest.approx(34.00149363)

    def test_records_frame_empty(self):
        df = records_frame([])
        assert df.empty
        assert "total_amt_trillions" in df.columns

    def test_growth_frame_missing_is_nan(self, result):
        df = growth_frame(result.growth, result.growth_rolling)
        assert pd.isna(df["annualized_growth_pct"].iloc[0])
        assert df["annualized_growth_pct"].notna().sum() == 2
        assert df["growth_rolling_mean"].notna().sum() == 1

    def test_holders_frame_long_format(self, result):
        df = holders_frame(result.holder_split)
        assert list(df.columns) == ["record_date", "holder", "amount_trillions"]
        assert df.groupby("record_date").size().tolist() == [2, 2, 2]


class TestSummaryStatistics:

    def test_known_values(self):
        growth = [
            GrowthPoint(date(2024, 1, 31), 1.0, None),
            GrowthPoint(date(2024, 2, 29), 1.0, 2.0),
            GrowthPoint(date(2024, 3, 31), 1.0, 4.0),
            GrowthPoint(date(2024, 4, 30), 1.0, 9.0),
        ]

        stats = summary_statistics(growth)

        assert stats["count"] == 3
        assert stats["mean"] == pytest.approx(5.0)
        assert stats["std"] == pytest.approx(math.sqrt(13.0))
        assert stats["min"] == 2.0
        assert stats["max"] == 9.0

    def test_no_defined_values(self):
        stats = summary_statistics([GrowthPoint(date(2024, 1, 31), 1.0, None)])
        assert stats == {"count": 0, "mean": None, "std": None, "min": None, "max": None}

    def test_print_summary(self, result, capsys):
        stats = print_summary(result)
        out = capsys.readouterr().out
        assert "=== MSPD Summary ===" in out
        assert "Months: 3" in out
        assert stats["count"] == 2


class TestCharts:

    def test_render_all_charts(self, result, tmp_path):
        paths = render_all_charts(result, tmp_path / "charts")

        names = sorted(p.name for p in paths)
        assert names == [
            "growth.png", "holder_split.png", "marketability.png", "security_class.png", "total_debt.png",
        ]
        assert all(p.exists() and p.stat().st_size > 0 for p in paths)
