"""
Presentation layer: DataFrames, summary statistics and charts.

Consumes PipelineResult only; no HTTP or JSON concerns here.

Charts are written to output_dir as PNGs:
1. total_debt.png        - total public debt outstanding (trillions)
2. holder_split.png      - debt held by the public vs intragovernmental holdings
3. marketability.png     - marketable vs nonmarketable totals
4. security_class.png    - leaf security classes
5. growth.png            - annualized growth with rolling average
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .models import (MILLIONS_PER_TRILLION, DebtRecord, GrowthPoint,
                     HolderAmount, RollingPoint)
from .pipeline import PipelineResult

logger = logging.getLogger(__name__)

plt.rcParams['figure.figsize'] = (12, 6)
plt.rcParams['figure.dpi'] = 100


def records_frame(records: Sequence[DebtRecord]) -> pd.DataFrame:
    """One row per DebtRecord, amounts as floats, plus total_amt_trillions."""
    columns = [
        "record_date", "security_type_desc", "security_class_desc",
        "debt_held_public_amt", "intragov_hold_amt", "total_amt", "total_amt_trillions",
    ]
    df = pd.DataFrame(
        [
            {
                "record_date": pd.Timestamp(r.record_date),
                "security_type_desc": r.security_type_desc,
                "security_class_desc": r.security_class_desc,
                "debt_held_public_amt": float(r.debt_held_public_amt),
                "intragov_hold_amt": float(r.intragov_hold_amt),
                "total_amt": float(r.total_amt),
                "total_amt_trillions": r.total_amt_trillions,
            }
            for r in records
        ],
        columns=columns,
    )
    return df


def growth_frame(
    growth: Sequence[GrowthPoint],
    rolling: Optional[Sequence[RollingPoint]] = None,
) -> pd.DataFrame:
    """Ascending growth series; missing values become NaN."""
    df = pd.DataFrame(
        {
            "record_date": [pd.Timestamp(p.record_date) for p in growth],
            "total_amt_trillions": [p.total_amt_trillions for p in growth],
            "annualized_growth_pct": [
                np.nan if p.annualized_growth_pct is None else p.annualized_growth_pct
                for p in growth
            ],
        }
    )
    if rolling is not None:
        by_date = {p.record_date: p.value for p in rolling}
        df["growth_rolling_mean"] = [
            np.nan if by_date.get(p.record_date) is None else by_date[p.record_date]
            for p in growth
        ]
    return df


def holders_frame(holders: Sequence[HolderAmount]) -> pd.DataFrame:
    """Long format: record_date, holder, amount_trillions."""
    return pd.DataFrame(
        {
            "record_date": [pd.Timestamp(h.record_date) for h in holders],
            "holder": [h.holder for h in holders],
            "amount_trillions": [float(h.amount) / MILLIONS_PER_TRILLION for h in holders],
        }
    )


def _clean(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def summary_statistics(growth: Sequence[GrowthPoint]) -> Dict[str, Optional[float]]:
    """count / mean / std / min / max of the defined annualized growth values."""
    values = pd.Series(
        [p.annualized_growth_pct for p in growth if p.annualized_growth_pct is not None],
        dtype="float64",
    )
    return {
        "count": int(values.count()),
        "mean": _clean(values.mean()),
        "std": _clean(values.std()),
        "min": _clean(values.min()),
        "max": _clean(values.max()),
    }


def print_summary(result: PipelineResult) -> Dict[str, Optional[float]]:
    """Tutorial-style printout of the run."""
    stats = summary_statistics(result.growth)
    info = result.summary()

    print("\n=== MSPD Summary ===")
    print(f"Records: {info['records']}")
    print(f"Months: {info['months']} ({info['first_month']} to {info['last_month']})")
    print(f"Latest total: {info['latest_total_trillions']} trillion")
    print(f"Marketability rows: {len(result.marketability)}")
    print(f"Security class rows: {len(result.security_class)}")
    if stats["count"]:
        print(f"\nAnnualized growth (%), {stats['count']} values:")
        print(f"  mean: {stats['mean']:.2f}")
        print(f"  std:  {stats['std']:.2f}" if stats["std"] is not None else "  std:  n/a")
        print(f"  min:  {stats['min']:.2f}")
        print(f"  max:  {stats['max']:.2f}")
    else:
        print("\nAnnualized growth: not enough months")
    return stats


def _save(fig, path: Path) -> Path:
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info("[report] wrote %s", path)
    return path


def plot_total_debt(result: PipelineResult, output_dir: Path) -> Path:
    df = records_frame(result.total_only)
    fig, ax = plt.subplots()
    ax.plot(df["record_date"], df["total_amt_trillions"], color="tab:red")
    ax.set_title("Total Public Debt Outstanding")
    ax.set_xlabel("Month")
    ax.set_ylabel("Trillions of dollars")
    ax.grid(True, alpha=0.3)
    return _save(fig, output_dir / "total_debt.png")


def plot_holder_split(result: PipelineResult, output_dir: Path) -> Path:
    df = holders_frame(result.holder_split)
    fig, ax = plt.subplots()
    if not df.empty:
        wide = df.pivot(index="record_date", columns="holder", values="amount_trillions")
        ax.stackplot(wide.index, [wide[c] for c in wide.columns], labels=list(wide.columns), alpha=0.8)
        ax.legend(loc="upper left")
    ax.set_title("Debt Held by the Public vs Intragovernmental Holdings")
    ax.set_ylabel("Trillions of dollars")
    ax.grid(True, alpha=0.3)
    return _save(fig, output_dir / "holder_split.png")


def _plot_by_category(records: Sequence[DebtRecord], column: str, title: str, path: Path) -> Path:
    df = records_frame(records)
    fig, ax = plt.subplots()
    for label, group in df.groupby(column):
        ax.plot(group["record_date"], group["total_amt_trillions"], label=label)
    if not df.empty:
        ax.legend(loc="upper left", fontsize="small")
    ax.set_title(title)
    ax.set_ylabel("Trillions of dollars")
    ax.grid(True, alpha=0.3)
    return _save(fig, path)


def plot_marketability(result: PipelineResult, output_dir: Path) -> Path:
    return _plot_by_category(
        result.marketability, "security_type_desc",
        "Marketable vs Nonmarketable Debt", output_dir / "marketability.png",
    )


def plot_security_class(result: PipelineResult, output_dir: Path) -> Path:
    return _plot_by_category(
        result.security_class, "security_class_desc",
        "Debt by Security Class", output_dir / "security_class.png",
    )


def plot_growth(result: PipelineResult, output_dir: Path) -> Path:
    df = growth_frame(result.growth, result.growth_rolling)
    fig, ax = plt.subplots()
    ax.plot(df["record_date"], df["annualized_growth_pct"], alpha=0.5, label="Monthly (annualized)")
    ax.plot(df["record_date"], df["growth_rolling_mean"], color="black", label="Rolling mean")
    ax.axhline(0, color="grey", linewidth=0.8)
    ax.set_title("Annualized Growth of Total Public Debt")
    ax.set_ylabel("Percent per year")
    ax.legend()
    ax.grid(True, alpha=0.3)
    return _save(fig, output_dir / "growth.png")


def render_all_charts(result: PipelineResult, output_dir: Path) -> List[Path]:
    """Write every chart and return their paths."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = [
        plot_total_debt(result, output_dir),
        plot_holder_split(result, output_dir),
        plot_marketability(result, output_dir),
        plot_security_class(result, output_dir),
        plot_growth(result, output_dir),
    ]
    print(f"[OK] {len(paths)} charts written to {output_dir}")
    return paths
