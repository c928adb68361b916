# file: src/mspd/cli.py
from __future__ import annotations

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from src.mspd.config import load_settings
from src.mspd.errors import MSPDError
from src.mspd.fetch import fetch_text
from src.mspd.parse import parse_response
from src.mspd.pipeline import run_pipeline
from src.mspd.report import print_summary, render_all_charts

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
app = typer.Typer(add_completion=False)
console = Console()


def _strip_ipykernel_args(argv: list[str]) -> list[str]:
    """Jupyter/ipykernel injects `-f <connection_file>` into sys.argv."""
    out = [argv[0]]
    i = 1
    while i < len(argv):
        a = argv[i]
        if a in ("-f", "--f"):
            i += 2  # skip flag + value
            continue
        if a.startswith("--f="):
            i += 1
            continue
        out.append(a)
        i += 1
    return out


def _table(title: str, rows: dict) -> Table:
    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for k, v in rows.items():
        table.add_row(str(k), str(v))
    return table


@app.command()
def run(
    page_size: Optional[int] = None,
    output_dir: Optional[str] = None,
    rolling_window: Optional[int] = None,
    charts: bool = True,
):
    """Fetch MSPD table 1, print summary statistics and write charts."""
    try:
        settings = load_settings(page_size=page_size, output_dir=output_dir, rolling_window=rolling_window)
        result = run_pipeline(settings)
        stats = print_summary(result)
        paths = render_all_charts(result, settings.output_path()) if charts else []
    except MSPDError as exc:
        console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1)

    rows = dict(result.summary())
    rows.update({f"growth_{k}": (round(v, 2) if isinstance(v, float) else v) for k, v in stats.items()})
    rows["charts"] = len(paths)
    console.print(_table("Pipeline Results", rows))


@app.command("fetch-meta")
def fetch_meta(page_size: int = 1):
    """Show the API's total-count / total-pages and field labels."""
    try:
        settings = load_settings(page_size=page_size)
        page = parse_response(fetch_text(settings.url(1), timeout=settings.timeout).body)
    except MSPDError as exc:
        console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1)

    meta = page.meta
    rows = {"total-count": meta.total_count, "total-pages": meta.total_pages}
    rows.update({f"label:{k}": v for k, v in meta.labels.items()})
    console.print(_table("MSPD table 1 metadata", rows))


if __name__ == "__main__":
    sys.argv = _strip_ipykernel_args(sys.argv)
    app(standalone_mode=False)  # <-- prevents SystemExit in Jupyter
