from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from .metrics import select_best
from .models import SimulationResult

REPORT_WIDTH = 100


def algorithm_label(result: SimulationResult) -> str:
    if result.quantum is None:
        return result.algorithm
    return f"{result.algorithm} (q={result.quantum})"


def build_result_table(result: SimulationResult) -> Table:
    """
    Per-activity metrics in the order the activities completed.
    """
    table = Table(title=f"{algorithm_label(result)}: per-activity metrics", box=box.SIMPLE_HEAVY)
    for header in ("Name", "ti", "t", "tf", "T", "E", "I"):
        table.add_column(header, justify="center" if header == "Name" else "right")

    for a in result.activities:
        table.add_row(
            a.name,
            str(a.arrival_time),
            str(a.service_time),
            str(a.completion_time),
            str(a.turnaround_time),
            str(a.wait_time),
            f"{a.service_ratio:.4f}",
        )

    table.add_section()
    table.add_row(
        "Mean",
        "",
        "",
        "",
        f"{result.avg_turnaround:.2f}",
        f"{result.avg_wait:.2f}",
        f"{result.avg_service_ratio:.4f}",
    )
    return table


def build_comparison_table(results: Sequence[SimulationResult], best: Optional[SimulationResult] = None) -> Table:
    table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Avg T", justify="right")
    table.add_column("Avg E", justify="right")
    table.add_column("Avg I", justify="right")
    table.add_column("Trials", justify="right")
    table.add_column("Time/run (us)", justify="right")

    for result in results:
        table.add_row(
            algorithm_label(result),
            f"{result.avg_turnaround:.2f}",
            f"{result.avg_wait:.2f}",
            f"{result.avg_service_ratio:.4f}",
            str(result.trials),
            f"{result.execution_time * 1e6:.3f}",
            style="bold green" if result is best else None,
        )
    return table


def conclusion(best: SimulationResult) -> str:
    return (
        f"Best algorithm: {algorithm_label(best)} "
        f"with the highest mean service ratio I = {best.avg_service_ratio:.4f}"
    )


def print_report(console: Console, results: Sequence[SimulationResult], *, source: Optional[str] = None) -> SimulationResult:
    """
    Render every result, the comparison table and the conclusion to
    ``console``. Returns the best result.
    """
    best = select_best(results)

    console.rule("Activity scheduling report")
    if source:
        console.print(f"Workload: {source}")
    console.print()

    for result in results:
        console.print(build_result_table(result))
        console.print()

    console.print(build_comparison_table(results, best))
    console.print(conclusion(best))
    return best


def write_report(path: str | Path, results: Sequence[SimulationResult], *, source: Optional[str] = None) -> Path:
    """
    Write a plain-text report (no color codes) to ``path``.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        console = Console(file=f, width=REPORT_WIDTH, color_system=None, force_terminal=False)
        console.print(f"Generated: {datetime.now():%Y-%m-%d %H:%M:%S}")
        print_report(console, results, source=source)
    return path
