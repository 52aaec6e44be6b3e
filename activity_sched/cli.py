from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import ALGORITHMS, build_algorithm, build_all
from .harness import DEFAULT_TRIALS, average_runs
from .models import Activity, SimulationResult
from .report import build_result_table, print_report, write_report
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="activity-sched",
        description="Activity scheduling simulator (FIFO, LIFO, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=ALGORITHMS,
        help="Algorithm to use (fifo, lifo, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a CSV/TXT (name,ti,t) or JSON workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=positive_int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for Round Robin (default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--trials",
        "-n",
        type=positive_int,
        default=DEFAULT_TRIALS,
        help=f"Number of repeated runs to average (default: {DEFAULT_TRIALS}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run FIFO, LIFO and Round Robin on the same workload and pick the best.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a CSV/TXT (name,ti,t) or JSON workload file.",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=positive_int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for Round Robin (default: {DEFAULT_QUANTUM}).",
    )
    compare_parser.add_argument(
        "--trials",
        "-n",
        type=positive_int,
        default=DEFAULT_TRIALS,
        help=f"Number of repeated runs to average (default: {DEFAULT_TRIALS}).",
    )
    compare_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Also write the report to this file.",
    )

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactive prompts for workload, quantum and report file.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default="activities.csv",
        help="Default workload path to prefill in the menu (default: activities.csv).",
    )
    menu_parser.add_argument(
        "--quantum",
        "-q",
        type=positive_int,
        default=DEFAULT_QUANTUM,
        help=f"Default quantum to prefill (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def run_comparison(activities: List[Activity], quantum: int, trials: int) -> List[SimulationResult]:
    """
    Average every algorithm over ``trials`` runs, in evaluation order.
    """
    return [average_runs(alg, activities, trials) for alg in build_all(quantum)]


def _compare(
    console: Console,
    workload_path: Path,
    quantum: int,
    trials: int,
    output: Optional[str],
) -> None:
    activities = load_workload(workload_path)
    results = run_comparison(activities, quantum, trials)
    print_report(console, results, source=str(workload_path))

    if output:
        report_path = write_report(output, results, source=str(workload_path))
        console.print(f"[dim]Report written to {escape(str(report_path))}[/dim]")


def _prompt_int(console: Console, label: str, default: int) -> int:
    while True:
        raw = input(f"{label} [{default}]: ").strip()
        if not raw:
            return default
        try:
            return positive_int(raw)
        except argparse.ArgumentTypeError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")


def _interactive_menu(default_workload: str, default_quantum: int) -> None:
    console = Console()
    workload = default_workload
    quantum = default_quantum
    trials = DEFAULT_TRIALS

    while True:
        console.print("\n[bold cyan]Activity Scheduler Menu[/bold cyan] [dim](q to quit)[/dim]")

        path_in = input(f"Workload file [{workload}]: ").strip()
        if path_in.lower() in {"q", "quit", "exit"}:
            return
        if path_in:
            workload = path_in

        wl_path = Path(workload)
        if not wl_path.exists():
            console.print(f"[red]Workload not found: {escape(workload)}[/red]")
            continue

        quantum = _prompt_int(console, "Quantum for Round Robin", quantum)
        trials = _prompt_int(console, "Trials per algorithm", trials)
        output = input("Report file (Enter to skip): ").strip() or None

        try:
            _compare(console, wl_path, quantum, trials, output)
        except (OSError, ValueError) as exc:
            console.print(f"[red]Error: {escape(str(exc))}[/red]")
            continue

        again = input("Run another workload? [y/N]: ").strip().lower()
        if again != "y":
            return


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "run":
            activities = load_workload(Path(args.workload))
            algorithm = build_algorithm(args.algorithm, quantum=args.quantum)
            result = average_runs(algorithm, activities, args.trials)
            console.print(build_result_table(result))
            console.print(f"[bold]Mean time per run:[/bold] {result.execution_time * 1e6:.3f} us over {result.trials} trials")
            return 0

        if args.command == "compare":
            _compare(console, Path(args.workload), args.quantum, args.trials, args.output)
            return 0

        if args.command == "menu":
            _interactive_menu(args.workload, args.quantum)
            return 0
    except (OSError, ValueError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
