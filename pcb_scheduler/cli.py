from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import run_algorithm, schedule
from .gantt import build_rich_gantt
from .metrics import summarize, turnaround
from .models import Algorithm, InvalidInput, ProcessTable, ScheduleResult, ScheduledSlice
from .table import construct_table, format_table
from .workload_io import load_bursts

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Bad or missing command-line arguments."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "bursts",
        nargs="*",
        type=int,
        metavar="BURST",
        help="CPU burst length of each process, in arrival order.",
    )
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="JSON or CSV file with more bursts (appended after BURST arguments).",
    )
    parser.add_argument(
        "--gantt",
        action="store_true",
        help="Show a Gantt chart of the executed slices.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print every process's remaining burst and wait after each slice.",
    )
    parser.add_argument(
        "--details",
        action="store_true",
        help="Show a per-process metrics table.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="pcb-scheduler",
        description="CPU scheduling simulator (FCFS, Round Robin) reporting average wait time.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduler decisions to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, parser_class=_Parser)

    fcfs_parser = subparsers.add_parser("fcfs", help="Run First-Come First-Serve.")
    _add_run_options(fcfs_parser)

    rr_parser = subparsers.add_parser("rr", help="Run Round Robin with a fixed quantum.")
    rr_parser.add_argument("quantum", type=int, help="Time slice granted per turn.")
    _add_run_options(rr_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run FCFS and Round Robin on the same bursts and compare average metrics.",
    )
    compare_parser.add_argument("quantum", type=int, help="Time slice used for Round Robin.")
    compare_parser.add_argument(
        "bursts",
        nargs="*",
        type=int,
        metavar="BURST",
        help="CPU burst length of each process, in arrival order.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="JSON or CSV file with more bursts (appended after BURST arguments).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    """
    Send the package's log records to stderr through rich.

    Repeated calls replace the handler rather than stacking a new one.
    """
    package_logger = logging.getLogger("pcb_scheduler")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _collect_bursts(args: argparse.Namespace) -> List[int]:
    bursts = list(args.bursts)
    if args.workload:
        bursts.extend(load_bursts(args.workload))
    if not bursts:
        raise UsageError("Missing arguments")
    return bursts


def _heading(algorithm: Algorithm, quantum: Optional[int]) -> str:
    if algorithm is Algorithm.FCFS:
        return "Using FCFS"
    return f"Using RR({quantum})."


def _print_details(result: ScheduleResult, console: Console) -> None:
    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for header in ("PID", "Burst", "Remaining", "Wait", "Turnaround"):
        proc_table.add_column(header, justify="center" if header == "PID" else "right")

    for p in result.table:
        proc_table.add_row(
            f"P{p.index}",
            str(p.burst),
            str(p.burst_remaining),
            str(p.wait_accumulated),
            str(turnaround(p)),
        )

    summary = summarize(result.table)
    console.print(proc_table)
    console.print(f"Elapsed time: {result.elapsed}", highlight=False)
    console.print(f"Average turnaround time: {summary['avg_turnaround']:.2f}", highlight=False)


def _run_single(args: argparse.Namespace, console: Console) -> int:
    table = construct_table(_collect_bursts(args))
    algorithm = Algorithm(args.command)
    quantum = getattr(args, "quantum", None)

    console.print(_heading(algorithm, quantum), highlight=False)
    console.print()
    for p in table:
        console.print(f"Accepted P{p.index}: Burst {p.burst}", highlight=False)

    def trace(slice_: ScheduledSlice, tbl: ProcessTable) -> None:
        console.print(
            f"t={slice_.start_time}..{slice_.end_time}: {slice_.pid} ran {slice_.duration}",
            highlight=False,
        )
        console.print(format_table(tbl), highlight=False, markup=False, soft_wrap=True)

    result = schedule(
        algorithm,
        table,
        quantum=quantum,
        on_slice=trace if args.trace else None,
    )

    summary = summarize(result.table)
    console.print(f"Average wait time: {summary['avg_waiting']:.2f}", highlight=False)

    if args.details:
        console.print()
        _print_details(result, console)

    if args.gantt:
        console.print()
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks, highlight=False)

    return 0


def _run_compare(args: argparse.Namespace, console: Console) -> int:
    bursts = _collect_bursts(args)

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Elapsed", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Max waiting", justify="right")

    for algorithm in Algorithm:
        result = run_algorithm(algorithm, bursts, quantum=args.quantum)
        summary = summarize(result.table)
        summary_table.add_row(
            result.algorithm.label,
            "" if result.quantum is None else str(result.quantum),
            str(result.elapsed),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            str(summary["max_waiting"]),
        )

    console.print(summary_table)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    console = Console()
    err_console = Console(stderr=True)

    try:
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        logger.debug("Parsed arguments: %s", args)

        if args.command == "compare":
            return _run_compare(args, console)
        return _run_single(args, console)
    except UsageError as exc:
        err_console.print(f"ERROR: {exc}", highlight=False, markup=False, soft_wrap=True)
    except InvalidInput as exc:
        err_console.print(
            f"ERROR: Failed to initialize processes: {exc}",
            highlight=False,
            markup=False,
            soft_wrap=True,
        )
    except (OSError, ValueError) as exc:
        err_console.print(f"ERROR: {exc}", highlight=False, markup=False, soft_wrap=True)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
