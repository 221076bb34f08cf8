from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Union

from .models import Algorithm, InvalidRun, ProcessTable, ScheduleResult, ScheduledSlice
from .table import construct_table

logger = logging.getLogger(__name__)

SliceObserver = Callable[[ScheduledSlice, ProcessTable], None]


def run_proc(table: ProcessTable, index: int, amount: int, *, strict: bool = False) -> int:
    """
    Run process ``index`` for up to ``amount`` time units.

    The process's remaining burst drops by ``min(amount, remaining)`` and every
    other process that still has work waits that long. Returns the time
    actually run, 0 when nothing happened.

    An out-of-range index or a non-positive amount is ignored unless
    ``strict`` is set, in which case ``InvalidRun`` is raised.
    """
    if not 0 <= index < len(table):
        if strict:
            raise InvalidRun(f"No process at index {index} (table has {len(table)})")
        logger.debug("Ignoring run of P%d: index out of range", index)
        return 0
    if amount <= 0:
        if strict:
            raise InvalidRun(f"Run amount must be positive, got {amount}")
        logger.debug("Ignoring run of P%d: non-positive amount %d", index, amount)
        return 0

    current = table[index]
    if current.burst_remaining <= 0:
        return 0

    run_time = min(amount, current.burst_remaining)
    current.burst_remaining -= run_time

    for p in table:
        if p.index != index and p.burst_remaining > 0:
            p.wait_accumulated += run_time

    return run_time


def fcfs_run(table: ProcessTable, on_slice: Optional[SliceObserver] = None) -> int:
    """
    First-Come First-Serve: run each process to completion in index order.

    Returns the total elapsed time.
    """
    elapsed = 0

    for p in table:
        if p.burst_remaining <= 0:
            continue

        start_time = elapsed
        elapsed += run_proc(table, p.index, p.burst_remaining)
        logger.debug("FCFS ran P%d from %d to %d", p.index, start_time, elapsed)

        if on_slice is not None:
            on_slice(ScheduledSlice(index=p.index, start_time=start_time, end_time=elapsed), table)

    return elapsed


def rr_next(table: ProcessTable, current: int) -> Optional[int]:
    """
    Pick the process that follows ``current`` in round-robin order.

    Scans circularly from ``current + 1`` and returns the first index with
    remaining burst, which may be ``current`` itself when it is the only one
    left. Returns None once every process has finished.
    """
    plen = len(table)
    if plen == 0 or not table.has_work():
        return None

    start = (current + 1) % plen
    for offset in range(plen):
        idx = (start + offset) % plen
        if table[idx].burst_remaining > 0:
            return idx

    return None


def rr_run(table: ProcessTable, quantum: int, on_slice: Optional[SliceObserver] = None) -> int:
    """
    Round Robin scheduling with a fixed time quantum.

    Starts at the lowest index with work and returns the total elapsed time.
    Nothing runs (and 0 is returned) for a non-positive quantum, an empty
    table, or a table with no remaining work.
    """
    if quantum <= 0 or len(table) == 0:
        logger.debug("Round robin skipped: quantum=%d, processes=%d", quantum, len(table))
        return 0

    current = next((p.index for p in table if p.burst_remaining > 0), None)
    if current is None:
        return 0

    elapsed = 0
    while True:
        remaining = table[current].burst_remaining
        if remaining > 0:
            start_time = elapsed
            elapsed += run_proc(table, current, min(quantum, remaining))
            logger.debug("RR ran P%d from %d to %d", current, start_time, elapsed)

            if on_slice is not None:
                on_slice(ScheduledSlice(index=current, start_time=start_time, end_time=elapsed), table)

        nxt = rr_next(table, current)
        if nxt is None:
            break
        current = nxt

    return elapsed


def _resolve_algorithm(name: Union[str, Algorithm]) -> Algorithm:
    if isinstance(name, Algorithm):
        return name
    try:
        return Algorithm(name.lower())
    except ValueError:
        raise ValueError(f"Unknown or unimplemented algorithm '{name}'") from None


def schedule(
    name: Union[str, Algorithm],
    table: ProcessTable,
    quantum: Optional[int] = None,
    on_slice: Optional[SliceObserver] = None,
) -> ScheduleResult:
    """
    Run the requested algorithm over an existing table, mutating it in place.

    Every executed slice is recorded on the result's timeline and also passed
    to ``on_slice`` when given. Quantum is only used by round-robin.
    """
    algorithm = _resolve_algorithm(name)
    if algorithm is Algorithm.RR and quantum is None:
        raise ValueError("Round Robin requires a quantum")

    timeline: List[ScheduledSlice] = []

    def record(slice_: ScheduledSlice, tbl: ProcessTable) -> None:
        timeline.append(slice_)
        if on_slice is not None:
            on_slice(slice_, tbl)

    if algorithm is Algorithm.FCFS:
        elapsed = fcfs_run(table, on_slice=record)
        quantum = None
    else:
        elapsed = rr_run(table, quantum, on_slice=record)

    logger.debug("%s finished after %d time units", algorithm.label, elapsed)
    return ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        elapsed=elapsed,
        table=table,
        timeline=timeline,
    )


def run_algorithm(
    name: Union[str, Algorithm],
    bursts: Sequence[int],
    quantum: Optional[int] = None,
    on_slice: Optional[SliceObserver] = None,
) -> ScheduleResult:
    """
    Build a table from ``bursts`` and schedule it with the requested algorithm.
    """
    return schedule(name, construct_table(bursts), quantum=quantum, on_slice=on_slice)
