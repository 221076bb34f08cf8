from __future__ import annotations

from typing import Iterable

from .models import PCB


def average_wait(processes: Iterable[PCB]) -> float:
    """
    Mean accumulated wait across all records, 0.0 when there are none.
    """
    waits = [p.wait_accumulated for p in processes]
    if not waits:
        return 0.0
    return sum(waits) / len(waits)


def turnaround(process: PCB) -> int:
    # Every process is ready at t=0, so completion time is wait plus burst.
    return process.wait_accumulated + process.burst


def summarize(processes: Iterable[PCB]) -> dict:
    """
    Return aggregates of the per-process metrics for quick comparison.
    """
    processes = list(processes)
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "max_waiting": 0, "total_waiting": 0}

    n = len(processes)
    total_waiting = sum(p.wait_accumulated for p in processes)
    return {
        "avg_waiting": total_waiting / n,
        "avg_turnaround": sum(turnaround(p) for p in processes) / n,
        "max_waiting": max(p.wait_accumulated for p in processes),
        "total_waiting": total_waiting,
    }
