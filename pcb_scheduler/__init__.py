"""
PCB scheduler package.

Simulates First-Come First-Serve and Round-Robin CPU scheduling over a fixed
process table and reports the wait time each process accumulates.
"""

from .algorithms import fcfs_run, rr_next, rr_run, run_algorithm, run_proc, schedule
from .models import (
    PCB,
    Algorithm,
    AllocationFailure,
    InvalidInput,
    InvalidRun,
    ProcessTable,
    ScheduleResult,
    ScheduledSlice,
)
from .table import construct_table

__all__ = [
    "PCB",
    "Algorithm",
    "AllocationFailure",
    "InvalidInput",
    "InvalidRun",
    "ProcessTable",
    "ScheduleResult",
    "ScheduledSlice",
    "construct_table",
    "fcfs_run",
    "rr_next",
    "rr_run",
    "run_algorithm",
    "run_proc",
    "schedule",
]
