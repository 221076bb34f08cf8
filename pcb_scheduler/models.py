from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple


class InvalidInput(ValueError):
    """Burst input that cannot form a process table (absent, empty, negative)."""


class AllocationFailure(MemoryError):
    """The process table could not be allocated."""


class InvalidRun(ValueError):
    """A run request with an out-of-range index or a non-positive amount."""


class Algorithm(str, Enum):
    FCFS = "fcfs"
    RR = "rr"

    @property
    def label(self) -> str:
        return "FCFS" if self is Algorithm.FCFS else "Round Robin"


@dataclass
class PCB:
    index: int
    burst: int
    burst_remaining: int
    wait_accumulated: int = 0

    @property
    def finished(self) -> bool:
        return self.burst_remaining == 0


class ProcessTable:
    """
    Fixed-length, ordered collection of PCBs indexed by creation order.

    Records can be mutated in place but never added or removed.
    """

    def __init__(self, records: Iterable[PCB]):
        self._records: Tuple[PCB, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> PCB:
        return self._records[index]

    def __iter__(self) -> Iterator[PCB]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"ProcessTable({list(self._records)!r})"

    def has_work(self) -> bool:
        return any(p.burst_remaining > 0 for p in self._records)

    def total_remaining(self) -> int:
        return sum(p.burst_remaining for p in self._records)


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    index: int
    start_time: int
    end_time: int

    @property
    def pid(self) -> str:
        return f"P{self.index}"

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ScheduleResult:
    algorithm: Algorithm
    quantum: Optional[int]
    elapsed: int
    table: ProcessTable
    timeline: List[ScheduledSlice] = field(default_factory=list)
