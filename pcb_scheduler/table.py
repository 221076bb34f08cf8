from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import PCB, AllocationFailure, InvalidInput, ProcessTable

logger = logging.getLogger(__name__)


def construct_table(bursts: Optional[Sequence[int]]) -> ProcessTable:
    """
    Build a process table from burst lengths.

    Record ``i`` gets ``index=i``, ``burst_remaining=bursts[i]`` and a zero
    wait. Raises ``InvalidInput`` for an absent or empty sequence or for any
    burst that is not a non-negative integer.
    """
    if bursts is None or len(bursts) == 0:
        raise InvalidInput("At least one burst is required")

    for i, burst in enumerate(bursts):
        if isinstance(burst, bool) or not isinstance(burst, int):
            raise InvalidInput(f"Burst for P{i} must be an integer, got {burst!r}")
        if burst < 0:
            raise InvalidInput(f"Burst for P{i} must be non-negative, got {burst}")

    try:
        records: List[PCB] = [
            PCB(index=i, burst=burst, burst_remaining=burst) for i, burst in enumerate(bursts)
        ]
        table = ProcessTable(records)
    except MemoryError as exc:
        raise AllocationFailure(f"Could not allocate a table for {len(bursts)} processes") from exc

    logger.debug("Constructed table with %d processes", len(table))
    return table


def format_table(table: ProcessTable) -> str:
    """
    Render every record as ``P<i>: burst_left=<r> wait=<w>``, one per line.
    """
    return "\n".join(
        f"P{p.index}: burst_left={p.burst_remaining} wait={p.wait_accumulated}" for p in table
    )
