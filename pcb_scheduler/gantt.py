from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _ordered(slices: List[ScheduledSlice]) -> List[ScheduledSlice]:
    return sorted((s for s in slices if s.duration > 0), key=lambda s: s.start_time)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: a bar row, a label row and a time-mark row.

    The simulated CPU is never idle, so slices are laid end to end.
    """
    slices = _ordered(slices)
    if not slices:
        return "(no execution)"

    bar = "|"
    labels = " "
    time_marks = "0"

    for sl in slices:
        width = sl.duration
        bar += "=" * (width - 1) + "|"
        labels += sl.pid[:width].ljust(width)
        time_marks = time_marks.ljust(len(bar) - len(str(sl.end_time))) + str(sl.end_time)

    return "\n".join(["Gantt Chart:", bar, labels, time_marks])


def build_rich_gantt(slices: List[ScheduledSlice]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel with a colored Gantt chart and a string of time marks.
    """
    slices = _ordered(slices)
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    index_to_color: Dict[int, str] = {}

    def color_for(index: int) -> str:
        if index not in index_to_color:
            index_to_color[index] = COLORS[len(index_to_color) % len(COLORS)]
        return index_to_color[index]

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for sl in slices:
        width = sl.duration
        timeline.append(" " * width, style=f"on {color_for(sl.index)}")
        labels.append(sl.pid[:width].ljust(width), style="bold")
        time_marks += f"{sl.end_time:>{max(width, len(str(sl.end_time)) + 1)}}"

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), time_marks
