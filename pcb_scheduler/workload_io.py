from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, List, Union

BURST_KEYS = ("burst", "burst_time")


def load_bursts(path: Union[str, Path]) -> List[int]:
    """
    Load burst lengths from a JSON or CSV workload file, in file order.

    JSON holds a list of integers or of objects with a ``burst`` (or
    ``burst_time``) key. CSV needs a ``burst`` (or ``burst_time``) column.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[int]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of bursts or process objects")

    return [_burst_from_entry(entry) for entry in raw]


def _load_csv(path: Path) -> List[int]:
    bursts: List[int] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        try:
            for row in reader:
                bursts.append(_burst_from_entry(row))
        except csv.Error as exc:
            raise ValueError(f"Malformed CSV workload {path} (line {reader.line_num}): {exc}") from exc
    return bursts


def _burst_from_entry(entry: Any) -> int:
    value = entry
    if isinstance(entry, dict):
        key = next((k for k in BURST_KEYS if k in entry), None)
        if key is None:
            raise ValueError(f"Invalid process entry: {entry!r}")
        value = entry[key]

    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"Invalid burst value: {value!r}")
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid burst value: {value!r}") from exc
