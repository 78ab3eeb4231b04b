"""CSV exports of simulation output."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Sequence

from .types import CycleRecord, Snapshot


def write_time_series_csv(time_series: Sequence[Snapshot], output_path: Path) -> int:
    """Write one row per step: `step` followed by one column per variable.

    Returns:
        Number of rows written
    """
    fieldnames: List[str] = ["step"]
    for snapshot in time_series:
        for var_id in snapshot.values:
            if var_id not in fieldnames:
                fieldnames.append(var_id)

    rows = []
    for snapshot in time_series:
        row = {"step": snapshot.step}
        row.update(snapshot.values)
        rows.append(row)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)


def write_loops_csv(loops: Sequence[CycleRecord], output_path: Path) -> int:
    """Write one row per detected loop.

    Returns:
        Number of rows written
    """
    fieldnames = ["loop_id", "type", "dominance", "length", "chain", "weights"]

    rows = []
    for idx, loop in enumerate(loops, start=1):
        rows.append({
            "loop_id": f"L{idx:02d}",
            "type": loop.type,
            "dominance": loop.dominance,
            "length": len(loop.nodes),
            "chain": loop.chain,
            "weights": "; ".join(f"{w:g}" for w in loop.weights),
        })

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)

    return len(rows)
