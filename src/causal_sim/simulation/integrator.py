from __future__ import annotations

from typing import Dict, List, Sequence

from ..graph.model import Edge, Variable
from ..graph.template import VALUE_RANGE
from ..numeric import clamp
from ..types import Snapshot


def step_values(
    values: Dict[str, float],
    baselines: Dict[str, float],
    edges: Sequence[Edge],
    dt: float,
    damping: float,
) -> Dict[str, float]:
    """One synchronous damped-linear step. Reads only `values`; returns a new mapping."""
    influence = {var_id: 0.0 for var_id in values}
    for edge in edges:
        if edge.source in values and edge.target in values:
            influence[edge.target] += values[edge.source] * edge.weight

    low, high = VALUE_RANGE
    return {
        var_id: clamp(
            value + dt * (influence[var_id] - damping * (value - baselines[var_id])),
            low,
            high,
        )
        for var_id, value in values.items()
    }


def integrate(
    variables: Sequence[Variable],
    edges: Sequence[Edge],
    steps: int,
    dt: float,
    damping: float,
) -> List[Snapshot]:
    """Run `steps` Euler steps and return `steps + 1` snapshots, the first being the start state.

    Edges touching an id that is not a declared variable have no effect here.
    """
    low, high = VALUE_RANGE
    values = {v.id: clamp(v.value, low, high) for v in variables}
    baselines = {v.id: clamp(v.baseline, low, high) for v in variables}

    series = [Snapshot(step=0, values=dict(values))]
    for step in range(1, steps + 1):
        values = step_values(values, baselines, edges, dt, damping)
        series.append(Snapshot(step=step, values=dict(values)))
    return series
