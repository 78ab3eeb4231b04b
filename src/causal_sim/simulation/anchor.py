from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence, Tuple

from ..graph.model import CausalGraph, Variable
from ..graph.template import VALUE_RANGE, VARIABLE_FACTORS
from ..numeric import clamp, mean, to_number


def anchor_level(state: Mapping[str, Any], factors: Sequence[str]) -> Optional[float]:
    """Mean of the finite factor values in `state`, or None when there are none."""
    levels = [to_number(state.get(factor), math.nan) for factor in factors]
    finite = [level for level in levels if math.isfinite(level)]
    if not finite:
        return None
    return clamp(mean(finite), *VALUE_RANGE)


def apply_initial_state(
    graph: CausalGraph,
    initial_state: Optional[Mapping[str, Any]],
    table: Mapping[str, Tuple[str, ...]] = VARIABLE_FACTORS,
) -> CausalGraph:
    """Pin the start value and baseline of associated variables to the input state.

    Damping then pulls those variables toward the level the caller's state
    implies instead of the graph's own baseline.
    """
    if not isinstance(initial_state, Mapping):
        return graph

    anchored = []
    for variable in graph.variables:
        factors = table.get(variable.id)
        level = anchor_level(initial_state, factors) if factors else None
        anchored.append(variable if level is None else variable.anchored(level))
    return CausalGraph(variables=tuple(anchored), edges=graph.edges)
