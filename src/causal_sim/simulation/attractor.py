from __future__ import annotations

from typing import Any, Mapping

from ..graph.template import FLOW_VARIABLES, THREAT_VARIABLES
from ..numeric import to_number

THREAT_SURVIVAL = "Threat-Survival"
EUDAEMONIC_FLOW = "Eudaemonic-Flow"
MIXED_TRANSITION = "Mixed/Transition"

# Margin one side's total must exceed the other's by.
ATTRACTOR_MARGIN = 1.0


def classify_attractor(values: Mapping[str, Any]) -> str:
    """Label the basin the final snapshot sits in: stress axis against belonging axis."""
    threat = sum(to_number(values.get(var_id), 0.0) for var_id in THREAT_VARIABLES)
    flow = sum(to_number(values.get(var_id), 0.0) for var_id in FLOW_VARIABLES)
    if threat - flow > ATTRACTOR_MARGIN:
        return THREAT_SURVIVAL
    if flow - threat > ATTRACTOR_MARGIN:
        return EUDAEMONIC_FLOW
    return MIXED_TRANSITION
