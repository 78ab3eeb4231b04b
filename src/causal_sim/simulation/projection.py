from __future__ import annotations

from typing import Mapping, Sequence, Tuple

from ..graph.template import FACTOR_PROJECTION, NEUTRAL_VALUE, STATE_RANGE
from ..numeric import clamp, mean
from ..types import FiveFactorState

# Compresses extremes toward the midpoint.
PROJECTION_GAIN = 0.6


def _set_mean(values: Mapping[str, float], ids: Sequence[str]) -> float:
    if not ids:
        return NEUTRAL_VALUE
    return mean(values.get(var_id, NEUTRAL_VALUE) for var_id in ids)


def project_factor(values: Mapping[str, float], positive: Sequence[str], negative: Sequence[str]) -> float:
    pos_avg = _set_mean(values, positive)
    neg_avg = _set_mean(values, negative)
    adjusted = (
        NEUTRAL_VALUE
        + PROJECTION_GAIN * (pos_avg - NEUTRAL_VALUE)
        - PROJECTION_GAIN * (neg_avg - NEUTRAL_VALUE)
    )
    return clamp(adjusted, *STATE_RANGE)


def project_state(
    values: Mapping[str, float],
    table: Mapping[str, Tuple[Sequence[str], Sequence[str]]] = FACTOR_PROJECTION,
) -> FiveFactorState:
    """Reduce final variable values to the five-factor state."""
    return FiveFactorState(
        **{factor: project_factor(values, positive, negative) for factor, (positive, negative) in table.items()}
    )
