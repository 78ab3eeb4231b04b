from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from .graph.loops import detect_cycles
from .graph.normalize import normalize_graph
from .simulation.anchor import apply_initial_state
from .simulation.integrator import integrate
from .simulation.projection import project_state
from .types import SimulationOptions, SimulationResult

logger = logging.getLogger(__name__)


def run_causal_simulation(
    graph_description: Any,
    options: Union[SimulationOptions, Mapping[str, Any]],
) -> SimulationResult:
    """Simulate a causal graph description and summarize the outcome.

    The graph is normalized (falling back to the built-in template), anchored
    to `options.initial_state`, integrated for `options.steps` steps and
    reduced to a five-factor state. Loops are detected on the normalized edge
    set independently of integration.

    Raises pydantic.ValidationError only when `options` itself is invalid;
    any graph description is accepted.
    """
    opts = options if isinstance(options, SimulationOptions) else SimulationOptions.model_validate(options)

    graph = apply_initial_state(normalize_graph(graph_description), opts.initial_state)
    time_series = integrate(graph.variables, graph.edges, opts.steps, opts.dt, opts.damping)
    loops = detect_cycles(graph.edges)
    new_state = project_state(time_series[-1].values)

    logger.debug(
        "Simulated %d variables over %d steps; %d loops detected",
        len(graph.variables),
        opts.steps,
        len(loops),
    )
    return SimulationResult(loops_detected=loops, time_series=time_series, new_state=new_state)
