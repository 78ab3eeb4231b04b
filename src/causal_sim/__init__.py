"""causal_sim package root.

A small causal-loop simulation engine: it normalizes loosely shaped causal
graph descriptions, detects reinforcing and balancing feedback loops, runs a
damped linear simulation over the variables and reduces the final snapshot to
a five-factor state. A Flask endpoint and a CLI wrap the core.
"""

from .engine import run_causal_simulation
from .types import CycleRecord, FiveFactorState, SimulationOptions, SimulationResult, Snapshot

__all__ = [
    "run_causal_simulation",
    "CycleRecord",
    "FiveFactorState",
    "SimulationOptions",
    "SimulationResult",
    "Snapshot",
]
