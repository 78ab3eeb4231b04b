"""Anchoring, integration and read-out of the damped linear system."""

from .anchor import apply_initial_state
from .attractor import classify_attractor
from .integrator import integrate
from .projection import project_state

__all__ = ["apply_initial_state", "classify_attractor", "integrate", "project_state"]
