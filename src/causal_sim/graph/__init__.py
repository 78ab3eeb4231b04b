"""Causal graph model, input normalization and feedback loop detection."""

from .loops import detect_cycles
from .model import CausalGraph, Edge, Variable
from .normalize import normalize_graph

__all__ = ["CausalGraph", "Edge", "Variable", "detect_cycles", "normalize_graph"]
