"""Built-in causal template and the fixed lookup tables keyed on its ids."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from .model import CausalGraph, Edge, Variable

VALUE_RANGE: Tuple[float, float] = (0.0, 10.0)
STATE_RANGE: Tuple[float, float] = (1.0, 10.0)
NEUTRAL_VALUE = 5.0

FACTORS: Tuple[str, ...] = ("vitality", "cognition", "emotion", "adaptability", "meaning")

DEFAULT_GRAPH = CausalGraph(
    variables=(
        Variable("Isolation", 6.0, 5.0),
        Variable("Belonging", 4.0, 5.0),
        Variable("HPA", 6.0, 5.0),
        Variable("Inflammation", 5.5, 5.0),
        Variable("Neurodegeneration", 5.2, 5.0),
        Variable("Withdrawal", 5.8, 5.0),
        Variable("VagalTone", 4.8, 5.0),
        Variable("Meaning", 4.5, 5.0),
    ),
    edges=(
        Edge("Isolation", "HPA", 0.65),
        Edge("HPA", "Inflammation", 0.7),
        Edge("Inflammation", "Neurodegeneration", 0.55),
        Edge("Neurodegeneration", "Withdrawal", 0.42),
        Edge("Withdrawal", "Isolation", 0.58),
        Edge("Belonging", "Isolation", -0.62),
        Edge("Belonging", "VagalTone", 0.57),
        Edge("VagalTone", "HPA", -0.68),
        Edge("Meaning", "Belonging", 0.6),
        Edge("Meaning", "Isolation", -0.45),
        Edge("Isolation", "Meaning", 0.35),
        Edge("VagalTone", "Meaning", 0.38),
    ),
)

# Which input factors seed the starting value of each template variable.
VARIABLE_FACTORS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Isolation": ("emotion", "meaning"),
    "Belonging": ("emotion", "meaning"),
    "HPA": ("vitality", "adaptability"),
    "Inflammation": ("vitality", "adaptability"),
    "Neurodegeneration": ("cognition", "vitality"),
    "Withdrawal": ("emotion", "adaptability"),
    "VagalTone": ("vitality", "adaptability", "emotion"),
    "Meaning": ("meaning", "cognition"),
})

# factor -> (variables that raise it, variables that lower it)
FACTOR_PROJECTION: Mapping[str, Tuple[Tuple[str, ...], Tuple[str, ...]]] = MappingProxyType({
    "vitality": (
        ("Belonging", "VagalTone"),
        ("Isolation", "HPA", "Inflammation", "Neurodegeneration"),
    ),
    "cognition": (
        ("Meaning", "Belonging"),
        ("Isolation", "Neurodegeneration", "Withdrawal"),
    ),
    "emotion": (
        ("Belonging", "Meaning", "VagalTone"),
        ("Isolation", "Withdrawal", "HPA"),
    ),
    "adaptability": (
        ("VagalTone", "Meaning", "Belonging"),
        ("HPA", "Inflammation", "Isolation"),
    ),
    "meaning": (
        ("Meaning", "Belonging"),
        ("Isolation", "Withdrawal"),
    ),
})

THREAT_VARIABLES: Tuple[str, ...] = ("HPA", "Inflammation", "Isolation")
FLOW_VARIABLES: Tuple[str, ...] = ("Belonging", "VagalTone", "Meaning")
