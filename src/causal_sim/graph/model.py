from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Variable:
    """A simulated quantity with its starting value and the set point damping pulls toward."""

    id: str
    value: float
    baseline: float

    def anchored(self, level: float) -> "Variable":
        return replace(self, value=level, baseline=level)


@dataclass(frozen=True)
class Edge:
    """A signed influence `source -> target`. Endpoints need not be declared variables."""

    source: str
    target: str
    weight: float

    def to_dict(self) -> Dict:
        return {"from": self.source, "to": self.target, "weight": self.weight}


@dataclass(frozen=True)
class CausalGraph:
    variables: Tuple[Variable, ...]
    edges: Tuple[Edge, ...]

    @property
    def variable_ids(self) -> List[str]:
        return [v.id for v in self.variables]

    def to_dict(self) -> Dict:
        return {
            "variables": [
                {"id": v.id, "value": v.value, "baseline": v.baseline} for v in self.variables
            ],
            "edges": [e.to_dict() for e in self.edges],
        }
