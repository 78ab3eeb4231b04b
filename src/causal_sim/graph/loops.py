from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import networkx as nx

from ..numeric import clamp, mean, round_half_up
from ..types import CycleRecord
from .model import Edge

logger = logging.getLogger(__name__)

REINFORCING = "Reinforcing"
BALANCING = "Balancing"


def build_weighted_multidigraph(edges: Iterable[Edge]) -> nx.MultiDiGraph:
    """Adjacency for loop search; parallel edges are kept so each is walked."""
    G = nx.MultiDiGraph()
    for edge in edges:
        G.add_edge(edge.source, edge.target, weight=edge.weight)
    return G


def canonical_cycle(nodes: Sequence[str]) -> Tuple[str, ...]:
    """Lexicographically smallest rotation, so one loop has one key wherever it was entered."""
    if not nodes:
        return tuple()
    return min(tuple(nodes[i:]) + tuple(nodes[:i]) for i in range(len(nodes)))


def _describe_cycle(nodes: Sequence[str]) -> str:
    return " → ".join(list(nodes) + [nodes[0]])


def _sign(weight: float) -> int:
    if weight > 0:
        return 1
    if weight < 0:
        return -1
    return 0


class _PathStack:
    """The active DFS path and the weights of the edges joining it, moved together."""

    def __init__(self, root: str) -> None:
        self.nodes: List[str] = [root]
        self.weights: List[float] = []
        self._positions: Dict[str, int] = {root: 0}

    def position(self, node: str) -> Optional[int]:
        return self._positions.get(node)

    def advance(self, weight: float, node: str) -> None:
        self._positions[node] = len(self.nodes)
        self.nodes.append(node)
        self.weights.append(weight)

    def retreat(self) -> None:
        del self._positions[self.nodes.pop()]
        if self.weights:
            self.weights.pop()

    def close(self, position: int, weight: float) -> Tuple[List[str], List[float]]:
        """Segment from `position` to the top of the path, closed by an edge of `weight`."""
        return self.nodes[position:], self.weights[position:] + [weight]


def _walk_from(G: nx.MultiDiGraph, root: str, emit: Callable[[List[str], List[float]], None]) -> None:
    path = _PathStack(root)
    frames = [iter(G.out_edges(root, data="weight"))]
    while frames:
        step = next(frames[-1], None)
        if step is None:
            frames.pop()
            path.retreat()
            continue
        _, target, weight = step
        position = path.position(target)
        if position is not None:
            emit(*path.close(position, weight))
        else:
            path.advance(weight, target)
            frames.append(iter(G.out_edges(target, data="weight")))


def _classify(nodes: List[str], weights: List[float], max_abs: float) -> CycleRecord:
    polarity = 1
    for weight in weights:
        polarity *= _sign(weight)
    strength = mean(abs(w) for w in weights) / max_abs
    return CycleRecord(
        type=REINFORCING if polarity > 0 else BALANCING,
        dominance=round_half_up(clamp(strength * 100.0, 0.0, 100.0)),
        nodes=list(nodes),
        chain=_describe_cycle(nodes),
        weights=list(weights),
    )


def detect_cycles(edges: Sequence[Edge]) -> List[CycleRecord]:
    """Enumerate elementary feedback loops over `edges` in discovery order.

    Every endpoint takes part, whether or not it is a declared variable. Each
    distinct loop is reported once, with `dominance` scaled against the
    largest |weight| anywhere in the graph, so scores only compare within one
    graph.

    Out-edges are walked grouped by neighbour, in the order each neighbour is
    first seen, with parallel edges to the same neighbour kept in edge-list
    order. A later parallel edge only revisits node sequences its first
    sibling already recorded, so the reported loops and their order match an
    edge-list walk; the weights come from the first parallel edge listed.
    """
    if not edges:
        return []
    G = build_weighted_multidigraph(edges)
    max_abs = max(abs(e.weight) for e in edges) or 1.0
    found: Dict[Tuple[str, ...], CycleRecord] = {}

    def record(nodes: List[str], weights: List[float]) -> None:
        key = canonical_cycle(nodes)
        if key not in found:
            found[key] = _classify(nodes, weights, max_abs)

    for node in list(G.nodes):
        _walk_from(G, node, record)

    loops = list(found.values())
    logger.debug(
        "Detected %d loops (%d reinforcing)",
        len(loops),
        sum(1 for loop in loops if loop.type == REINFORCING),
    )
    return loops
