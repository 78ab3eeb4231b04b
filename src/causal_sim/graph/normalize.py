"""Normalize loosely shaped causal graph descriptions into a `CausalGraph`.

Upstream producers (hand-written JSON, LLM output, the HTTP body) disagree on
shape: variables arrive as lists of objects or strings, or as id-keyed
mappings; edges arrive as lists of records, adjacency mappings or keyed edge
records. Each shape has a detector paired with a reader, tried in order, so
nothing downstream ever branches on the input shape.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..numeric import clamp, to_number
from .model import CausalGraph, Edge, Variable
from .template import DEFAULT_GRAPH, NEUTRAL_VALUE, VALUE_RANGE

logger = logging.getLogger(__name__)

VARIABLE_KEYS = ("variables", "nodes", "stocks", "vertices")
EDGE_KEYS = ("edges", "links", "connections")

ID_FIELDS = ("id", "name")
INITIAL_FIELDS = ("initial", "value", "start")
BASELINE_FIELDS = ("baseline", "setPoint")
SOURCE_FIELDS = ("from", "source")
TARGET_FIELDS = ("to", "target")
WEIGHT_FIELDS = ("weight", "strength", "value")

# Weight given to a bare string target in an adjacency mapping.
ADJACENCY_DEFAULT_WEIGHT = 0.5

Detector = Tuple[Callable[[Any], bool], Callable[[Any], Iterable]]


def _first_present(item: Mapping, fields: Sequence[str]) -> Any:
    for field in fields:
        value = item.get(field)
        if value is not None:
            return value
    return None


def _as_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (Mapping, list)):
        return None
    text = str(value).strip()
    return text or None


def _make_variable(var_id: str, initial: Any, baseline: Any = None) -> Variable:
    low, high = VALUE_RANGE
    value = to_number(initial, NEUTRAL_VALUE)
    base = to_number(baseline, NEUTRAL_VALUE) if baseline is not None else value
    return Variable(var_id, clamp(value, low, high), clamp(base, low, high))


def _variable_from_record(var_id: str, item: Mapping) -> Variable:
    return _make_variable(
        var_id,
        _first_present(item, INITIAL_FIELDS),
        _first_present(item, BASELINE_FIELDS),
    )


def _variables_from_list(raw: List) -> Iterable[Variable]:
    for item in raw:
        if isinstance(item, str):
            var_id = _as_id(item)
            if var_id:
                yield Variable(var_id, NEUTRAL_VALUE, NEUTRAL_VALUE)
        elif isinstance(item, Mapping):
            var_id = _as_id(_first_present(item, ID_FIELDS))
            if var_id:
                yield _variable_from_record(var_id, item)


def _variables_from_mapping(raw: Mapping) -> Iterable[Variable]:
    for key, item in raw.items():
        var_id = _as_id(key)
        if not var_id:
            continue
        if isinstance(item, Mapping):
            yield _variable_from_record(var_id, item)
        else:
            yield _make_variable(var_id, item)


def _edge_from_record(record: Mapping, default_source: Any = None) -> Optional[Edge]:
    source = _as_id(_first_present(record, SOURCE_FIELDS)) or _as_id(default_source)
    target = _as_id(_first_present(record, TARGET_FIELDS))
    if not source or not target:
        return None
    return Edge(source, target, to_number(_first_present(record, WEIGHT_FIELDS), 0.0))


def _edges_from_list(raw: List) -> Iterable[Edge]:
    for record in raw:
        if isinstance(record, Mapping):
            edge = _edge_from_record(record)
            if edge is not None:
                yield edge


def _edges_from_targets(source: str, targets: List) -> Iterable[Edge]:
    for target in targets:
        if isinstance(target, Mapping):
            to = _as_id(_first_present(target, TARGET_FIELDS))
            weight = to_number(_first_present(target, WEIGHT_FIELDS), 0.0)
        else:
            to = _as_id(target)
            weight = ADJACENCY_DEFAULT_WEIGHT
        if to:
            yield Edge(source, to, weight)


def _edges_from_mapping(raw: Mapping) -> Iterable[Edge]:
    # Each entry is either `source -> [targets]` or `key -> edge record`.
    for key, value in raw.items():
        if isinstance(value, list):
            source = _as_id(key)
            if source:
                yield from _edges_from_targets(source, value)
        elif isinstance(value, Mapping):
            edge = _edge_from_record(value, default_source=key)
            if edge is not None:
                yield edge


VARIABLE_READERS: Tuple[Detector, ...] = (
    (lambda raw: isinstance(raw, list), _variables_from_list),
    (lambda raw: isinstance(raw, Mapping), _variables_from_mapping),
)

EDGE_READERS: Tuple[Detector, ...] = (
    (lambda raw: isinstance(raw, list), _edges_from_list),
    (lambda raw: isinstance(raw, Mapping), _edges_from_mapping),
)


def _read(raw: Any, readers: Tuple[Detector, ...]) -> List:
    for matches, reader in readers:
        if matches(raw):
            return list(reader(raw))
    return []


def _collection(description: Mapping, keys: Sequence[str]) -> Any:
    """First non-empty value under `keys`; `[]` if a key is present but empty, None if none is present."""
    present = False
    for key in keys:
        if key in description:
            present = True
            value = description[key]
            if value:
                return value
    return [] if present else None


def normalize_variables(description: Any) -> List[Variable]:
    """Extract unique variables; a later duplicate id replaces the earlier one in place."""
    if not isinstance(description, Mapping):
        return []
    raw = _collection(description, VARIABLE_KEYS)
    if raw is None:
        # No wrapper key at all: a bare id -> item mapping.
        raw = {k: v for k, v in description.items() if k not in EDGE_KEYS}
    unique: Dict[str, Variable] = {}
    for variable in _read(raw, VARIABLE_READERS):
        unique[variable.id] = variable
    return list(unique.values())


def normalize_edges(description: Any) -> List[Edge]:
    if not isinstance(description, Mapping):
        return []
    return _read(_collection(description, EDGE_KEYS), EDGE_READERS)


def normalize_graph(description: Any, template: CausalGraph = DEFAULT_GRAPH) -> CausalGraph:
    """Build the canonical graph, substituting `template` when either half comes out empty."""
    variables = normalize_variables(description)
    edges = normalize_edges(description)
    if not variables or not edges:
        logger.debug(
            "Graph description yielded %d variables and %d edges; using built-in template",
            len(variables),
            len(edges),
        )
        return template
    logger.debug("Normalized graph with %d variables and %d edges", len(variables), len(edges))
    return CausalGraph(variables=tuple(variables), edges=tuple(edges))
