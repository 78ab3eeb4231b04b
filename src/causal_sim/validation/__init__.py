from .schema import validate_causal_graph, validate_json_schema

__all__ = ["validate_causal_graph", "validate_json_schema"]
