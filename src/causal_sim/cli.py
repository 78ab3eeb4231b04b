from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List

from .config import load_config
from .export import write_loops_csv, write_time_series_csv
from .graph.loops import detect_cycles
from .graph.normalize import normalize_graph
from .server import build_payload
from .server import run as run_server
from .types import SimulationOptions, Snapshot


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with a clean format for terminal output."""
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Logs go to stderr so stdout stays valid JSON
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []  # Clear any existing handlers
    root_logger.addHandler(handler)


def _load_json(path: str | None) -> Any:
    if path is None:
        return {}
    return json.loads(Path(path).read_text(encoding="utf-8"))


def cmd_simulate(args: argparse.Namespace) -> None:
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)
    cfg = load_config()

    description = _load_json(args.graph)
    options = SimulationOptions(
        steps=args.steps if args.steps is not None else cfg.steps,
        dt=args.dt if args.dt is not None else cfg.dt,
        damping=args.damping if args.damping is not None else cfg.damping,
        initial_state=_load_json(args.state) if args.state else None,
    )
    logger.info(f"Simulating {options.steps} steps (dt={options.dt}, damping={options.damping})")
    payload = build_payload(description, options)

    if args.csv:
        series = [Snapshot(**snap) for snap in payload["timeSeries"]]
        rows = write_time_series_csv(series, Path(args.csv))
        logger.info(f"Wrote {rows} time series rows to {args.csv}")

    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_loops(args: argparse.Namespace) -> None:
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    graph = normalize_graph(_load_json(args.graph))
    loops = detect_cycles(graph.edges)
    logger.info(f"Found {len(loops)} loops across {len(graph.edges)} edges")

    if args.csv:
        rows = write_loops_csv(loops, Path(args.csv))
        logger.info(f"Wrote {rows} loop rows to {args.csv}")

    print(json.dumps([loop.model_dump() for loop in loops], indent=2, ensure_ascii=False))


def cmd_serve(args: argparse.Namespace) -> None:
    setup_logging(args.verbose)
    cfg = load_config()
    run_server(host=args.host or cfg.host, port=args.port or cfg.port, debug=args.debug)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(prog="causal-sim", description="Causal loop simulation CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    # causal-sim simulate
    p_sim = sub.add_parser("simulate", parents=[common], help="Run the simulation and print the result as JSON")
    p_sim.add_argument("--graph", help="JSON file with the causal graph description (default: built-in template)")
    p_sim.add_argument("--state", help="JSON file with the five-factor initial state")
    p_sim.add_argument("--steps", type=int, help="Number of integration steps")
    p_sim.add_argument("--dt", type=float, help="Step size")
    p_sim.add_argument("--damping", type=float, help="Damping coefficient")
    p_sim.add_argument("--csv", metavar="PATH", help="Also write the time series to a CSV file")
    p_sim.set_defaults(func=cmd_simulate)

    # causal-sim loops
    p_loops = sub.add_parser("loops", parents=[common], help="Detect feedback loops only")
    p_loops.add_argument("--graph", help="JSON file with the causal graph description (default: built-in template)")
    p_loops.add_argument("--csv", metavar="PATH", help="Also write the loops to a CSV file")
    p_loops.set_defaults(func=cmd_loops)

    # causal-sim serve
    p_serve = sub.add_parser("serve", parents=[common], help="Launch the HTTP API")
    p_serve.add_argument("--host")
    p_serve.add_argument("--port", type=int)
    p_serve.add_argument("--debug", action="store_true")
    p_serve.set_defaults(func=cmd_serve)

    return p


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
