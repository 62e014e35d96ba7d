from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import yaml

from graph import Graph, UnknownNodeError


DEFAULT_CONFIG = Path(__file__).resolve().parent / "routes.yaml"


def load_config(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as handle:
        config = yaml.safe_load(handle)
    if not isinstance(config, dict):
        raise ValueError("Configuration must be a mapping.")
    return config


def parse_weight(raw) -> float:
    value = float(raw)
    if value.is_integer():
        return int(value)
    return value


def build_graph(graph_config: Dict) -> Graph:
    if not graph_config or "edges" not in graph_config:
        raise ValueError("Configuration is missing the 'graph.edges' section.")

    edges = []
    for row in graph_config["edges"]:
        if not isinstance(row, (list, tuple)) or len(row) != 3:
            raise ValueError(f"Edge entry {row!r} must be [origin, target, cost].")
        origin, target, cost = row
        edges.append((origin, target, parse_weight(cost)))

    return Graph(graph_config.get("nodes") or (), edges)


def format_route(path: Sequence[str]) -> str:
    return " -> ".join(path)


def print_route(source: str, destination: str, path: List[str], cost: float) -> None:
    if not path:
        print(f"No path found from {source} to {destination}")
        return

    print(format_route(path))
    print(f"cost: {cost}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Find the cheapest route between two locations of a road network."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to the YAML network configuration.",
    )
    parser.add_argument("--source", help="Start location (overrides routing.source).")
    parser.add_argument(
        "--destination", help="End location (overrides routing.destination)."
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Draw the network with the chosen route highlighted.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Save the visualisation to this file instead of opening a window.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Emit debug logging to stderr."
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    config = load_config(args.config)
    graph = build_graph(config.get("graph"))

    routing_config = config.get("routing") or {}
    source = args.source or routing_config.get("source")
    destination = args.destination or routing_config.get("destination")
    if source is None or destination is None:
        parser.error("a source and a destination are required")

    try:
        distances, predecessors = graph.shortest_path_using_dijkstra(source)
    except UnknownNodeError:
        print(f"Error: unknown location {source!r}.", file=sys.stderr)
        return 1

    path = graph.reconstruct_path(source, destination, predecessors)
    cost = distances[destination] if path else float("inf")
    print_route(source, destination, path, cost)

    if args.visualize:
        from visualize import draw_route

        draw_route(
            graph=graph,
            path=path,
            cost=cost,
            output=args.output,
            show=args.output is None,
        )
        if args.output:
            print(f"Visualisation stored at: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
