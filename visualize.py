from __future__ import annotations

import argparse
import sys
from itertools import accumulate
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib import animation
import networkx as nx

from graph import Graph, UnknownNodeError


def build_networkx_graph(graph: Graph) -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(graph.nodes)
    for edge in graph.edges():
        # Keep the cheapest of any parallel edges.
        if g.has_edge(edge.origin, edge.target):
            if g[edge.origin][edge.target]["cost"] <= edge.cost:
                continue
        g.add_edge(edge.origin, edge.target, cost=edge.cost)
    return g


def compute_layout(graph_nx: nx.Graph) -> Dict[str, Tuple[float, float]]:
    return nx.spring_layout(graph_nx, seed=42, weight=None)


def route_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(path[:-1], path[1:]))


def route_summary(path: Sequence[str], cost: float) -> str:
    if not path:
        return "No route"
    return "\n".join(
        [
            f"From: {path[0]}",
            f"To: {path[-1]}",
            f"Stops: {len(path)}",
            f"Total cost: {cost:g}",
        ]
    )


def draw_route(
    graph: Graph,
    path: Sequence[str],
    cost: float,
    output: Path | None = None,
    show: bool = False,
) -> None:
    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)

    fig, ax = plt.subplots(figsize=(12, 10))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    highlighted = route_edges(path)
    if highlighted:
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=highlighted,
            edge_color="#d62728",
            width=2.5,
            ax=ax,
        )

    on_route = set(path)
    node_colors = ["#d62728" if node in on_route else "#9ecae1" for node in graph_nx.nodes]
    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colors, node_size=120, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=7, ax=ax)

    if highlighted:
        edge_labels = {(u, v): graph_nx[u][v]["cost"] for u, v in highlighted}
        nx.draw_networkx_edge_labels(
            graph_nx, layout, edge_labels=edge_labels, font_size=7, ax=ax
        )

    ax.text(
        1.02,
        0.5,
        route_summary(path, cost),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title("Shortest Route")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def animate_route(
    graph: Graph,
    path: Sequence[str],
    output: Path | None = None,
    show: bool = False,
) -> None:
    if not path:
        return

    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)
    hop_costs = [graph_nx[u][v]["cost"] for u, v in route_edges(path)]
    travelled = [0, *accumulate(hop_costs)]

    fig, ax = plt.subplots(figsize=(12, 10))
    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)
    nx.draw_networkx_nodes(graph_nx, layout, node_color="#9ecae1", node_size=120, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=7, ax=ax)

    path_line, = ax.plot([], [], color="#d62728", linewidth=2.0, zorder=2)
    marker = ax.scatter([], [], s=160, c="#1f77b4", zorder=4)
    status_text = ax.text(
        0.02,
        0.98,
        "",
        transform=ax.transAxes,
        va="top",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(f"Route {path[0]} -> {path[-1]}")

    def init():
        path_line.set_data([], [])
        marker.set_offsets([[float("nan"), float("nan")]])
        status_text.set_text("")
        return path_line, marker, status_text

    def update(frame: int):
        node = path[frame]
        xs = [layout[n][0] for n in path[: frame + 1]]
        ys = [layout[n][1] for n in path[: frame + 1]]
        path_line.set_data(xs, ys)
        marker.set_offsets([layout[node]])
        status_text.set_text(
            f"Step {frame + 1}/{len(path)}\nAt: {node}\nTravelled: {travelled[frame]:g}"
        )
        return path_line, marker, status_text

    anim = animation.FuncAnimation(
        fig,
        update,
        frames=len(path),
        init_func=init,
        interval=800,
        blit=False,
    )

    if output:
        output_path = Path(output)
        suffix = output_path.suffix.lower()
        if suffix == ".gif":
            anim.save(output_path, writer=animation.PillowWriter(fps=1))
        elif suffix in {".mp4", ".m4v"}:
            anim.save(output_path, writer=animation.FFMpegWriter(fps=1))
        else:
            anim.save(output_path)

    if show:
        plt.show()
    else:
        plt.close(fig)


def main(argv: Optional[Sequence[str]] = None) -> int:
    from main import DEFAULT_CONFIG, build_graph, load_config

    parser = argparse.ArgumentParser(
        description="Visualise the shortest route through a road network."
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
        "--static-out",
        type=Path,
        help="Optional path to save a static PNG of the network and route.",
    )
    parser.add_argument(
        "--animation-out",
        type=Path,
        help="Optional path to save an animation (GIF/MP4) of the route.",
    )
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display figures interactively.",
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    graph = build_graph(config.get("graph"))
    routing_config = config.get("routing") or {}
    source = args.source or routing_config.get("source")
    destination = args.destination or routing_config.get("destination")
    if source is None or destination is None:
        parser.error("a source and a destination are required")

    try:
        cost, path = graph.shortest_path(source, destination)
    except UnknownNodeError:
        print(f"Error: unknown location {source!r}.", file=sys.stderr)
        return 1
    show = not args.no_show

    draw_route(graph=graph, path=path, cost=cost, output=args.static_out, show=show)
    animate_route(graph=graph, path=path, output=args.animation_out, show=show)
    return 0


if __name__ == "__main__":
    sys.exit(main())
