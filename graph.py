from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple

from priority_queue import PriorityQueue


logger = logging.getLogger(__name__)

Node = Hashable


class UnknownNodeError(KeyError):
    """Raised when a query names a node the graph does not contain."""


@dataclass(frozen=True)
class Edge:
    origin: Node
    target: Node
    cost: float


class Graph:
    """Undirected weighted graph stored as adjacency lists, with Dijkstra support."""

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        edges: Iterable[Tuple[Node, Node, float]] = (),
    ) -> None:
        self._adjacency: Dict[Node, List[Tuple[Node, float]]] = {}
        self._edges: List[Edge] = []

        for node in nodes:
            self.add_node(node)
        for origin, target, cost in edges:
            self.add_edge(origin, target, cost)

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def nodes(self) -> List[Node]:
        return list(self._adjacency)

    def add_node(self, node: Node) -> None:
        self._adjacency.setdefault(node, [])

    def add_edge(self, origin: Node, target: Node, cost: float) -> None:
        """Connect origin and target in both directions.

        Missing endpoints are created on the fly. Inserting the same pair twice
        leaves two parallel edges; Dijkstra simply relaxes both.
        """
        if not cost >= 0:
            raise ValueError(f"Edge {origin}-{target} has invalid cost {cost}.")

        self.add_node(origin)
        self.add_node(target)
        self._adjacency[origin].append((target, cost))
        self._adjacency[target].append((origin, cost))
        self._edges.append(Edge(origin, target, cost))

    def neighbors(self, node: Node) -> List[Tuple[Node, float]]:
        return self._adjacency[node]

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def shortest_path_using_dijkstra(
        self, source: Node
    ) -> Tuple[Dict[Node, float], Dict[Node, Optional[Node]]]:
        """Compute single-source shortest paths using Dijkstra.

        distances[v] stores the best-known distance from source to v (inf when
        v is unreachable), and predecessors[v] remembers the previous node along
        the shortest path (None for the source and for unreached nodes).
        """
        if source not in self._adjacency:
            raise UnknownNodeError(source)

        distances: Dict[Node, float] = {node: math.inf for node in self._adjacency}
        predecessors: Dict[Node, Optional[Node]] = {node: None for node in self._adjacency}
        visited: Dict[Node, bool] = {node: False for node in self._adjacency}
        distances[source] = 0

        queue = PriorityQueue()
        queue.enqueue(source, 0)
        stale = 0

        while not queue.is_empty():
            u = queue.dequeue().node
            if visited[u]:
                stale += 1
                continue
            visited[u] = True

            for v, cost in self._adjacency[u]:
                candidate = distances[u] + cost
                if candidate < distances[v]:
                    distances[v] = candidate
                    predecessors[v] = u
                    queue.enqueue(v, candidate)

        logger.debug(
            "dijkstra from %r settled %d of %d nodes over %d edges (%d stale entries skipped)",
            source,
            sum(visited.values()),
            len(visited),
            len(self._edges),
            stale,
        )
        return distances, predecessors

    def reconstruct_path(
        self,
        start: Node,
        end: Node,
        predecessors: Mapping[Node, Optional[Node]],
    ) -> List[Node]:
        """Walk predecessor links back from end; [] when the walk misses start."""
        if end not in predecessors:
            return []

        path: List[Node] = []
        node: Optional[Node] = end
        while node is not None:
            path.append(node)
            node = predecessors[node]
        path.reverse()

        if path[0] != start:
            return []
        return path

    def shortest_path(self, source: Node, target: Node) -> Tuple[float, List[Node]]:
        """Recover both length and explicit path between source and target."""
        distances, predecessors = self.shortest_path_using_dijkstra(source)
        path = self.reconstruct_path(source, target, predecessors)
        if not path:
            return math.inf, []
        return distances[target], path

    def path_cost(self, path: List[Node]) -> float:
        """Return the total cost of walking along the given node sequence."""
        if len(path) < 2:
            return 0.0

        total_cost = 0.0
        for u, v in zip(path[:-1], path[1:]):
            # Parallel edges are allowed; the cheapest one is the one walked.
            edge_cost = min(
                (cost for neighbor, cost in self._adjacency.get(u, ()) if neighbor == v),
                default=None,
            )
            if edge_cost is None:
                raise ValueError(f"Edge {u}-{v} not present in graph.")
            total_cost += edge_cost
        return total_cost
