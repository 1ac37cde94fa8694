"""Graph helpers shared by the graph models and the grid PRS engine."""

from __future__ import annotations

import logging
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import networkx as nx
import numpy as np

from .validate import ensure_positive_int

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


def grid_graph(width: int, height: int, periodic: bool = False) -> nx.Graph:
    """Grid graph whose vertex at ``(row, col)`` is labelled ``row * width + col``."""

    width = ensure_positive_int("width", width)
    height = ensure_positive_int("height", height)
    graph = nx.grid_2d_graph(height, width, periodic=periodic)
    return nx.relabel_nodes(graph, {(row, col): row * width + col for row, col in graph.nodes}, copy=True)


def king_graph(nb_x: int, nb_y: Optional[int] = None) -> nx.Graph:
    """Strong product of two path graphs, vertex ``(ix, iy)`` labelled ``ix * nb_y + iy``.

    Every cell is joined to its horizontal, vertical and diagonal neighbours.
    """

    nb_x = ensure_positive_int("nb_x", nb_x)
    nb_y = nb_x if nb_y is None else ensure_positive_int("nb_y", nb_y)
    product = nx.strong_product(nx.path_graph(nb_x), nx.path_graph(nb_y))
    mapping = {(ix, iy): ix * nb_y + iy for ix, iy in product.nodes}
    graph = nx.Graph()
    graph.add_nodes_from(range(nb_x * nb_y))
    graph.add_edges_from((mapping[u], mapping[v]) for u, v in product.edges)
    return graph


def max_degree(graph: nx.Graph) -> int:
    return max((deg for _, deg in graph.degree), default=0)


def sink_nodes(digraph: nx.DiGraph) -> List[Hashable]:
    return [v for v, deg in digraph.out_degree if deg == 0]


def orient_edges(
    nodes: Iterable[Hashable], edges: Sequence[Tuple[Hashable, Hashable]], forward: Sequence[bool]
) -> nx.DiGraph:
    """Directed graph orienting ``edges[k]`` as given when ``forward[k]`` and reversed otherwise."""

    digraph = nx.DiGraph()
    digraph.add_nodes_from(nodes)
    for (u, v), keep in zip(edges, forward):
        digraph.add_edge(*((u, v) if keep else (v, u)))
    return digraph


def successor_digraph(
    nodes: Iterable[Hashable], successors: Mapping[Hashable, Optional[Hashable]]
) -> nx.DiGraph:
    digraph = nx.DiGraph()
    digraph.add_nodes_from(nodes)
    digraph.add_edges_from((v, s) for v, s in successors.items() if s is not None)
    return digraph


def indexed_adjacency(graph: nx.Graph) -> Tuple[List[Hashable], Dict[Hashable, int], List[List[int]]]:
    """Vertices in graph order, their positions and sorted adjacency lists by position."""

    nodes = list(graph.nodes)
    index = {v: k for k, v in enumerate(nodes)}
    adjacency = [sorted(index[u] for u in graph.neighbors(v) if u != v) for v in nodes]
    return nodes, index, adjacency


def directed_cycle_nodes(digraph: nx.DiGraph) -> Set[Hashable]:
    nodes: Set[Hashable] = set()
    for cycle in nx.simple_cycles(digraph):
        nodes.update(cycle)
    return nodes


class InteractionGraph:
    """Dependency graph on ``0..n-1`` with one uniform mark per edge.

    Marks live in a flat array indexed through a stable ``(i, j) -> k`` map
    with ``i < j``; the instance belongs to a single sampling run.
    """

    def __init__(self, number_of_nodes: int, edges: Iterable[Edge], marks: np.ndarray) -> None:
        self.number_of_nodes = int(number_of_nodes)
        self.edges: List[Edge] = sorted({(min(i, j), max(i, j)) for i, j in edges if i != j})
        self._edge_id: Dict[Edge, int] = {edge: k for k, edge in enumerate(self.edges)}
        marks = np.asarray(marks, dtype=float)
        if marks.shape != (len(self.edges),):
            raise ValueError(f"expected {len(self.edges)} marks, got shape {marks.shape}")
        self.marks = marks
        adjacency: List[List[int]] = [[] for _ in range(self.number_of_nodes)]
        for i, j in self.edges:
            adjacency[i].append(j)
            adjacency[j].append(i)
        self._adjacency = [sorted(nbrs) for nbrs in adjacency]

    def edge_id(self, i: int, j: int) -> int:
        return self._edge_id[(i, j) if i < j else (j, i)]

    def neighbors(self, i: int) -> List[int]:
        return self._adjacency[i]

    def mark(self, i: int, j: int) -> float:
        return float(self.marks[self.edge_id(i, j)])

    def redraw(self, i: int, j: int, rng: np.random.Generator) -> None:
        self.marks[self.edge_id(i, j)] = rng.random()

    def __len__(self) -> int:
        return self.number_of_nodes


def uniform_weighted_graph(graph: nx.Graph, rng: np.random.Generator) -> InteractionGraph:
    """Attach an independent Uniform(0, 1) mark to every edge of ``graph``.

    Vertices must be the integers ``0..n-1``.
    """

    n = graph.number_of_nodes()
    if set(graph.nodes) != set(range(n)):
        raise ValueError("interaction graph vertices must be labelled 0..n-1")
    edges = sorted((min(u, v), max(u, v)) for u, v in graph.edges if u != v)
    logger.debug("Uniform weighted graph: %d vertices, %d edges", n, len(edges))
    return InteractionGraph(n, edges, rng.random(len(edges)))


__all__ = [
    "InteractionGraph",
    "directed_cycle_nodes",
    "grid_graph",
    "indexed_adjacency",
    "king_graph",
    "max_degree",
    "orient_edges",
    "sink_nodes",
    "successor_digraph",
    "uniform_weighted_graph",
]
