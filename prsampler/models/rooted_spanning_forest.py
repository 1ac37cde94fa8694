"""Uniform rooted spanning forests of a connected graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, List, Sequence, Set

import networkx as nx
import numpy as np

from ..graph_utils import directed_cycle_nodes, successor_digraph
from ..point_process import GraphPointProcess
from ..prs import DiscretePRSModel
from ..rng import RNGLike, get_rng
from ..validate import ModelDomainError

logger = logging.getLogger(__name__)


def _normalize_roots(graph: nx.Graph, roots: Any) -> FrozenSet[Hashable]:
    try:
        if roots in graph:
            return frozenset([roots])
    except TypeError:
        pass
    try:
        normalized = frozenset(roots)
    except TypeError:
        raise ModelDomainError(f"roots must be a vertex or a collection of vertices (got {roots!r})") from None
    if not normalized:
        raise ModelDomainError("roots must not be empty")
    missing = [v for v in normalized if v not in graph]
    if missing:
        raise ModelDomainError(f"roots {missing[:5]} are not vertices of the graph")
    return normalized


@dataclass(frozen=True)
class RootedSpanningForest(DiscretePRSModel, GraphPointProcess):
    """Spanning forest of ``graph`` whose trees are rooted at ``roots``.

    Every non-root vertex points to a uniformly chosen neighbour; vertices lying
    on a directed cycle are redrawn (cycle-popping). The sample is a
    ``networkx.DiGraph`` where each edge goes from a vertex to its parent.
    When ``roots`` is ``None`` a single root is drawn uniformly from ``rng``.
    """

    graph: nx.Graph
    roots: Any = None
    rng: RNGLike = field(default=None, repr=False, compare=False)
    _nodes: List[Hashable] = field(init=False, repr=False, compare=False)
    _variables: List[Hashable] = field(init=False, repr=False, compare=False)
    _neighbors: Dict[Hashable, List[Hashable]] = field(init=False, repr=False, compare=False)
    _position: Dict[Hashable, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.graph, nx.Graph) or self.graph.is_directed():
            raise ModelDomainError("graph must be an undirected networkx Graph")
        if self.graph.number_of_nodes() == 0:
            raise ModelDomainError("graph must have at least one vertex")
        if not nx.is_connected(self.graph):
            raise ModelDomainError("graph must be connected for every vertex to reach a root")
        graph = nx.freeze(nx.Graph(self.graph))
        nodes = list(graph.nodes)
        if self.roots is None:
            roots = frozenset([nodes[int(get_rng(self.rng).integers(len(nodes)))]])
        else:
            roots = _normalize_roots(graph, self.roots)
        variables = [v for v in nodes if v not in roots]
        object.__setattr__(self, "graph", graph)
        object.__setattr__(self, "roots", roots)
        object.__setattr__(self, "rng", None)
        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_variables", variables)
        object.__setattr__(self, "_neighbors", {v: [u for u in graph.neighbors(v) if u != v] for v in variables})
        object.__setattr__(self, "_position", {v: k for k, v in enumerate(variables)})

    @property
    def number_of_variables(self) -> int:
        return len(self._variables)

    def sample_variable(self, index: int, rng: np.random.Generator) -> Hashable:
        neighbors = self._neighbors[self._variables[index]]
        return neighbors[int(rng.integers(len(neighbors)))]

    def forest(self, values: Sequence[Hashable]) -> nx.DiGraph:
        return successor_digraph(self._nodes, dict(zip(self._variables, values)))

    def find_bad(self, values: Sequence[Hashable]) -> Set[int]:
        return {self._position[v] for v in directed_cycle_nodes(self.forest(values))}

    def assemble(self, values: Sequence[Hashable]) -> nx.DiGraph:
        return self.forest(values)

    def generate_sample(self, rng: RNGLike = None) -> nx.DiGraph:
        return self.generate_sample_prs(rng)


__all__ = ["RootedSpanningForest"]
