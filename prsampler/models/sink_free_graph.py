"""Uniform sink-free orientations of an undirected graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Sequence, Set, Tuple

import networkx as nx
import numpy as np

from ..graph_utils import orient_edges, sink_nodes
from ..point_process import GraphPointProcess
from ..prs import DiscretePRSModel
from ..rng import RNGLike, bernoulli
from ..validate import ModelDomainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SinkFreeGraph(DiscretePRSModel, GraphPointProcess):
    """Orientation of every edge chosen uniformly among those leaving no sink.

    Variables are the edges, each oriented forward or backward with probability
    1/2. Edges incident to a sink are redrawn; this is an extremal instance so
    the resampling set never needs to grow beyond the bad set.
    """

    graph: nx.Graph
    _nodes: List[Hashable] = field(init=False, repr=False, compare=False)
    _edges: List[Tuple[Hashable, Hashable]] = field(init=False, repr=False, compare=False)
    _incident: Dict[Hashable, List[int]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.graph, nx.Graph) or self.graph.is_directed():
            raise ModelDomainError("graph must be an undirected networkx Graph")
        isolated = list(nx.isolates(self.graph))
        if isolated:
            raise ModelDomainError(f"isolated vertices are always sinks (got {isolated[:5]})")
        loops = list(nx.selfloop_edges(self.graph))
        if loops:
            raise ModelDomainError(f"self-loops are not supported (got {loops[:5]})")
        for component in nx.connected_components(self.graph):
            # a component needs a cycle, i.e. at least as many edges as vertices
            if self.graph.subgraph(component).number_of_edges() < len(component):
                raise ModelDomainError(
                    f"component {sorted(component, key=repr)[:5]} is acyclic and has no sink-free orientation"
                )
        object.__setattr__(self, "graph", nx.freeze(nx.Graph(self.graph)))
        nodes = list(self.graph.nodes)
        edges = list(self.graph.edges)
        incident: Dict[Hashable, List[int]] = {v: [] for v in nodes}
        for k, (u, v) in enumerate(edges):
            incident[u].append(k)
            incident[v].append(k)
        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_edges", edges)
        object.__setattr__(self, "_incident", incident)

    @property
    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        return list(self._edges)

    @property
    def number_of_variables(self) -> int:
        return len(self._edges)

    def sample_variable(self, index: int, rng: np.random.Generator) -> bool:
        return bernoulli(0.5, rng)

    def orientation(self, values: Sequence[bool]) -> nx.DiGraph:
        return orient_edges(self._nodes, self._edges, values)

    def find_bad(self, values: Sequence[bool]) -> Set[int]:
        sinks = sink_nodes(self.orientation(values))
        return {k for v in sinks for k in self._incident[v]}

    def assemble(self, values: Sequence[bool]) -> nx.DiGraph:
        return self.orientation(values)

    def generate_sample(self, rng: RNGLike = None) -> nx.DiGraph:
        return self.generate_sample_prs(rng)


__all__ = ["SinkFreeGraph"]
