"""Hard-core model on the vertices of a graph."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Hashable, List, Sequence, Set

import networkx as nx
import numpy as np

from ..graph_utils import indexed_adjacency, max_degree
from ..point_process import GraphPointProcess
from ..prs import DiscretePRSModel
from ..rng import RNGLike, bernoulli
from ..validate import ModelDomainError, ensure_non_negative, warn_slow_mixing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HardCoreGraph(DiscretePRSModel, GraphPointProcess):
    """Random independent set ``S`` with probability proportional to ``beta^|S|``.

    Each vertex is occupied independently with probability ``beta / (1 + beta)``;
    the constraint forbids two adjacent occupied vertices.
    """

    graph: nx.Graph
    beta: float
    _nodes: List[Hashable] = field(init=False, repr=False, compare=False)
    _adjacency: List[List[int]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.graph, nx.Graph) or self.graph.is_directed():
            raise ModelDomainError("graph must be an undirected networkx Graph")
        object.__setattr__(self, "beta", ensure_non_negative("beta", self.beta))
        object.__setattr__(self, "graph", nx.freeze(nx.Graph(self.graph)))
        nodes, _, adjacency = indexed_adjacency(self.graph)
        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_adjacency", adjacency)

    @property
    def occupation_probability(self) -> float:
        return self.beta / (1.0 + self.beta)

    @property
    def beta_max(self) -> float:
        """Largest ``beta`` covered by the fast termination guarantee of PRS."""

        degree = max_degree(self.graph)
        if degree == 0:
            return math.inf
        return 1.0 / (2.0 * math.sqrt(math.e) * degree - 1.0)

    @property
    def number_of_variables(self) -> int:
        return len(self._nodes)

    def sample_variable(self, index: int, rng: np.random.Generator) -> bool:
        return bernoulli(self.occupation_probability, rng)

    def find_bad(self, values: Sequence[bool]) -> Set[int]:
        return {i for i, occupied in enumerate(values) if occupied and any(values[j] for j in self._adjacency[i])}

    def dependency_neighbors(self, index: int) -> Sequence[int]:
        return self._adjacency[index]

    def is_outer_interaction_possible(self, values: Sequence[bool], i: int, j: int) -> bool:
        return bool(values[i])

    def assemble(self, values: Sequence[bool]) -> List[Hashable]:
        return [self._nodes[i] for i, occupied in enumerate(values) if occupied]

    def generate_sample(self, rng: RNGLike = None) -> List[Hashable]:
        return self.generate_sample_prs(rng)

    def generate_sample_prs(self, rng: RNGLike = None) -> List[Hashable]:
        if self.beta > self.beta_max:
            warn_slow_mixing(
                f"beta={self.beta} exceeds {self.beta_max:.6g}, the bound under which partial "
                "rejection sampling of the hard-core model is known to be efficient on this graph"
            )
        return super().generate_sample_prs(rng)


__all__ = ["HardCoreGraph"]
