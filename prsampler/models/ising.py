"""Ising model on the vertices of a graph.

Spins take values in ``{-1, +1}`` with joint density proportional to

    prod_i exp(h_i x_i / 2) prod_{ij in E} exp(J x_i x_j)

so that an isolated spin is ``+1`` with probability ``sigmoid(h_i)``.
``J > 0`` is ferromagnetic and ``J < 0`` antiferromagnetic.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Hashable, List, Sequence, Union

import networkx as nx
import numpy as np

from ..containers import IndexedSet
from ..graph_utils import InteractionGraph, grid_graph, indexed_adjacency, uniform_weighted_graph
from ..grid_prs import Cell, grid_partial_rejection_sampling
from ..logging_utils import ProgressLogger
from ..point_process import GraphPointProcess
from ..rng import RNGLike, bernoulli, get_rng, sigmoid
from ..validate import ModelDomainError, ensure_finite
from ..window import GraphNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ising(GraphPointProcess):
    graph: nx.Graph
    h: Union[float, Sequence[float]] = 0.0
    J: float = 0.0
    _nodes: List[Hashable] = field(init=False, repr=False, compare=False)
    _adjacency: List[List[int]] = field(init=False, repr=False, compare=False)
    _fields: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.graph, nx.Graph) or self.graph.is_directed():
            raise ModelDomainError("graph must be an undirected networkx Graph")
        graph = nx.freeze(nx.Graph(self.graph))
        nodes, _, adjacency = indexed_adjacency(graph)
        if np.ndim(self.h) == 0:
            h = ensure_finite("h", self.h)
            fields = np.full(len(nodes), h)
        else:
            fields = np.array([ensure_finite("h", v) for v in self.h], dtype=float)
            if len(fields) != len(nodes):
                raise ModelDomainError(f"h must have one value per vertex ({len(nodes)}), got {len(fields)}")
            h = tuple(fields.tolist())
        object.__setattr__(self, "graph", graph)
        object.__setattr__(self, "h", h)
        object.__setattr__(self, "J", ensure_finite("J", self.J))
        object.__setattr__(self, "_nodes", nodes)
        object.__setattr__(self, "_adjacency", adjacency)
        object.__setattr__(self, "_fields", fields)

    @classmethod
    def on_grid(
        cls,
        width: int,
        height: int,
        h: Union[float, Sequence[float]] = 0.0,
        J: float = 0.0,
        periodic: bool = False,
    ) -> "Ising":
        """Ising model on a ``width x height`` grid, vertex ``row * width + col``."""

        return cls(grid_graph(width, height, periodic=periodic), h, J)

    @property
    def nodes(self) -> List[Hashable]:
        return list(self._nodes)

    def marginal_probability(self, i: int) -> float:
        """Probability that spin ``i`` is ``+1`` when ``J == 0``."""

        return sigmoid(self._fields[i])

    def sample_spin(self, i: int, rng: np.random.Generator) -> int:
        return 1 if bernoulli(self.marginal_probability(i), rng) else -1

    def generate_sample(self, rng: RNGLike = None) -> np.ndarray:
        return self.generate_sample_grid_prs(rng)

    def generate_sample_prs(self, rng: RNGLike = None) -> np.ndarray:
        return self.generate_sample_grid_prs(rng)

    def generate_sample_grid_prs(self, rng: RNGLike = None) -> np.ndarray:
        return grid_partial_rejection_sampling(self, get_rng(rng))

    # grid PRS plug-in: one cell per vertex on the native graph

    def interaction_graph(self, rng: np.random.Generator) -> InteractionGraph:
        indexed = nx.Graph()
        indexed.add_nodes_from(range(len(self._nodes)))
        indexed.add_edges_from((i, j) for i, nbrs in enumerate(self._adjacency) for j in nbrs if i < j)
        return uniform_weighted_graph(indexed, rng)

    def initialize_cells(self) -> List[Cell]:
        return [Cell(GraphNode(i), 0) for i in range(len(self._nodes))]

    def sample_cell(self, window: GraphNode, rng: np.random.Generator) -> int:
        return self.sample_spin(window.idx, rng)

    def gibbs_interaction(self, cell_i: Cell, cell_j: Cell) -> float:
        return math.exp(self.J * cell_i.value * cell_j.value - abs(self.J))

    def is_inner_interaction_possible(self, cell_i: Cell, cell_j: Cell) -> bool:
        return np.sign(self.J) * cell_i.value * cell_j.value < 0

    def is_outer_interaction_possible(self, cell_i: Cell, cell_j: Cell) -> bool:
        return True

    def assemble(self, cells: Sequence[Cell]) -> np.ndarray:
        return np.array([cell.value for cell in cells], dtype=int)

    # perfect Gibbs sampler

    def _accept(self, state: np.ndarray, i: int, undetermined: IndexedSet, rng: np.random.Generator) -> bool:
        """Bayes filter: keep the determined neighbours of ``i`` given the current spin of ``i``.

        The acceptance probability is the smallest conditional probability of
        ``state[i]`` over all values of the determined neighbours divided by
        its conditional probability under their current values.
        """

        fixed = [j for j in self._adjacency[i] if j not in undetermined]
        if not fixed:
            return True
        s_fixed = float(sum(state[j] for j in fixed))
        s_open = float(sum(state[j] for j in self._adjacency[i] if j in undetermined))
        x = state[i]
        base = x * (self._fields[i] + 2.0 * self.J * s_open)
        numerator = sigmoid(base - 2.0 * abs(self.J) * len(fixed))
        denominator = sigmoid(base + 2.0 * x * self.J * s_fixed)
        return bool(rng.random() < numerator / denominator)

    def _heat_bath(self, state: np.ndarray, i: int, rng: np.random.Generator) -> int:
        local = self._fields[i] + 2.0 * self.J * float(sum(state[j] for j in self._adjacency[i]))
        return 1 if bernoulli(sigmoid(local), rng) else -1

    def generate_sample_gibbs_perfect(self, rng: RNGLike = None) -> np.ndarray:
        """Exact sample from the perfect Gibbs sampler with a Bayes filter.

        Undetermined spins act as a boundary condition for the determined ones.
        Termination is almost sure when ``|J|`` is small compared to the
        maximum degree; there is no cap on the number of steps.
        """

        rng = get_rng(rng)
        n = len(self._nodes)
        state = np.array([self.sample_spin(i, rng) for i in range(n)], dtype=int)
        undetermined: IndexedSet = IndexedSet(range(n))
        progress = ProgressLogger(logger, "Ising perfect Gibbs")
        steps = 0
        while len(undetermined):
            i = undetermined.random_element(rng)
            if self._accept(state, i, undetermined, rng):
                state[i] = self._heat_bath(state, i, rng)
                undetermined.discard(i)
            else:
                for j in self._adjacency[i]:
                    undetermined.add(j)
            steps += 1
            progress.tick(undetermined=len(undetermined))
        logger.debug("Ising perfect Gibbs finished after %d steps", steps)
        return state


__all__ = ["Ising"]
