"""Grid partial rejection sampling.

The domain is split into cells, each cell being a variable of a PRS run. Two
neighbouring cells ``i`` and ``j`` of the interaction graph carry a uniform
mark ``U_ij``; the pair is bad when ``U_ij`` exceeds the Gibbs interaction
between the contents of the two cells. Marks of bad pairs are redrawn as soon
as they are inspected.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Protocol, Sequence, Set, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from .graph_utils import InteractionGraph, king_graph, uniform_weighted_graph
from .logging_utils import ProgressLogger
from .prs import resampling_closure
from .validate import ModelDomainError
from .window import RectangleWindow

logger = logging.getLogger(__name__)


@dataclass
class Cell:
    """Variable of a grid PRS run: a support window and its current content."""

    window: Any
    value: Any = None

    @property
    def is_empty(self) -> bool:
        return False


@dataclass
class SpatialCell(Cell):
    @property
    def is_empty(self) -> bool:
        return self.value is None or len(self.value) == 0


class GridPRSModel(Protocol):
    name: str

    def interaction_graph(self, rng: np.random.Generator) -> InteractionGraph:
        ...

    def initialize_cells(self) -> List[Cell]:
        ...

    def sample_cell(self, window: Any, rng: np.random.Generator) -> Any:
        ...

    def gibbs_interaction(self, cell_i: Cell, cell_j: Cell) -> float:
        ...

    def is_inner_interaction_possible(self, cell_i: Cell, cell_j: Cell) -> bool:
        ...

    def is_outer_interaction_possible(self, cell_i: Cell, cell_j: Cell) -> bool:
        ...

    def assemble(self, cells: Sequence[Cell]) -> Any:
        ...


def find_bad_cells(
    graph: InteractionGraph, cells: Sequence[Cell], model: GridPRSModel, rng: np.random.Generator
) -> Set[int]:
    """Endpoints of the edges whose mark exceeds the Gibbs interaction.

    The mark of every bad edge is redrawn.
    """

    bad: Set[int] = set()
    for k, (i, j) in enumerate(graph.edges):
        interaction = model.gibbs_interaction(cells[i], cells[j])
        assert 0.0 <= interaction <= 1.0, f"gibbs interaction {interaction} outside [0, 1]"
        if graph.marks[k] > interaction:
            bad.add(i)
            bad.add(j)
            graph.marks[k] = rng.random()
    return bad


def find_cells_to_resample(
    graph: InteractionGraph, cells: Sequence[Cell], model: GridPRSModel, rng: np.random.Generator
) -> Set[int]:
    bad = find_bad_cells(graph, cells, model, rng)
    if not bad:
        return bad

    def on_inner(i: int, j: int) -> None:
        if model.is_inner_interaction_possible(cells[i], cells[j]):
            graph.redraw(i, j, rng)

    return resampling_closure(
        bad,
        graph.neighbors,
        lambda i, j: model.is_outer_interaction_possible(cells[i], cells[j]),
        on_inner=on_inner,
        on_outer=lambda i, j: graph.redraw(i, j, rng),
        skip=lambda i: cells[i].is_empty,
    )


def grid_partial_rejection_sampling(model: GridPRSModel, rng: np.random.Generator) -> Any:
    label = getattr(model, "name", type(model).__name__)
    graph = model.interaction_graph(rng)
    cells = model.initialize_cells()
    if len(cells) != graph.number_of_nodes:
        raise ValueError(f"{len(cells)} cells for an interaction graph of {graph.number_of_nodes} vertices")

    logger.debug("Grid PRS %s: %d cells, %d interaction edges", label, len(cells), len(graph.edges))
    progress = ProgressLogger(logger, f"Grid PRS {label}")
    resample: Set[int] = set(range(len(cells)))
    rounds = 0
    while resample:
        for i in sorted(resample):
            cells[i].value = model.sample_cell(cells[i].window, rng)
        resample = find_cells_to_resample(graph, cells, model, rng)
        rounds += 1
        logger.debug("Grid PRS %s round %d: %d cells to resample", label, rounds, len(resample))
        progress.tick(resampling=len(resample))
    logger.debug("Grid PRS %s finished after %d rounds", label, rounds)
    return model.assemble(cells)


class SpatialGridPRSMixin:
    """Grid PRS plumbing for planar point processes with interaction range ``r``.

    The window is cut into square cells of side ``r`` (cells on the upper
    boundary are truncated) connected by the king graph. Each cell is filled
    with an exact sample of the model restricted to the cell window.
    """

    window: RectangleWindow
    beta: float
    r: float

    def _grid_shape(self) -> Tuple[int, int]:
        if self.window.dimension != 2:
            raise ModelDomainError(
                f"grid PRS needs a 2D rectangular window (got dimension {self.window.dimension})"
            )
        nb_x, nb_y = (max(1, math.ceil(w / self.r - 1e-9)) for w in self.window.widths)
        return nb_x, nb_y

    def interaction_graph(self, rng: np.random.Generator) -> InteractionGraph:
        nb_x, nb_y = self._grid_shape()
        return uniform_weighted_graph(king_graph(nb_x, nb_y), rng)

    def _axis_bounds(self, axis: int, nb: int, k: int) -> Tuple[float, float]:
        start = self.window.corner[axis] + self.r * k
        if k == nb - 1:
            return start, self.window.widths[axis] - self.r * k
        return start, self.r

    def initialize_cells(self) -> List[Cell]:
        nb_x, nb_y = self._grid_shape()
        cells: List[Cell] = []
        for ix in range(nb_x):
            cx, wx = self._axis_bounds(0, nb_x, ix)
            for iy in range(nb_y):
                cy, wy = self._axis_bounds(1, nb_y, iy)
                cells.append(SpatialCell(RectangleWindow((cx, cy), (wx, wy)), np.empty((0, 2))))
        return cells

    def sample_cell(self, window: RectangleWindow, rng: np.random.Generator) -> np.ndarray:
        return self.generate_sample(rng, win=window)

    def _close_pairs(self, cell_i: Cell, cell_j: Cell) -> int:
        if cell_i.is_empty or cell_j.is_empty:
            return 0
        return int(np.count_nonzero(cdist(cell_i.value, cell_j.value) <= self.r))

    def is_inner_interaction_possible(self, cell_i: Cell, cell_j: Cell) -> bool:
        # a surviving mark is conditioned below the current interaction; refresh it unless that is 1
        return self._close_pairs(cell_i, cell_j) > 0

    def is_outer_interaction_possible(self, cell_i: Cell, cell_j: Cell) -> bool:
        if cell_i.is_empty:
            return False
        return bool(np.any(cell_j.window.distance_to(cell_i.value) <= self.r))

    def assemble(self, cells: Sequence[Cell]) -> np.ndarray:
        parts = [cell.value for cell in cells if not cell.is_empty]
        if not parts:
            return np.empty((0, self.window.dimension))
        return np.vstack(parts)


__all__ = [
    "Cell",
    "GridPRSModel",
    "SpatialCell",
    "SpatialGridPRSMixin",
    "find_bad_cells",
    "find_cells_to_resample",
    "grid_partial_rejection_sampling",
]
