"""Spatial hard-core point process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.spatial.distance import pdist, squareform

from ..dominated_cftp import dominated_cftp
from ..grid_prs import Cell, SpatialGridPRSMixin, grid_partial_rejection_sampling
from ..logging_utils import ProgressLogger
from ..point_process import SpatialPointProcess
from ..rng import RNGLike, get_rng
from ..validate import ensure_positive
from ..window import Point, RectangleWindow, square_window
from .poisson import generate_sample_poisson_union_balls
from .strauss import distances_to

logger = logging.getLogger(__name__)


def _bad_points(points: np.ndarray, r: float) -> np.ndarray:
    if len(points) < 2:
        return np.zeros(len(points), dtype=bool)
    dist = squareform(pdist(points))
    np.fill_diagonal(dist, np.inf)
    return np.any(dist <= r, axis=1)


@dataclass(frozen=True)
class HardCorePointProcess(SpatialGridPRSMixin, SpatialPointProcess):
    """Poisson process of intensity ``beta`` conditioned on no pair closer than ``r``.

    The default sampler is the partial rejection sampler of Guo and Jerrum:
    points involved in a conflict are discarded and the union of the balls of
    radius ``r`` around them is refilled with a fresh Poisson sample.
    """

    beta: float
    r: float
    window: Optional[RectangleWindow] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "beta", ensure_positive("beta", self.beta))
        object.__setattr__(self, "r", ensure_positive("r", self.r))
        if self.window is None:
            object.__setattr__(self, "window", square_window())

    def generate_sample(self, rng: RNGLike = None, win=None) -> np.ndarray:
        return self.generate_sample_prs(rng, win=win)

    def generate_sample_prs(self, rng: RNGLike = None, win=None) -> np.ndarray:
        rng = get_rng(rng)
        window = self.resolve_window(win)
        points = window.sample(rng.poisson(self.beta * window.volume()), rng)
        progress = ProgressLogger(logger, "Hard-core PRS")
        rounds = 0
        while True:
            bad = _bad_points(points, self.r)
            if not bad.any():
                break
            rounds += 1
            logger.debug("Hard-core PRS round %d: %d bad points out of %d", rounds, int(bad.sum()), len(points))
            refill = generate_sample_poisson_union_balls(self.beta, points[bad], self.r, win=window, rng=rng)
            points = np.vstack([points[~bad], refill])
            progress.tick(points=len(points))
        logger.debug("Hard-core PRS finished after %d rounds with %d points", rounds, len(points))
        return points

    def generate_sample_dcftp(self, rng: RNGLike = None, win=None, n0: Optional[int] = None) -> np.ndarray:
        return dominated_cftp(self, win=win, n0=n0, rng=rng)

    def generate_sample_grid_prs(self, rng: RNGLike = None) -> np.ndarray:
        return grid_partial_rejection_sampling(self, get_rng(rng))

    def papangelou_conditional_intensity(self, x: Point, X: np.ndarray) -> float:
        if np.any(distances_to(x, X) <= self.r):
            return 0.0
        return self.beta

    def upper_bound_papangelou_conditional_intensity(self) -> float:
        return self.beta

    def is_repulsive(self) -> bool:
        return True

    def is_attractive(self) -> bool:
        return False

    def gibbs_interaction(self, cell_i: Cell, cell_j: Cell) -> float:
        return 0.0 if self._close_pairs(cell_i, cell_j) else 1.0


__all__ = ["HardCorePointProcess"]
