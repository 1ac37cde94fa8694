"""Strauss point process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..dominated_cftp import dominated_cftp
from ..grid_prs import Cell, SpatialGridPRSMixin, grid_partial_rejection_sampling
from ..point_process import SpatialPointProcess
from ..rng import RNGLike, get_rng
from ..validate import ensure_positive, ensure_unit_interval
from ..window import Point, RectangleWindow, square_window

logger = logging.getLogger(__name__)


def distances_to(x: Point, X: np.ndarray) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.size == 0:
        return np.empty(0)
    return np.linalg.norm(X.reshape(len(X), -1) - np.asarray(x, dtype=float), axis=1)


@dataclass(frozen=True)
class StraussPointProcess(SpatialGridPRSMixin, SpatialPointProcess):
    """Strauss process with density proportional to ``beta^|X| gamma^{s_r(X)}``.

    ``s_r(X)`` counts the pairs of points at distance at most ``r``. With
    ``gamma == 1`` this is a Poisson process, with ``gamma == 0`` a hard-core one.
    The default sampler is dominated CFTP; grid PRS is also available.
    """

    beta: float
    gamma: float
    r: float
    window: Optional[RectangleWindow] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "beta", ensure_positive("beta", self.beta))
        object.__setattr__(self, "gamma", ensure_unit_interval("gamma", self.gamma))
        object.__setattr__(self, "r", ensure_positive("r", self.r))
        if self.window is None:
            object.__setattr__(self, "window", square_window())

    def generate_sample(self, rng: RNGLike = None, win=None, n0: Optional[int] = None) -> np.ndarray:
        return self.generate_sample_dcftp(rng, win=win, n0=n0)

    def generate_sample_dcftp(self, rng: RNGLike = None, win=None, n0: Optional[int] = None) -> np.ndarray:
        return dominated_cftp(self, win=win, n0=n0, rng=rng)

    def generate_sample_grid_prs(self, rng: RNGLike = None) -> np.ndarray:
        return grid_partial_rejection_sampling(self, get_rng(rng))

    def generate_sample_prs(self, rng: RNGLike = None) -> np.ndarray:
        return self.generate_sample_grid_prs(rng)

    def papangelou_conditional_intensity(self, x: Point, X: np.ndarray) -> float:
        dist = distances_to(x, X)
        if np.any(dist == 0.0):
            return 0.0
        return self.beta * self.gamma ** int(np.count_nonzero(dist <= self.r))

    def upper_bound_papangelou_conditional_intensity(self) -> float:
        return self.beta

    def is_repulsive(self) -> bool:
        return True

    def is_attractive(self) -> bool:
        return self.gamma == 1.0

    def gibbs_interaction(self, cell_i: Cell, cell_j: Cell) -> float:
        return float(self.gamma ** self._close_pairs(cell_i, cell_j))


__all__ = ["StraussPointProcess", "distances_to"]
