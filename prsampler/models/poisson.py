"""Homogeneous Poisson point process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.spatial.distance import cdist

from ..dominated_cftp import dominated_cftp
from ..point_process import SpatialPointProcess
from ..rng import RNGLike, get_rng
from ..validate import ensure_positive
from ..window import BallWindow, Point, RectangleWindow, square_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HomogeneousPoissonPointProcess(SpatialPointProcess):
    """Poisson process of intensity ``beta`` restricted to ``window``."""

    beta: float
    window: Optional[RectangleWindow] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "beta", ensure_positive("beta", self.beta))
        if self.window is None:
            object.__setattr__(self, "window", square_window())

    def generate_sample(self, rng: RNGLike = None, win=None) -> np.ndarray:
        rng = get_rng(rng)
        window = self.resolve_window(win)
        n = rng.poisson(self.beta * window.volume())
        return window.sample(n, rng)

    def generate_sample_dcftp(self, rng: RNGLike = None, win=None, n0: Optional[int] = None) -> np.ndarray:
        return dominated_cftp(self, win=win, n0=n0, rng=rng)

    def papangelou_conditional_intensity(self, x: Point, X: np.ndarray) -> float:
        return self.beta

    def upper_bound_papangelou_conditional_intensity(self) -> float:
        return self.beta

    def is_repulsive(self) -> bool:
        return True

    def is_attractive(self) -> bool:
        return True


def generate_sample_poisson_union_balls(
    beta: float,
    centers: np.ndarray,
    radius: float,
    win: Optional[RectangleWindow] = None,
    rng: RNGLike = None,
) -> np.ndarray:
    """Poisson(``beta``) sample on the union of the balls ``B(c, radius)``.

    The union is split into the disjoint pieces ``B_j minus the balls B_i, i < j``,
    each sampled independently. Points outside ``win`` are dropped.
    """

    rng = get_rng(rng)
    beta = ensure_positive("beta", beta)
    radius = ensure_positive("radius", radius)
    centers = np.atleast_2d(np.asarray(centers, dtype=float))
    d = centers.shape[1]
    if win is not None and win.dimension != d:
        raise ValueError(f"window dimension {win.dimension} does not match centers dimension {d}")

    mean = beta * BallWindow((0.0,) * d, radius).volume()
    pieces = []
    for j, center in enumerate(centers):
        n = rng.poisson(mean)
        if n == 0:
            continue
        proposed = BallWindow(tuple(center), radius).sample(n, rng)
        if j > 0:
            keep = np.all(cdist(centers[:j], proposed) > radius, axis=0)
            proposed = proposed[keep]
        pieces.append(proposed)

    points = np.vstack(pieces) if pieces else np.empty((0, d))
    if win is not None and len(points):
        inside = np.array([win.contains(p) for p in points], dtype=bool)
        points = points[inside]
    return points


__all__ = ["HomogeneousPoissonPointProcess", "generate_sample_poisson_union_balls"]
