"""Observation windows: axis-aligned boxes, balls and graph vertices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Sequence, Tuple

import numpy as np
from scipy.special import gamma as gamma_fn

from .validate import ModelDomainError, ensure_positive

Point = Tuple[float, ...]


def _as_point(name: str, values: Sequence[float]) -> Tuple[float, ...]:
    try:
        point = tuple(float(v) for v in values)
    except TypeError:
        raise ModelDomainError(f"{name} must be a sequence of coordinates (got {values!r})") from None
    if not point:
        raise ModelDomainError(f"{name} must have at least one coordinate")
    if not all(math.isfinite(v) for v in point):
        raise ModelDomainError(f"{name} must have finite coordinates (got {point})")
    return point


@dataclass(frozen=True)
class RectangleWindow:
    """Closed box ``prod [corner_i, corner_i + widths_i]``."""

    corner: Tuple[float, ...]
    widths: Tuple[float, ...]

    def __post_init__(self) -> None:
        corner = _as_point("corner", self.corner)
        widths = _as_point("widths", self.widths)
        if len(corner) != len(widths):
            raise ModelDomainError(
                f"corner and widths must have the same length (got {len(corner)} and {len(widths)})"
            )
        for w in widths:
            ensure_positive("window width", w)
        object.__setattr__(self, "corner", corner)
        object.__setattr__(self, "widths", widths)

    @property
    def dimension(self) -> int:
        return len(self.corner)

    @property
    def upper(self) -> Tuple[float, ...]:
        return tuple(c + w for c, w in zip(self.corner, self.widths))

    @property
    def is_square(self) -> bool:
        return all(w == self.widths[0] for w in self.widths)

    def volume(self) -> float:
        return float(np.prod(self.widths))

    def contains(self, x: Sequence[float]) -> bool:
        if len(x) != self.dimension:
            return False
        return all(c <= xi <= c + w for xi, c, w in zip(x, self.corner, self.widths))

    def __contains__(self, x: object) -> bool:
        return self.contains(x)  # type: ignore[arg-type]

    def sample(self, n: int, rng: np.random.Generator) -> np.ndarray:
        """Return ``n`` independent uniform points as an ``(n, d)`` array."""

        corner = np.asarray(self.corner)
        widths = np.asarray(self.widths)
        return corner + widths * rng.random((int(n), self.dimension))

    def sample_point(self, rng: np.random.Generator) -> Point:
        return tuple(self.sample(1, rng)[0].tolist())

    def distance_to(self, points: np.ndarray) -> np.ndarray:
        """Euclidean distance from each row of ``points`` to the box (0 inside)."""

        pts = np.atleast_2d(np.asarray(points, dtype=float))
        lower = np.asarray(self.corner)
        upper = np.asarray(self.upper)
        gap = np.maximum(np.maximum(lower - pts, pts - upper), 0.0)
        return np.sqrt(np.sum(gap * gap, axis=1))


def square_window(corner: Sequence[float] = (0.0, 0.0), width: float = 1.0) -> RectangleWindow:
    corner = _as_point("corner", corner)
    return RectangleWindow(corner, (float(width),) * len(corner))


@dataclass(frozen=True)
class BallWindow:
    """Closed Euclidean ball."""

    center: Tuple[float, ...]
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_point("center", self.center))
        object.__setattr__(self, "radius", ensure_positive("radius", self.radius))

    @property
    def dimension(self) -> int:
        return len(self.center)

    def volume(self) -> float:
        d = self.dimension
        return float(math.pi ** (d / 2) * self.radius**d / gamma_fn(d / 2 + 1))

    def contains(self, x: Sequence[float]) -> bool:
        if len(x) != self.dimension:
            return False
        return math.dist(x, self.center) <= self.radius

    def __contains__(self, x: object) -> bool:
        return self.contains(x)  # type: ignore[arg-type]

    def sample(self, n: int, rng: np.random.Generator) -> np.ndarray:
        # Uniform on the d-ball: first d coordinates of a uniform point on the (d+1)-sphere.
        d = self.dimension
        n = int(n)
        gaussians = rng.standard_normal((n, d + 2))
        norms = np.linalg.norm(gaussians, axis=1, keepdims=True)
        return np.asarray(self.center) + self.radius * gaussians[:, :d] / norms


@dataclass(frozen=True)
class GraphNode:
    """Window of a single graph vertex, used as the support of a graph cell."""

    idx: Hashable


__all__ = ["BallWindow", "GraphNode", "Point", "RectangleWindow", "square_window"]
