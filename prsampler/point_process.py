"""Base classes shared by every model."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .window import RectangleWindow


class PointProcess(ABC):
    """A distribution exposing an exact default sampler.

    ``generate_sample`` is the model's preferred exact sampler; the other
    ``generate_sample_*`` methods select an engine explicitly and are present
    only on the models supporting that engine.
    """

    @abstractmethod
    def generate_sample(self, *args: Any, **kwargs: Any) -> Any:
        """Exact sample from the default sampler.

        Every implementation accepts ``rng``; models indexed by a size, such as
        pattern-free strings, take it before ``rng``.
        """

    @property
    def name(self) -> str:
        return type(self).__name__


class SpatialPointProcess(PointProcess):
    window: RectangleWindow

    @property
    def dimension(self) -> int:
        return self.window.dimension

    def resolve_window(self, win: Any = None) -> Any:
        return self.window if win is None else win


class GraphPointProcess(PointProcess):
    """Model living on the vertices or edges of an undirected graph."""


__all__ = ["GraphPointProcess", "PointProcess", "SpatialPointProcess"]
