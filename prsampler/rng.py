"""Resolution of the random stream used by a sampling call."""

from __future__ import annotations

import math
import numbers
from typing import Optional, Union

import numpy as np

RNGLike = Union[None, int, np.random.Generator]

_DEFAULT_RNG = np.random.default_rng()


def get_rng(rng: RNGLike = None) -> np.random.Generator:
    """Return the generator a sampling call should draw from.

    A :class:`numpy.random.Generator` is used as is, a non-negative integer seeds
    a fresh deterministic stream, ``None`` or a negative integer selects the
    process-level default stream.
    """

    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        return _DEFAULT_RNG
    if isinstance(rng, numbers.Integral) and not isinstance(rng, bool):
        if rng < 0:
            return _DEFAULT_RNG
        return np.random.default_rng(int(rng))
    raise TypeError(f"rng must be None, an integer seed or a numpy Generator (got {type(rng).__name__})")


def sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def bernoulli(p: float, rng: np.random.Generator) -> bool:
    return bool(rng.random() < p)


def uniform_mark(rng: np.random.Generator) -> float:
    """Uniform draw on the half-open interval (0, 1]."""

    return 1.0 - rng.random()


__all__ = ["RNGLike", "bernoulli", "get_rng", "sigmoid", "uniform_mark"]
