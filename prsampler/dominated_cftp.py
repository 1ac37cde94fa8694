"""Dominated coupling from the past for spatial birth-death dynamics.

The target process is a spatial Gibbs point process whose Papangelou
conditional intensity is bounded by ``beta`` and is monotone in the
configuration (repulsive or attractive). It is the stationary law of a
spatial birth-death process dominated by a Poisson birth-death process ``D``
of birth rate ``beta * volume`` and unit death rate per point.

``D`` is simulated backward in time, recording in ``(M, R)`` every event:
``R`` holds the point involved and ``M`` a mark, ``0.0`` for a death and a
uniform value in ``(0, 1]`` for a birth. The record is then replayed forward
with a lower process ``L`` and an upper process ``U`` sandwiching every
trajectory of the target dynamics. Once ``|L| == |U|`` the sandwich has
coalesced and ``L`` is an exact sample.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, Optional, Protocol, Tuple

import numpy as np

from .config import get_sampler_config
from .containers import IndexedSet
from .rng import RNGLike, get_rng, uniform_mark
from .validate import ModelDomainError, ensure_positive_int
from .window import Point, RectangleWindow

logger = logging.getLogger(__name__)

PointSet = Dict[Point, None]


class DCFTPModel(Protocol):
    window: RectangleWindow

    def papangelou_conditional_intensity(self, x: Point, X: np.ndarray) -> float:
        ...

    def upper_bound_papangelou_conditional_intensity(self) -> float:
        ...

    def is_repulsive(self) -> bool:
        ...

    def is_attractive(self) -> bool:
        ...


def backward_extend(
    D: IndexedSet,
    M: Deque[float],
    R: Deque[Point],
    steps: int,
    birth_rate: float,
    window: RectangleWindow,
    rng: np.random.Generator,
) -> None:
    """Simulate ``steps`` more events of the dominating process into the past."""

    for _ in range(steps):
        card = len(D)
        if rng.random() < card / (birth_rate + card):
            # Removing a point backward in time is a birth forward in time.
            x = D.pop_random(rng)
            M.appendleft(uniform_mark(rng))
        else:
            x = window.sample_point(rng)
            D.add(x)
            M.appendleft(0.0)
        R.appendleft(x)


def _as_array(points: PointSet, dimension: int) -> np.ndarray:
    if not points:
        return np.empty((0, dimension))
    return np.array(list(points), dtype=float)


def forward_coupling(
    D: IndexedSet,
    M: Deque[float],
    R: Deque[Point],
    model: DCFTPModel,
    beta: float,
    on_event: Optional[Callable[[PointSet, PointSet], None]] = None,
) -> Tuple[bool, PointSet]:
    """Replay ``(M, R)`` from the deepest past and report coalescence.

    ``U`` starts from the dominating configuration ``D`` and ``L`` from the
    empty one. Returns ``(|L| == |U|, L)``.
    """

    if model.is_repulsive():
        repulsive = True
    elif model.is_attractive():
        repulsive = False
    else:
        raise ModelDomainError(f"{type(model).__name__} is neither repulsive nor attractive")

    dimension = model.window.dimension

    def ratio(x: Point, points: PointSet) -> float:
        intensity = model.papangelou_conditional_intensity(x, _as_array(points, dimension))
        assert 0.0 <= intensity <= beta, f"papangelou intensity {intensity} outside [0, {beta}]"
        return intensity / beta

    lower: PointSet = {}
    upper: PointSet = dict.fromkeys(D)
    for m, x in zip(M, R):
        if m > 0.0:
            if repulsive:
                first, second = upper, lower
            else:
                first, second = lower, upper
            if m < ratio(x, first):
                lower[x] = None
                upper[x] = None
            elif m < ratio(x, second):
                upper[x] = None
        else:
            lower.pop(x, None)
            upper.pop(x, None)
        if on_event is not None:
            on_event(lower, upper)
    return len(lower) == len(upper), lower


def dominated_cftp(
    model: DCFTPModel,
    win: Optional[RectangleWindow] = None,
    n0: Optional[int] = None,
    rng: RNGLike = None,
) -> np.ndarray:
    """Exact sample of ``model`` on ``win`` as an ``(n, d)`` array.

    The backward horizon starts at ``n0`` events and doubles after every
    failed coalescence check.
    """

    rng = get_rng(rng)
    window = model.window if win is None else win
    if n0 is None:
        n0 = get_sampler_config().dcftp_initial_steps
    n0 = ensure_positive_int("n0", n0)
    if not (model.is_repulsive() or model.is_attractive()):
        raise ModelDomainError(f"{type(model).__name__} is neither repulsive nor attractive")

    beta = model.upper_bound_papangelou_conditional_intensity()
    birth_rate = beta * window.volume()

    # Stationary law of the dominating process: Poisson(beta) on the window.
    D: IndexedSet = IndexedSet(tuple(p) for p in window.sample(rng.poisson(birth_rate), rng).tolist())
    M: Deque[float] = deque()
    R: Deque[Point] = deque()

    steps = n0
    attempts = 0
    while True:
        backward_extend(D, M, R, steps, birth_rate, window, rng)
        attempts += 1
        coalesced, lower = forward_coupling(D, M, R, model, beta)
        logger.debug("dCFTP attempt %d: horizon %d events, coalesced=%s", attempts, len(M), coalesced)
        if coalesced:
            break
        steps = len(M)

    logger.debug(
        "dCFTP %s coalesced after %d attempts (horizon %d events, %d points)",
        type(model).__name__,
        attempts,
        len(M),
        len(lower),
    )
    return _as_array(lower, window.dimension)


__all__ = ["DCFTPModel", "backward_extend", "dominated_cftp", "forward_coupling"]
