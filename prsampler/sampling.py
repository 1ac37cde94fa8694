"""Public entry points selecting a sampling engine for a model."""

from __future__ import annotations

import logging
from typing import Any, Optional

import networkx as nx

from .dominated_cftp import dominated_cftp
from .grid_prs import grid_partial_rejection_sampling
from .logging_utils import debug_log_call
from .prs import partial_rejection_sampling
from .rng import RNGLike, get_rng
from .window import RectangleWindow

logger = logging.getLogger(__name__)


def _describe(sample: Any) -> str:
    if isinstance(sample, nx.DiGraph):
        return f"oriented graph with {sample.number_of_edges()} edges"
    if isinstance(sample, str):
        return f"string of length {len(sample)}"
    try:
        return f"{len(sample)} items"
    except TypeError:
        return type(sample).__name__


def _model_name(model: Any) -> str:
    return getattr(model, "name", type(model).__name__)


def _unsupported(model: Any, engine: str) -> TypeError:
    return TypeError(f"{_model_name(model)} cannot be sampled with {engine}")


def _run(model: Any, engine: str, sampler, **kwargs: Any) -> Any:
    logger.info("Sampling %s with %s", _model_name(model), engine)
    sample = sampler(**kwargs)
    logger.info("%s sample of %s: %s", engine, _model_name(model), _describe(sample))
    return sample


@debug_log_call(logger)
def generate_sample(model: Any, rng: RNGLike = None, **kwargs: Any) -> Any:
    """Exact sample of ``model`` from its default sampler."""

    if not hasattr(model, "generate_sample"):
        raise _unsupported(model, "a default sampler")
    return _run(model, "default sampler", model.generate_sample, rng=get_rng(rng), **kwargs)


@debug_log_call(logger)
def generate_sample_prs(model: Any, rng: RNGLike = None, **kwargs: Any) -> Any:
    rng = get_rng(rng)
    if hasattr(model, "generate_sample_prs"):
        return _run(model, "PRS", model.generate_sample_prs, rng=rng, **kwargs)
    if hasattr(model, "resampling_set"):
        return _run(model, "PRS", lambda: partial_rejection_sampling(model, rng))
    raise _unsupported(model, "partial rejection sampling")


@debug_log_call(logger)
def generate_sample_grid_prs(model: Any, rng: RNGLike = None) -> Any:
    rng = get_rng(rng)
    if hasattr(model, "generate_sample_grid_prs"):
        return _run(model, "grid PRS", model.generate_sample_grid_prs, rng=rng)
    if hasattr(model, "gibbs_interaction"):
        return _run(model, "grid PRS", lambda: grid_partial_rejection_sampling(model, rng))
    raise _unsupported(model, "grid partial rejection sampling")


@debug_log_call(logger)
def generate_sample_dcftp(
    model: Any,
    rng: RNGLike = None,
    win: Optional[RectangleWindow] = None,
    n0: Optional[int] = None,
) -> Any:
    rng = get_rng(rng)
    if hasattr(model, "generate_sample_dcftp"):
        return _run(model, "dCFTP", model.generate_sample_dcftp, rng=rng, win=win, n0=n0)
    if hasattr(model, "papangelou_conditional_intensity"):
        return _run(model, "dCFTP", lambda: dominated_cftp(model, win=win, n0=n0, rng=rng))
    raise _unsupported(model, "dominated coupling from the past")


@debug_log_call(logger)
def generate_sample_gibbs_perfect(model: Any, rng: RNGLike = None) -> Any:
    if not hasattr(model, "generate_sample_gibbs_perfect"):
        raise _unsupported(model, "the perfect Gibbs sampler")
    return _run(model, "perfect Gibbs", model.generate_sample_gibbs_perfect, rng=get_rng(rng))


__all__ = [
    "generate_sample",
    "generate_sample_dcftp",
    "generate_sample_gibbs_perfect",
    "generate_sample_grid_prs",
    "generate_sample_prs",
]
