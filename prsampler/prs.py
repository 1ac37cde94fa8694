"""Partial rejection sampling on discrete variables.

A model exposes a product distribution over ``number_of_variables`` variables
together with a violation detector. The engine draws every variable, then
repeatedly redraws a resampling set until no constraint is violated. The
resampling set is the bad set closed under the model's propagation predicate:
a neighbour ``j`` of an included variable ``i`` joins the set when redrawing
``i`` could newly create a violation with the current value of ``j``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional, Protocol, Sequence, Set

import numpy as np

from .logging_utils import ProgressLogger
from .rng import RNGLike, get_rng

logger = logging.getLogger(__name__)


def resampling_closure(
    seed: Iterable[int],
    neighbors: Callable[[int], Iterable[int]],
    is_outer_interaction_possible: Callable[[int, int], bool],
    *,
    on_inner: Optional[Callable[[int, int], None]] = None,
    on_outer: Optional[Callable[[int, int], None]] = None,
    skip: Optional[Callable[[int], bool]] = None,
) -> Set[int]:
    """Breadth-first closure of ``seed`` under the outer interaction predicate.

    ``on_inner(i, j)`` is called for every neighbour ``j`` of a frontier vertex
    ``i`` that already belongs to the set, ``on_outer(i, j)`` when ``j`` joins it.
    Frontier vertices for which ``skip(i)`` holds do not propagate.
    """

    resample = set(seed)
    frontier = sorted(resample)
    while frontier:
        next_frontier: List[int] = []
        for i in frontier:
            if skip is not None and skip(i):
                continue
            for j in neighbors(i):
                if j in resample:
                    if on_inner is not None:
                        on_inner(i, j)
                elif is_outer_interaction_possible(i, j):
                    resample.add(j)
                    next_frontier.append(j)
                    if on_outer is not None:
                        on_outer(i, j)
        frontier = sorted(next_frontier)
    return resample


class PRSModel(Protocol):
    name: str

    @property
    def number_of_variables(self) -> int:
        ...

    def initial_values(self, rng: np.random.Generator) -> List[Any]:
        ...

    def sample_variable(self, index: int, rng: np.random.Generator) -> Any:
        ...

    def resampling_set(self, values: Sequence[Any]) -> Set[int]:
        ...

    def assemble(self, values: Sequence[Any]) -> Any:
        ...


class DiscretePRSModel(ABC):
    """Mixin providing the default PRS plumbing for variable-indexed models."""

    @property
    @abstractmethod
    def number_of_variables(self) -> int:
        ...

    @abstractmethod
    def sample_variable(self, index: int, rng: np.random.Generator) -> Any:
        """Exact draw of variable ``index`` from its marginal distribution."""

    @abstractmethod
    def find_bad(self, values: Sequence[Any]) -> Set[int]:
        """Indices of the variables involved in a violated constraint."""

    @abstractmethod
    def assemble(self, values: Sequence[Any]) -> Any:
        ...

    def dependency_neighbors(self, index: int) -> Sequence[int]:
        return ()

    def is_outer_interaction_possible(self, values: Sequence[Any], i: int, j: int) -> bool:
        return True

    def initial_values(self, rng: np.random.Generator) -> List[Any]:
        return [self.sample_variable(i, rng) for i in range(self.number_of_variables)]

    def resampling_set(self, values: Sequence[Any]) -> Set[int]:
        bad = self.find_bad(values)
        if not bad:
            return set()
        return resampling_closure(
            bad,
            self.dependency_neighbors,
            lambda i, j: self.is_outer_interaction_possible(values, i, j),
        )

    def generate_sample_prs(self, rng: RNGLike = None) -> Any:
        return partial_rejection_sampling(self, get_rng(rng))


def partial_rejection_sampling(model: PRSModel, rng: np.random.Generator) -> Any:
    """Run PRS until no constraint is violated and return the assembled sample.

    Termination is almost sure but not bounded: there is no cap on the number
    of rounds.
    """

    label = getattr(model, "name", type(model).__name__)
    values = list(model.initial_values(rng))
    progress = ProgressLogger(logger, f"PRS {label}")
    rounds = 0
    while True:
        resample = model.resampling_set(values)
        if not resample:
            break
        rounds += 1
        logger.debug("PRS %s round %d: resampling %d variables", label, rounds, len(resample))
        for i in sorted(resample):
            values[i] = model.sample_variable(i, rng)
        progress.tick(resampling=len(resample))
    logger.debug("PRS %s finished after %d resampling rounds", label, rounds)
    return model.assemble(values)


__all__ = ["DiscretePRSModel", "PRSModel", "partial_rejection_sampling", "resampling_closure"]
