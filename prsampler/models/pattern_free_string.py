"""Uniform strings avoiding a given pattern."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Set, Tuple

import numpy as np

from ..point_process import PointProcess
from ..prs import DiscretePRSModel, partial_rejection_sampling
from ..rng import RNGLike, get_rng
from ..validate import ModelDomainError, ensure_positive_int

logger = logging.getLogger(__name__)


def has_common_prefix_suffix(pattern: str) -> bool:
    """Whether a proper prefix of ``pattern`` is also a suffix, i.e. occurrences can overlap."""

    return any(pattern[:k] == pattern[-k:] for k in range(1, len(pattern)))


def find_occurrences(pattern: str, chars: Sequence[str]) -> List[int]:
    """Start positions of all, possibly overlapping, occurrences of ``pattern``."""

    p = len(pattern)
    text = "".join(chars)
    return [s for s in range(len(text) - p + 1) if text.startswith(pattern, s)]


@dataclass(frozen=True)
class PatternFreeString(PointProcess):
    """Strings drawn uniformly among those over ``alphabet`` with no occurrence of ``pattern``."""

    pattern: str
    alphabet: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str) or not self.pattern:
            raise ModelDomainError("pattern must be a non-empty string")
        alphabet = tuple(dict.fromkeys(self.alphabet))
        if not alphabet:
            raise ModelDomainError("alphabet must not be empty")
        if any(not isinstance(c, str) or len(c) != 1 for c in alphabet):
            raise ModelDomainError(f"alphabet must be made of single characters (got {alphabet})")
        foreign = sorted(set(self.pattern) - set(alphabet))
        if foreign:
            raise ModelDomainError(
                f"pattern {self.pattern!r} uses characters {foreign} outside the alphabet {list(alphabet)}"
            )
        object.__setattr__(self, "alphabet", alphabet)

    @property
    def is_extremal(self) -> bool:
        return not has_common_prefix_suffix(self.pattern)

    def generate_sample(self, size: int, rng: RNGLike = None) -> str:
        return self.generate_sample_prs(size, rng)

    def generate_sample_prs(self, size: int, rng: RNGLike = None) -> str:
        size = ensure_positive_int("size", size)
        return partial_rejection_sampling(_PatternFreeStringRun(self, size), get_rng(rng))


class _PatternFreeStringRun(DiscretePRSModel):
    """One PRS run: a string of ``size`` uniform characters."""

    def __init__(self, model: PatternFreeString, size: int) -> None:
        self.model = model
        self.size = size
        self.name = f"PatternFreeString({model.pattern!r}, size={size})"

    @property
    def number_of_variables(self) -> int:
        return self.size

    def sample_variable(self, index: int, rng: np.random.Generator) -> str:
        alphabet = self.model.alphabet
        return alphabet[int(rng.integers(len(alphabet)))]

    def find_bad(self, values: Sequence[str]) -> Set[int]:
        p = len(self.model.pattern)
        return {t for s in find_occurrences(self.model.pattern, values) for t in range(s, s + p)}

    def resampling_set(self, values: Sequence[str]) -> Set[int]:
        resample = self.find_bad(values)
        if not resample or self.model.is_extremal:
            return resample

        # A window meeting the set joins it when its fixed characters still agree with the pattern.
        pattern = self.model.pattern
        p = len(pattern)
        last_start = self.size - p
        frontier = sorted(resample)
        while frontier:
            starts = sorted({s for t in frontier for s in range(max(0, t - p + 1), min(t, last_start) + 1)})
            next_frontier: List[int] = []
            for s in starts:
                outside = [t for t in range(s, s + p) if t not in resample]
                if outside and all(values[t] == pattern[t - s] for t in outside):
                    resample.update(outside)
                    next_frontier.extend(outside)
            frontier = sorted(next_frontier)
        return resample

    def assemble(self, values: Sequence[str]) -> str:
        return "".join(values)


__all__ = ["PatternFreeString", "find_occurrences", "has_common_prefix_suffix"]
