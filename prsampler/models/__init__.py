"""Concrete models plugged into the sampling engines."""

from .hard_core_graph import HardCoreGraph
from .hard_core_spatial import HardCorePointProcess
from .ising import Ising
from .pattern_free_string import PatternFreeString
from .poisson import HomogeneousPoissonPointProcess, generate_sample_poisson_union_balls
from .rooted_spanning_forest import RootedSpanningForest
from .sink_free_graph import SinkFreeGraph
from .strauss import StraussPointProcess

__all__ = [
    "HardCoreGraph",
    "HardCorePointProcess",
    "HomogeneousPoissonPointProcess",
    "Ising",
    "PatternFreeString",
    "RootedSpanningForest",
    "SinkFreeGraph",
    "StraussPointProcess",
    "generate_sample_poisson_union_balls",
]
