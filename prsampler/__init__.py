from .config import SamplerConfig, get_sampler_config, set_sampler_config
from .containers import IndexedSet
from .dominated_cftp import backward_extend, dominated_cftp, forward_coupling
from .graph_utils import (
    InteractionGraph,
    directed_cycle_nodes,
    grid_graph,
    king_graph,
    orient_edges,
    sink_nodes,
    successor_digraph,
    uniform_weighted_graph,
)
from .grid_prs import Cell, SpatialCell, grid_partial_rejection_sampling
from .models import (
    HardCoreGraph,
    HardCorePointProcess,
    HomogeneousPoissonPointProcess,
    Ising,
    PatternFreeString,
    RootedSpanningForest,
    SinkFreeGraph,
    StraussPointProcess,
    generate_sample_poisson_union_balls,
)
from .point_process import GraphPointProcess, PointProcess, SpatialPointProcess
from .prs import DiscretePRSModel, partial_rejection_sampling, resampling_closure
from .rng import get_rng
from .sampling import (
    generate_sample,
    generate_sample_dcftp,
    generate_sample_gibbs_perfect,
    generate_sample_grid_prs,
    generate_sample_prs,
)
from .validate import ModelDomainError, SlowMixingWarning
from .window import BallWindow, GraphNode, RectangleWindow, square_window

__all__ = [
    "BallWindow",
    "Cell",
    "DiscretePRSModel",
    "GraphNode",
    "GraphPointProcess",
    "HardCoreGraph",
    "HardCorePointProcess",
    "HomogeneousPoissonPointProcess",
    "IndexedSet",
    "InteractionGraph",
    "Ising",
    "ModelDomainError",
    "PatternFreeString",
    "PointProcess",
    "RectangleWindow",
    "RootedSpanningForest",
    "SamplerConfig",
    "SinkFreeGraph",
    "SlowMixingWarning",
    "SpatialCell",
    "SpatialPointProcess",
    "StraussPointProcess",
    "backward_extend",
    "directed_cycle_nodes",
    "dominated_cftp",
    "forward_coupling",
    "generate_sample",
    "generate_sample_dcftp",
    "generate_sample_gibbs_perfect",
    "generate_sample_grid_prs",
    "generate_sample_poisson_union_balls",
    "generate_sample_prs",
    "get_rng",
    "get_sampler_config",
    "grid_graph",
    "grid_partial_rejection_sampling",
    "king_graph",
    "orient_edges",
    "partial_rejection_sampling",
    "resampling_closure",
    "set_sampler_config",
    "sink_nodes",
    "square_window",
    "successor_digraph",
    "uniform_weighted_graph",
]
