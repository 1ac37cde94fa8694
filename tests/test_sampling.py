import logging

import networkx as nx
import numpy as np
import pytest

from prsampler import (
    HardCoreGraph,
    HomogeneousPoissonPointProcess,
    Ising,
    PatternFreeString,
    PointProcess,
    SinkFreeGraph,
    StraussPointProcess,
    generate_sample,
    generate_sample_dcftp,
    generate_sample_gibbs_perfect,
    generate_sample_grid_prs,
    generate_sample_prs,
)


def test_default_sampler_dispatch_is_reproducible():
    model = StraussPointProcess(beta=30.0, gamma=0.4, r=0.1)

    np.testing.assert_array_equal(generate_sample(model, rng=3), generate_sample(model, rng=3))


def test_keyword_arguments_reach_the_model():
    sample = generate_sample(PatternFreeString("ab", "ab"), rng=0, size=12)

    assert len(sample) == 12
    assert "ab" not in sample


def test_engine_specific_entry_points():
    rng = np.random.default_rng(6)

    assert isinstance(generate_sample_prs(HardCoreGraph(nx.cycle_graph(6), 0.1), rng), list)
    assert isinstance(generate_sample_prs(SinkFreeGraph(nx.cycle_graph(5)), rng), nx.DiGraph)
    assert generate_sample_grid_prs(Ising.on_grid(3, 3, h=0.1, J=0.1), rng).shape == (9,)
    assert generate_sample_gibbs_perfect(Ising.on_grid(3, 3, J=0.1), rng).shape == (9,)
    assert generate_sample_dcftp(HomogeneousPoissonPointProcess(20.0), rng, n0=4).shape[1] == 2


def test_unsupported_engine_raises_type_error():
    with pytest.raises(TypeError, match="perfect Gibbs"):
        generate_sample_gibbs_perfect(HardCoreGraph(nx.path_graph(3), 0.1))
    with pytest.raises(TypeError, match="grid partial rejection"):
        generate_sample_grid_prs(SinkFreeGraph(nx.cycle_graph(3)))
    with pytest.raises(TypeError, match="dominated coupling"):
        generate_sample_dcftp(Ising.on_grid(2, 2))


def test_facade_logs_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="prsampler.sampling"):
        generate_sample(HardCoreGraph(nx.path_graph(4), 0.2), rng=0)

    messages = [record.getMessage() for record in caplog.records]
    assert "Sampling HardCoreGraph with default sampler" in messages
    assert any(m.startswith("default sampler sample of HardCoreGraph") for m in messages)


def test_size_indexed_model_takes_size_before_rng():
    model = PatternFreeString("aa", "ab")

    assert isinstance(model, PointProcess)
    assert model.generate_sample(5, 0) == generate_sample(model, rng=0, size=5)
