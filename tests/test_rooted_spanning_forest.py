from collections import Counter

import networkx as nx
import numpy as np
import pytest
from scipy.stats import chisquare

from prsampler import ModelDomainError, RootedSpanningForest, grid_graph


def _assert_valid_forest(graph: nx.Graph, roots, forest: nx.DiGraph) -> None:
    assert set(forest.nodes) == set(graph.nodes)
    for v in graph.nodes:
        if v in roots:
            assert forest.out_degree[v] == 0
        else:
            assert forest.out_degree[v] == 1
            (parent,) = forest.successors(v)
            assert graph.has_edge(v, parent)
    assert nx.is_directed_acyclic_graph(forest)


def test_forest_on_5x5_grid_with_two_roots():
    graph = grid_graph(5, 5)
    model = RootedSpanningForest(graph, {1, 13})

    forest = model.generate_sample(np.random.default_rng(2021))

    _assert_valid_forest(graph, {1, 13}, forest)
    assert forest.number_of_edges() == 23


def test_fixed_seed_reproduces_forest_exactly():
    graph = grid_graph(5, 5)

    first = RootedSpanningForest(graph, {1, 13}).generate_sample_prs(7)
    second = RootedSpanningForest(graph, {1, 13}).generate_sample_prs(7)

    assert sorted(first.edges) == sorted(second.edges)


def test_single_vertex_root_and_random_root():
    graph = nx.petersen_graph()

    model = RootedSpanningForest(graph, 3)
    assert model.roots == frozenset({3})
    _assert_valid_forest(graph, {3}, model.generate_sample(np.random.default_rng(0)))

    drawn = RootedSpanningForest(graph, rng=np.random.default_rng(5))
    assert len(drawn.roots) == 1
    assert set(drawn.roots) <= set(graph.nodes)


def test_uniform_spanning_trees_of_four_cycle():
    graph = nx.cycle_graph(4)
    model = RootedSpanningForest(graph, {0})
    rng = np.random.default_rng(31)

    runs = 4000
    counts = Counter(
        frozenset(frozenset(e) for e in model.generate_sample(rng).edges) for _ in range(runs)
    )

    # one spanning tree per removed edge of the cycle
    assert len(counts) == 4
    assert chisquare(list(counts.values())).pvalue > 0.01


def test_disconnected_graph_is_rejected():
    graph = nx.disjoint_union(nx.path_graph(3), nx.path_graph(2))

    with pytest.raises(ModelDomainError, match="connected"):
        RootedSpanningForest(graph, {0})


@pytest.mark.parametrize("roots", [set(), {0, 42}, [99]])
def test_invalid_roots_are_rejected(roots):
    with pytest.raises(ModelDomainError):
        RootedSpanningForest(nx.path_graph(4), roots)


def test_every_vertex_root_gives_empty_forest():
    graph = nx.path_graph(3)
    forest = RootedSpanningForest(graph, [0, 1, 2]).generate_sample(0)

    assert forest.number_of_edges() == 0
    assert set(forest.nodes) == {0, 1, 2}
