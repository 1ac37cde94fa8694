import numpy as np
import pytest
from scipy.stats import chi2_contingency, ks_2samp

from prsampler import (
    Cell,
    HardCorePointProcess,
    InteractionGraph,
    ModelDomainError,
    RectangleWindow,
    SpatialCell,
    StraussPointProcess,
    grid_partial_rejection_sampling,
)
from prsampler.grid_prs import find_bad_cells, find_cells_to_resample


class _ThresholdModel:
    """Cells holding integers; neighbouring cells interact only when both exceed 5."""

    name = "threshold"

    def gibbs_interaction(self, cell_i, cell_j):
        return 0.0 if cell_i.value > 5 and cell_j.value > 5 else 1.0

    def is_inner_interaction_possible(self, cell_i, cell_j):
        return False

    def is_outer_interaction_possible(self, cell_i, cell_j):
        return cell_i.value > 5


def _path_graph(n, marks):
    return InteractionGraph(n, [(i, i + 1) for i in range(n - 1)], np.asarray(marks, dtype=float))


def _mean_nearest_neighbour(points):
    if len(points) < 2:
        return 0.0
    dist = np.linalg.norm(points[:, None, :] - points[None, :, :], axis=-1)
    np.fill_diagonal(dist, np.inf)
    return float(dist.min(axis=1).mean())


def test_cells_partition_the_window():
    model = StraussPointProcess(beta=10.0, gamma=0.5, r=0.3, window=RectangleWindow((0.0, 0.0), (1.0, 0.6)))

    cells = model.initialize_cells()

    # 1 / 0.3 rounds up to 4 columns, 0.6 / 0.3 gives exactly 2 rows
    assert len(cells) == 8
    assert sum(cell.window.volume() for cell in cells) == pytest.approx(0.6)
    last = cells[-1].window
    assert last.corner == pytest.approx((0.9, 0.3))
    assert last.widths == pytest.approx((0.1, 0.3))
    assert model.interaction_graph(np.random.default_rng(0)).number_of_nodes == 8


def test_bad_cells_and_marks_redrawn():
    rng = np.random.default_rng(0)
    graph = _path_graph(4, [0.5, 0.5, 0.5])
    cells = [Cell(None, v) for v in (9, 9, 1, 9)]

    bad = find_bad_cells(graph, cells, _ThresholdModel(), rng)

    assert bad == {0, 1}
    assert graph.marks[0] != 0.5
    assert list(graph.marks[1:]) == [0.5, 0.5]


def test_resampling_set_follows_outer_interactions():
    rng = np.random.default_rng(0)
    graph = _path_graph(5, [0.5, 0.5, 0.5, 0.5])
    cells = [Cell(None, v) for v in (9, 9, 7, 1, 9)]

    resample = find_cells_to_resample(graph, cells, _ThresholdModel(), rng)

    # cell 2 holds a large value so cell 3 joins; cell 3 does not propagate further
    assert resample == {0, 1, 2, 3}


def test_no_bad_cells_means_nothing_to_resample():
    graph = _path_graph(3, [0.5, 0.5])
    cells = [Cell(None, v) for v in (1, 9, 1)]

    assert find_cells_to_resample(graph, cells, _ThresholdModel(), np.random.default_rng(0)) == set()


def test_cell_count_must_match_interaction_graph():
    class _Mismatch(_ThresholdModel):
        def interaction_graph(self, rng):
            return _path_graph(3, rng.random(2))

        def initialize_cells(self):
            return [Cell(None, 0)]

    with pytest.raises(ValueError, match="cells"):
        grid_partial_rejection_sampling(_Mismatch(), np.random.default_rng(0))


def test_spatial_marks_refreshed_only_for_interacting_cells():
    model = StraussPointProcess(beta=10.0, gamma=0.5, r=0.3)
    left = SpatialCell(RectangleWindow((0.0, 0.0), (0.3, 0.3)), np.array([[0.25, 0.1]]))
    near = SpatialCell(RectangleWindow((0.3, 0.0), (0.3, 0.3)), np.array([[0.4, 0.1]]))
    far = SpatialCell(RectangleWindow((0.3, 0.0), (0.3, 0.3)), np.array([[0.59, 0.29]]))
    empty = SpatialCell(RectangleWindow((0.3, 0.0), (0.3, 0.3)), np.empty((0, 2)))

    assert model.is_inner_interaction_possible(left, near)
    assert model.gibbs_interaction(left, near) == pytest.approx(0.5)
    assert not model.is_inner_interaction_possible(left, far)
    assert not model.is_inner_interaction_possible(left, empty)


def test_strauss_grid_prs_sample_lies_in_window():
    model = StraussPointProcess(beta=40.0, gamma=0.3, r=0.15)

    points = model.generate_sample_grid_prs(np.random.default_rng(4))

    assert points.ndim == 2 and points.shape[1] == 2
    assert all(model.window.contains(p) for p in points)


def test_strauss_grid_prs_matches_dcftp_counts():
    # r close to 1/3 gives a 3 x 3 grid where most neighbouring cells interact
    model = StraussPointProcess(beta=14.0, gamma=0.1, r=0.34)
    rng = np.random.default_rng(97)
    runs = 6000

    grid = np.array([len(model.generate_sample_grid_prs(rng)) for _ in range(runs)])
    dcftp = np.array([len(model.generate_sample_dcftp(rng)) for _ in range(runs)])

    top = 9
    table = np.array([np.bincount(np.minimum(counts, top), minlength=top + 1) for counts in (grid, dcftp)])
    table = table[:, table.sum(axis=0) > 0]
    assert chi2_contingency(table)[1] > 0.001
    assert grid.mean() == pytest.approx(dcftp.mean(), abs=0.15)


def test_hard_core_grid_prs_matches_dcftp():
    model = HardCorePointProcess(beta=40.0, r=0.1)
    rng = np.random.default_rng(2024)
    runs = 200

    grid = [model.generate_sample_grid_prs(rng) for _ in range(runs)]
    dcftp = [model.generate_sample_dcftp(rng) for _ in range(runs)]

    for points in grid:
        if len(points) > 1:
            dist = np.linalg.norm(points[:, None, :] - points[None, :, :], axis=-1)
            np.fill_diagonal(dist, np.inf)
            assert dist.min() > model.r

    assert ks_2samp([len(p) for p in grid], [len(p) for p in dcftp]).pvalue > 0.001
    assert ks_2samp(
        [_mean_nearest_neighbour(p) for p in grid], [_mean_nearest_neighbour(p) for p in dcftp]
    ).pvalue > 0.001


def test_grid_prs_requires_planar_window():
    model = HardCorePointProcess(beta=5.0, r=0.2, window=RectangleWindow((0.0, 0.0, 0.0), (1.0, 1.0, 1.0)))

    with pytest.raises(ModelDomainError, match="2D"):
        model.generate_sample_grid_prs(np.random.default_rng(0))
