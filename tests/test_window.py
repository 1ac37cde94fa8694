import math

import numpy as np
import pytest

from prsampler import BallWindow, GraphNode, ModelDomainError, RectangleWindow, square_window


def test_rectangle_window_volume_and_membership():
    win = RectangleWindow((0.0, 1.0), (2.0, 0.5))

    assert win.dimension == 2
    assert win.volume() == pytest.approx(1.0)
    assert (1.0, 1.25) in win
    assert (2.0, 1.5) in win
    assert (2.1, 1.2) not in win
    assert (1.0,) not in win
    assert not win.is_square


def test_square_window_defaults_to_unit_square():
    win = square_window()

    assert win.corner == (0.0, 0.0)
    assert win.widths == (1.0, 1.0)
    assert win.is_square
    assert square_window((1, 2, 3), 2).volume() == pytest.approx(8.0)


def test_rectangle_sample_shape_and_support():
    win = RectangleWindow((-1.0, 2.0), (0.5, 3.0))
    points = win.sample(500, np.random.default_rng(0))

    assert points.shape == (500, 2)
    assert all(win.contains(p) for p in points)
    assert win.sample(0, np.random.default_rng(0)).shape == (0, 2)


def test_rectangle_distance_to_points():
    win = square_window()
    dist = win.distance_to(np.array([[0.5, 0.5], [1.5, 0.5], [2.0, 2.0], [-0.3, 0.2]]))

    assert dist == pytest.approx([0.0, 0.5, math.sqrt(2.0), 0.3])


@pytest.mark.parametrize(
    "corner, widths",
    [
        ((0.0, 0.0), (1.0, 0.0)),
        ((0.0, 0.0), (1.0, -2.0)),
        ((0.0, 0.0), (1.0,)),
        ((), ()),
        ((0.0, float("nan")), (1.0, 1.0)),
    ],
)
def test_rectangle_window_rejects_invalid_geometry(corner, widths):
    with pytest.raises(ModelDomainError):
        RectangleWindow(corner, widths)


def test_ball_window_volume_matches_closed_forms():
    assert BallWindow((0.0, 0.0), 2.0).volume() == pytest.approx(4.0 * math.pi)
    assert BallWindow((0.0, 0.0, 0.0), 1.0).volume() == pytest.approx(4.0 / 3.0 * math.pi)


def test_ball_window_samples_uniformly_inside():
    ball = BallWindow((1.0, -1.0), 0.5)
    points = ball.sample(4000, np.random.default_rng(1))

    assert points.shape == (4000, 2)
    radii = np.linalg.norm(points - np.array([1.0, -1.0]), axis=1)
    assert np.all(radii <= 0.5 + 1e-12)
    # uniform in the disc: P(|x - c| <= r/2) = 1/4
    assert np.mean(radii <= 0.25) == pytest.approx(0.25, abs=0.03)


def test_ball_window_rejects_non_positive_radius():
    with pytest.raises(ModelDomainError):
        BallWindow((0.0, 0.0), 0.0)


def test_graph_node_is_hashable_window():
    assert GraphNode(3) == GraphNode(3)
    assert len({GraphNode(1), GraphNode(1), GraphNode(2)}) == 2
