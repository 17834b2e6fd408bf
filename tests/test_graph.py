import math

import numpy as np
import pytest

from ErrandTSP import CostMatrix, MissingEdgeError, NodeIndexError


def test_new_matrix_has_zero_diagonal_and_unset_edges():
    matrix = CostMatrix(3)
    assert matrix.node_count == 3
    assert matrix.cost(1, 1) == 0.0
    assert not matrix.is_set(0, 1)
    assert len(list(matrix.missing_edges())) == 6


def test_reading_unset_edge_fails():
    matrix = CostMatrix(2)
    with pytest.raises(MissingEdgeError) as excinfo:
        matrix.cost(0, 1)
    assert (excinfo.value.from_node, excinfo.value.to_node) == (0, 1)


def test_edges_are_directed():
    matrix = CostMatrix(2)
    matrix.set_edge_cost(0, 1, 3.5)
    assert matrix.cost(0, 1) == 3.5
    assert not matrix.is_set(1, 0)
    with pytest.raises(MissingEdgeError):
        matrix.require_complete()
    matrix.set_edge_cost(1, 0, 7.0)
    matrix.require_complete()


@pytest.mark.parametrize("edge", [(5, 0), (0, 4), (-1, 2)])
def test_out_of_range_edge(edge):
    matrix = CostMatrix(4)
    with pytest.raises(NodeIndexError):
        matrix.set_edge_cost(edge[0], edge[1], 1.0)


def test_nan_cost_rejected():
    with pytest.raises(ValueError):
        CostMatrix(2).set_edge_cost(0, 1, float("nan"))


def test_negative_node_count_rejected():
    with pytest.raises(ValueError):
        CostMatrix(-1)


def test_as_array_is_read_only():
    matrix = CostMatrix.from_array([[0, 1], [2, 0]])
    view = matrix.as_array()
    with pytest.raises(ValueError):
        view[0, 1] = 9.0
    matrix.set_edge_cost(0, 1, 4.0)
    assert view[0, 1] == 4.0


def test_from_array_requires_square():
    with pytest.raises(ValueError):
        CostMatrix.from_array([[0, 1, 2], [1, 0, 3]])


def test_from_coordinates_metrics():
    points = [(0.0, 0.0), (3.0, 4.0)]
    assert CostMatrix.from_coordinates(points).cost(0, 1) == pytest.approx(5.0)
    assert CostMatrix.from_coordinates(points, metric="manhattan").cost(1, 0) == pytest.approx(7.0)
    with pytest.raises(ValueError):
        CostMatrix.from_coordinates(points, metric="chebyshev")


def test_haversine_one_degree_of_latitude():
    matrix = CostMatrix.from_coordinates([(0.0, 0.0), (1.0, 0.0)], metric="haversine")
    assert matrix.cost(0, 1) == pytest.approx(2 * math.pi * 6371.0088 / 360.0, rel=1e-9)
    assert np.allclose(matrix.as_array(), matrix.as_array().T)


def test_diagonal_stays_zero():
    matrix = CostMatrix(3)
    with pytest.raises(ValueError):
        matrix.set_edge_cost(1, 1, 2.0)
    loaded = CostMatrix.from_array([[4.0, 1.0], [2.0, 7.0]])
    assert loaded.cost(0, 0) == 0.0
    assert loaded.cost(1, 1) == 0.0
    assert loaded.cost(1, 0) == 2.0
