import logging

import pytest

from ErrandTSP import (
    CostMatrix,
    GtspSolver,
    MissingEdgeError,
    NodeIndexError,
    SolverNotImplementedError,
    StartingPointNotSetError,
    StartingPointOutOfRangeError,
    TspSolver,
    UninitializedGraphError,
    UnsupportedOperationError,
)
from tests.helpers import assert_valid_tour, build_solver, euclidean_costs, random_costs

STRATEGIES = [
    "solve",
    "solve_with_backtracking",
    "solve_with_dynamic_programming",
    "solve_with_nearest_neighbor_and_2opt",
]


@pytest.mark.parametrize("method", STRATEGIES)
def test_square_scenario(square_solver, method):
    tour = getattr(square_solver, method)()
    assert tour == [0, 1, 2, 3]
    assert square_solver.tour_cost(tour) == pytest.approx(5.0)


def test_solve_before_starting_point():
    solver = TspSolver()
    solver.initialize(4)
    with pytest.raises(StartingPointNotSetError):
        solver.solve()


@pytest.mark.parametrize("method", STRATEGIES)
def test_every_strategy_checks_the_starting_point(method):
    solver = build_solver(random_costs(5, seed=1))
    solver.set_starting_point(5)
    with pytest.raises(StartingPointOutOfRangeError):
        getattr(solver, method)()


def test_starting_point_is_validated_lazily():
    solver = build_solver(random_costs(4, seed=2))
    solver.set_starting_point(10)
    assert solver.starting_point == 10
    solver.set_starting_point(3)
    assert solver.solve()[0] == 3


@pytest.mark.parametrize("method", STRATEGIES)
def test_uninitialized_graph(method):
    solver = TspSolver()
    solver.set_starting_point(0)
    with pytest.raises(UninitializedGraphError):
        getattr(solver, method)()


def test_edge_before_initialize():
    with pytest.raises(UninitializedGraphError):
        TspSolver().set_edge_cost(0, 1, 1.0)


def test_empty_graph_counts_as_uninitialized():
    solver = TspSolver()
    solver.initialize(0)
    solver.set_starting_point(0)
    with pytest.raises(UninitializedGraphError):
        solver.solve()


def test_edge_index_out_of_range(square_solver):
    with pytest.raises(NodeIndexError):
        square_solver.set_edge_cost(5, 0, 1.0)
    with pytest.raises(IndexError):
        square_solver.set_edge_cost(0, -1, 1.0)


def test_missing_edge_fails_fast():
    solver = TspSolver()
    solver.initialize(3)
    solver.set_edge_cost(0, 1, 1.0)
    solver.set_edge_cost(1, 2, 1.0)
    solver.set_edge_cost(2, 0, 1.0)
    solver.set_starting_point(0)
    with pytest.raises(MissingEdgeError):
        solver.solve()


def test_single_node():
    solver = TspSolver()
    solver.initialize(1)
    solver.set_starting_point(0)
    for method in STRATEGIES:
        assert getattr(solver, method)() == [0]
    assert solver.run().cost == 0.0


@pytest.mark.parametrize(
    "n, expected",
    [(2, "backtracking"), (7, "backtracking"), (8, "held_karp"), (12, "held_karp"), (20, "two_opt"), (30, "two_opt")],
)
def test_dispatch_by_size(n, expected):
    solver = build_solver(euclidean_costs(n, seed=n), start=1)
    result = solver.run()
    assert result.metadata["selected_solver"] == expected
    assert result.metadata["dispatched"] is True
    assert_valid_tour(result.path, n, 1)


def test_dispatch_thresholds_are_configurable():
    solver = build_solver(random_costs(6, seed=4), selector_kwargs={"backtracking_limit": 4, "dynamic_programming_limit": 6})
    assert solver.run().metadata["selected_solver"] == "two_opt"


def test_solver_kwargs_reach_the_strategy():
    solver = build_solver(random_costs(7, seed=8), solver_kwargs={"backtracking": {"prune": True}})
    assert solver.run("backtracking").metadata["pruned"] > 0


def test_exact_strategies_agree_through_the_front_end():
    costs = random_costs(8, seed=13)
    solver = build_solver(costs, start=6)
    bt = solver.solve_with_backtracking()
    dp = solver.solve_with_dynamic_programming()
    assert solver.tour_cost(bt) == pytest.approx(solver.tour_cost(dp))
    assert solver.tour_cost(solver.solve_with_nearest_neighbor_and_2opt()) >= solver.tour_cost(dp) - 1e-9


def test_results_are_fresh_and_repeatable():
    solver = build_solver(random_costs(6, seed=6), start=2)
    first = solver.solve()
    first.append(99)
    assert solver.solve() == first[:-1]


def test_run_reports_metadata(square_solver, caplog):
    with caplog.at_level(logging.INFO, logger="ErrandTSP.core"):
        result = square_solver.run()
    assert result.metadata["n_nodes"] == 4
    assert result.metadata["starting_point"] == 0
    assert "Dispatching 4-node instance to backtracking" in caplog.text


def test_run_unknown_strategy(square_solver):
    with pytest.raises(KeyError):
        square_solver.run("simulated_annealing")


def test_groups_are_unsupported(square_solver):
    with pytest.raises(UnsupportedOperationError):
        square_solver.set_group_for_node(0, 1)


def test_genetic_algorithm_is_not_implemented(square_solver):
    with pytest.raises(SolverNotImplementedError):
        square_solver.solve_with_genetic_algorithm()
    with pytest.raises(NotImplementedError):
        square_solver.run("genetic_algorithm")


def test_tour_cost_checks_indices(square_solver):
    with pytest.raises(NodeIndexError):
        square_solver.tour_cost([0, 1, 9])


def test_gtsp_surface():
    solver = GtspSolver()
    with pytest.raises(UninitializedGraphError):
        solver.set_group_for_node(0, 0)
    solver.initialize(3)
    solver.set_group_for_node(0, 0)
    solver.set_group_for_node(1, 1)
    solver.set_group_for_node(2, 1)
    assert solver.groups == {0: 0, 1: 1, 2: 1}
    with pytest.raises(NodeIndexError):
        solver.set_group_for_node(3, 2)
    solver.set_starting_point(0)
    for method in ("solve_gtsp", "solve_gtsp_with_backtracking", "solve_gtsp_with_genetic_algorithm"):
        with pytest.raises(SolverNotImplementedError):
            getattr(solver, method)()
    solver.initialize(2)
    assert solver.groups == {}


def test_tour_cost_with_an_unset_leg():
    solver = TspSolver()
    solver.initialize(3)
    solver.set_edge_cost(0, 1, 1.0)
    with pytest.raises(MissingEdgeError) as excinfo:
        solver.tour_cost([0, 1, 2])
    assert (excinfo.value.from_node, excinfo.value.to_node) == (1, 2)


def test_single_node_ignores_self_loop_costs():
    solver = TspSolver()
    solver.initialize(1)
    with pytest.raises(ValueError):
        solver.set_edge_cost(0, 0, 5.0)
    solver.load_matrix(CostMatrix.from_array([[5.0]]))
    solver.set_starting_point(0)
    for strategy in ("backtracking", "held_karp", "two_opt", None):
        assert solver.run(strategy).cost == 0.0
    assert solver.tour_cost([0]) == 0.0
