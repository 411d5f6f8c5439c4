import itertools
import random

import pytest

from tspsolve.greedy import greedy_tour
from tspsolve.held_karp import HeldKarp, format_tour, main
from tspsolve.tsplib import Point, Problem

RECT_TSP = """NAME : rect
DIMENSION : 4
NODE_COORD_SECTION
1 0 0
2 3 4
3 3 0
4 0 4
EOF
"""


def _random_problem(size, seed=11):
    rng = random.Random(seed)
    return Problem(
        "rand", [Point(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(size)]
    )


def _brute_force(problem):
    rest = range(1, problem.dimension)
    return min(problem.tour_cost([0, *p, 0]) for p in itertools.permutations(rest))


def test_matches_brute_force():
    problem = _random_problem(7)
    assert HeldKarp(problem).cost() == pytest.approx(_brute_force(problem))


def test_rectangle_optimum():
    problem = Problem("rect", [Point(0, 0), Point(3, 4), Point(3, 0), Point(0, 4)])
    assert HeldKarp(problem).cost() == pytest.approx(14.0)


def test_tour_realises_cost():
    problem = _random_problem(8)
    solver = HeldKarp(problem)
    cost = solver.cost()
    tour = solver.tour(0)
    assert tour[0] == tour[-1] == 0
    assert sorted(tour[:-1]) == list(range(8))
    assert problem.tour_cost(tour) == pytest.approx(cost)


def test_not_worse_than_greedy():
    problem = _random_problem(9, seed=5)
    greedy_cost = problem.tour_cost(greedy_tour(problem, 0))
    assert HeldKarp(problem).cost() <= greedy_cost + 1e-9


def test_single_city():
    problem = Problem("one", [Point(1, 1)])
    solver = HeldKarp(problem)
    assert solver.cost() == problem.tour_cost(solver.tour(0))
    assert solver.tour(0) == [0, 0]


def test_format_tour():
    assert format_tour([0, 2, 1, 0]) == "1 3 2 1"


def test_timed_out():
    problem = _random_problem(4)
    assert HeldKarp(problem, -1.0).timed_out() is True
    assert HeldKarp(problem).timed_out() is False


def test_main_completed(tmp_path, monkeypatch, capsys):
    data = tmp_path / "rect.tsp"
    data.write_text(RECT_TSP, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert main([str(data)]) == 0
    lines = (tmp_path / "results" / "results_held_karp.csv").read_text().splitlines()
    assert lines[0] == "Dataset,Cities,Tour_Cost,Execution_Time,Tour_Order,Status"
    assert lines[1].startswith("rect,4,")
    assert lines[1].endswith(",COMPLETED")
    assert "Tour order: 1" in capsys.readouterr().out


def test_main_timeout(tmp_path, monkeypatch, capsys):
    data = tmp_path / "rect.tsp"
    data.write_text(RECT_TSP, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    main(["--time-limit=-1", str(data)])
    lines = (tmp_path / "results" / "results_held_karp.csv").read_text().splitlines()
    assert lines[1].startswith("rect,4,-1.0000,")
    assert lines[1].endswith(",TIMEOUT,TIMEOUT")
    assert "rect: TIMEOUT after" in capsys.readouterr().out