import pytest

from tspsolve.tsplib import (
    Point,
    Problem,
    TSPFormatError,
    append_result,
    parse_problem,
    read_problem,
)

SAMPLE = """NAME : tiny
COMMENT : four cities
TYPE : TSP
DIMENSION : 4
EDGE_WEIGHT_TYPE : EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 0
3 3 4
4 0 4
EOF
"""


def test_parse_header_and_cities():
    problem = parse_problem(SAMPLE.splitlines())
    assert problem.name == "tiny"
    assert problem.dimension == 4
    assert problem.edge_weight_type == "EUC_2D"
    assert problem.cities[2] == Point(3.0, 4.0)


def test_euclidean_distance():
    problem = parse_problem(SAMPLE.splitlines())
    assert problem.distance(0, 2) == 5.0


def test_distance_symmetric_and_zero_on_diagonal():
    problem = parse_problem(SAMPLE.splitlines())
    for i in range(4):
        assert problem.distance(i, i) == 0.0
        for j in range(4):
            assert problem.distance(i, j) == problem.distance(j, i)


def test_tour_cost_invariants():
    problem = parse_problem(SAMPLE.splitlines())
    tour = [0, 1, 2, 3, 0]
    assert problem.tour_cost(tour) == pytest.approx(problem.tour_cost(tour[::-1]))
    assert problem.tour_cost([0, 2]) == problem.distance(0, 2)
    assert problem.tour_cost([1]) == problem.tour_cost([])


def test_default_edge_weight_type():
    text = SAMPLE.replace("EDGE_WEIGHT_TYPE : EUC_2D\n", "")
    assert parse_problem(text.splitlines()).edge_weight_type == "EUC_2D"


def test_geo_distance():
    text = """NAME: geo
DIMENSION: 3
EDGE_WEIGHT_TYPE: GEO
NODE_COORD_SECTION
1 38.24 20.42
2 39.57 26.15
3 38.24 20.42
EOF
"""
    problem = parse_problem(text.splitlines())
    assert problem.edge_weight_type == "GEO"
    d = problem.distance(0, 1)
    assert d == problem.distance(1, 0)
    assert d == float(int(d))
    assert d > 0
    assert problem.distance(0, 2) == 1.0


def test_dimension_mismatch_raises():
    text = SAMPLE.replace("DIMENSION : 4", "DIMENSION : 5")
    with pytest.raises(TSPFormatError):
        parse_problem(text.splitlines())


def test_missing_dimension_raises():
    text = SAMPLE.replace("DIMENSION : 4\n", "")
    with pytest.raises(TSPFormatError):
        parse_problem(text.splitlines())


def test_malformed_lines_skipped_and_eof_stops():
    text = SAMPLE.replace("2 3 0\n", "2 3 0\nnot a city\n\n") + "5 9 9\n"
    problem = parse_problem(text.splitlines())
    assert problem.dimension == 4
    assert Point(9.0, 9.0) not in problem.cities


def test_read_problem_matches_parse(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(SAMPLE, encoding="utf-8")
    assert read_problem(path) == parse_problem(SAMPLE.splitlines())


def test_read_problem_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_problem(tmp_path / "absent.tsp")


def test_append_result_writes_header_once(tmp_path):
    path = tmp_path / "out" / "results.csv"
    append_result(path, ("A", "B", "C"), ("x", 3, 1.5))
    append_result(path, ("A", "B", "C"), ("y", 4, 2.25))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["A,B,C", "x,3,1.5000", "y,4,2.2500"]


def test_problem_built_directly():
    problem = Problem("p", [Point(0, 0), Point(1, 1)])
    assert problem.dimension == len(problem.cities)
    assert problem.distance(0, 1) == problem.distance(1, 0)