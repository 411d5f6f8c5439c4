"""Tours from a preorder walk of a minimum spanning tree."""

from __future__ import annotations

import argparse
import math
import time
from pathlib import Path
from typing import Sequence

from tspsolve.tsplib import Problem, TSPFormatError, append_result, read_problem

RESULTS_PATH = Path("results") / "results_mst.csv"
HEADER = (
    "Dataset",
    "Cities",
    "Tour_Cost",
    "MST_Cost",
    "Approximation_Ratio",
    "Execution_Time",
)
DEFAULT_FILES = (
    "dataset/ulysses16.tsp",
    "dataset/a280.tsp",
    "dataset/xql662.tsp",
    "dataset/kz9976.tsp",
    "dataset/mona-lisa100K.tsp",
)

Edge = tuple[int, int]


def build_mst(problem: Problem, root: int = 0) -> list[Edge]:
    """Prim's algorithm; edges are (parent, child) in the order they join the tree."""
    size = problem.dimension
    in_tree = [False] * size
    min_edge = [math.inf] * size
    parent: list[int | None] = [None] * size
    min_edge[root] = 0.0
    edges: list[Edge] = []

    for _ in range(size):
        u = min((v for v in range(size) if not in_tree[v]), key=min_edge.__getitem__)
        in_tree[u] = True
        if parent[u] is not None:
            edges.append((parent[u], u))
        for v in range(size):
            if not in_tree[v]:
                weight = problem.distance(u, v)
                if weight < min_edge[v]:
                    min_edge[v] = weight
                    parent[v] = u
    return edges


def preorder_walk(size: int, edges: Sequence[Edge], root: int = 0) -> list[int]:
    """Preorder of the tree, children visited in the order their edges appear."""
    children: list[list[int]] = [[] for _ in range(size)]
    for parent, child in edges:
        children[parent].append(child)

    order = []
    stack = [root]
    while stack:
        current = stack.pop()
        order.append(current)
        stack.extend(reversed(children[current]))
    return order


def mst_cost(problem: Problem, edges: Sequence[Edge]) -> float:
    """Total weight of the given edges."""
    return sum((problem.distance(a, b) for a, b in edges), 0.0)


def mst_tour(problem: Problem, root: int = 0) -> list[int]:
    """Closed tour visiting cities in MST preorder."""
    tour = preorder_walk(problem.dimension, build_mst(problem, root), root)
    tour.append(tour[0])
    return tour


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="MST-based TSP approximation.")
    parser.add_argument("files", nargs="*", default=list(DEFAULT_FILES))
    args = parser.parse_args(argv)

    for filename in args.files:
        print(f"Processing {filename}...")
        try:
            problem = read_problem(filename)
        except (OSError, TSPFormatError):
            print(f"Failed to read {filename}")
            continue

        started = time.process_time()
        edges = build_mst(problem, 0)
        tree_cost = mst_cost(problem, edges)
        tour = preorder_walk(problem.dimension, edges, 0)
        tour.append(tour[0])
        cost = problem.tour_cost(tour)
        elapsed = time.process_time() - started

        ratio = cost / tree_cost if tree_cost else math.nan
        print(f"{problem.name}: {cost:.2f} (ratio: {ratio:.2f})")
        append_result(
            RESULTS_PATH,
            HEADER,
            (problem.name, problem.dimension, cost, tree_cost, ratio, elapsed),
        )

    print("Done!")
    return 0