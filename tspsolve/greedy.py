"""Nearest-neighbour construction of TSP tours."""

from __future__ import annotations

import argparse
import time
from pathlib import Path

from tspsolve.tsplib import Problem, TSPFormatError, append_result, read_problem

RESULTS_PATH = Path("results") / "results_greedy.csv"
HEADER = ("Dataset", "Cities", "Tour_Cost", "Execution_Time")
DEFAULT_FILES = (
    "dataset/ulysses16.tsp",
    "dataset/a280.tsp",
    "dataset/xql662.tsp",
    "dataset/kz9976.tsp",
    "dataset/mona-lisa100K.tsp",
)


def greedy_tour(problem: Problem, start: int = 0) -> list[int]:
    """Visit the nearest unvisited city each step; the tour returns to start."""
    if not 0 <= start < problem.dimension:
        raise ValueError(f"start city {start} out of range")
    remaining = [city for city in range(problem.dimension) if city != start]
    tour = [start]
    current = start
    while remaining:
        here = current
        nearest = min(remaining, key=lambda city: problem.distance(here, city))
        remaining.remove(nearest)
        tour.append(nearest)
        current = nearest
    tour.append(start)
    return tour


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Nearest-neighbour TSP tours.")
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
        tour = greedy_tour(problem, 0)
        cost = problem.tour_cost(tour)
        elapsed = time.process_time() - started

        print(f"{problem.name}: {cost:.2f} (time: {elapsed:.2f}s)")
        append_result(
            RESULTS_PATH, HEADER, (problem.name, problem.dimension, cost, elapsed)
        )

    print("Done!")
    return 0