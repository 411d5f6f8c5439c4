"""Exact TSP by Held-Karp dynamic programming with a CPU time limit."""

from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Sequence

from tspsolve.tsplib import Problem, TSPFormatError, append_result, read_problem

TIME_LIMIT = 1200.0
UNREACHABLE = 1e9
RESULTS_PATH = Path("results") / "results_held_karp.csv"
HEADER = (
    "Dataset",
    "Cities",
    "Tour_Cost",
    "Execution_Time",
    "Tour_Order",
    "Status",
)
DEFAULT_FILES = ("dataset/ulysses16.tsp", "dataset/a280.tsp")


class HeldKarp:
    """Memoised Held-Karp solver over all cities, starting from city 0.

    Once the time limit has passed, search loops stop early and the
    partial results are kept.
    """

    def __init__(self, problem: Problem, time_limit: float = TIME_LIMIT):
        self.problem = problem
        self.time_limit = time_limit
        self._full = (1 << problem.dimension) - 1
        self._memo: dict[tuple[int, int], float] = {}
        self._started = time.process_time()

    @property
    def elapsed(self) -> float:
        return time.process_time() - self._started

    def timed_out(self) -> bool:
        return self.elapsed > self.time_limit

    def _solve(self, mask: int, pos: int) -> float:
        if mask == self._full:
            return self.problem.distance(pos, 0)
        cached = self._memo.get((mask, pos))
        if cached is not None:
            return cached

        result = UNREACHABLE
        for nxt in range(self.problem.dimension):
            if mask & (1 << nxt):
                continue
            cost = self.problem.distance(pos, nxt) + self._solve(mask | (1 << nxt), nxt)
            result = min(result, cost)
            if self.timed_out():
                break

        self._memo[(mask, pos)] = result
        return result

    def cost(self) -> float:
        """Length of the shortest tour through all cities."""
        return self._solve(1, 0)

    def tour(self, start: int = 0) -> list[int]:
        """Rebuild a tour from the memoised costs; it returns to start."""
        mask = 1 << start
        pos = start
        path = [start]

        while mask != self._full:
            if self.timed_out():
                break
            best: int | None = None
            best_cost = UNREACHABLE
            for nxt in range(self.problem.dimension):
                if mask & (1 << nxt):
                    continue
                cost = self.problem.distance(pos, nxt) + self._solve(
                    mask | (1 << nxt), nxt
                )
                if cost < best_cost:
                    best_cost = cost
                    best = nxt
                if self.timed_out():
                    break
            if best is None:
                break
            path.append(best)
            mask |= 1 << best
            pos = best

        path.append(start)
        return path


def format_tour(tour: Sequence[int]) -> str:
    """Space-separated, 1-based city numbers."""
    return " ".join(str(city + 1) for city in tour)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Exact TSP by Held-Karp.")
    parser.add_argument("files", nargs="*", default=list(DEFAULT_FILES))
    parser.add_argument("--time-limit", type=float, default=TIME_LIMIT)
    args = parser.parse_args(argv)

    for filename in args.files:
        print(f"Processing {filename}...")
        try:
            problem = read_problem(filename)
        except (OSError, TSPFormatError):
            print(f"Failed to read {filename}")
            continue

        solver = HeldKarp(problem, args.time_limit)
        cost = solver.cost()
        elapsed = solver.elapsed

        if elapsed > args.time_limit or cost >= UNREACHABLE:
            print(f"{problem.name}: TIMEOUT after {elapsed:.2f}s")
            row = (problem.name, problem.dimension, -1.0, elapsed, "TIMEOUT", "TIMEOUT")
        else:
            tour = solver.tour(0)
            print(f"{problem.name}: {cost:.2f} (time: {elapsed:.2f}s)")
            print("Tour order: " + ", ".join(str(city + 1) for city in tour))
            order = format_tour(tour) if tour else "TIMEOUT"
            row = (problem.name, problem.dimension, cost, elapsed, order, "COMPLETED")
        append_result(RESULTS_PATH, HEADER, row)

    print("Done!")
    return 0