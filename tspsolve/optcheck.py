"""Reading TSPLIB optimal tours and measuring their length."""

from __future__ import annotations

import argparse
import re
import sys
from itertools import islice, pairwise
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from tspsolve.tsplib import Problem, TSPFormatError, read_problem

DEFAULT_NAMES = ("a280", "xql662")
_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_tour(lines: Iterable[str]) -> list[int]:
    """0-based cities of a TOUR_SECTION, closed by repeating the first city."""
    tour: list[int] = []
    reading = False
    for raw in lines:
        line = raw.rstrip("\n")
        if "TOUR_SECTION" in line:
            reading = True
            continue
        if line in ("-1", "EOF"):
            break
        if not reading:
            continue
        trimmed = line.strip(" \t\r\n")
        if not trimmed or trimmed == "EOF":
            continue
        match = _LEADING_INT.match(trimmed)
        if match is None:
            continue
        city = int(match.group())
        if city > 0:
            tour.append(city - 1)
    if tour:
        tour.append(tour[0])
    return tour


def read_tour(path: str | Path) -> list[int]:
    """Read a .tour file from disk."""
    with open(path, encoding="utf-8") as handle:
        return parse_tour(handle)


def _legs(problem: Problem, tour: Sequence[int]) -> Iterator[tuple[int, int, float]]:
    for a, b in pairwise(tour):
        yield a, b, problem.distance(a, b)


def tour_lengths(problem: Problem, tour: Sequence[int]) -> tuple[float, int]:
    """Tour length as exact distances and as a sum of rounded distances."""
    total = 0.0
    rounded = 0
    for _, _, dist in _legs(problem, tour):
        total += dist
        rounded += int(dist + 0.5)
    return total, rounded


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Measure known optimal tours.")
    parser.add_argument("names", nargs="*", default=list(DEFAULT_NAMES))
    parser.add_argument("--dataset-dir", default="dataset")
    parser.add_argument("--tour-dir", default="dataset_opt")
    args = parser.parse_args(argv)

    for name in args.names:
        try:
            problem = read_problem(Path(args.dataset_dir) / f"{name}.tsp")
        except (OSError, TSPFormatError):
            continue
        try:
            tour = read_tour(Path(args.tour_dir) / f"{name}.opt.tour")
        except OSError:
            print(f"Failed to read tour for {name}", file=sys.stderr)
            continue

        print(f"Tour has {len(tour)} cities (including return)")
        for a, b, dist in islice(_legs(problem, tour), 5):
            print(f"City {a + 1} to {b + 1}: {dist:g} (int: {int(dist + 0.5)})")

        total, rounded = tour_lengths(problem, tour)
        print(f"{name} optimal tour length (double): {total:g}")
        print(f"{name} optimal tour length (int): {rounded}")
    return 0