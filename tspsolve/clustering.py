"""TSP by k-means++ clustering, Held-Karp inside clusters and cycle merging."""

from __future__ import annotations

import argparse
import math
import random
import time
from dataclasses import dataclass, field
from itertools import accumulate, combinations
from pathlib import Path
from typing import Sequence

from tspsolve.mst import build_mst, preorder_walk
from tspsolve.tsplib import (
    Point,
    Problem,
    TSPFormatError,
    append_result,
    read_problem,
)

DEFAULT_SEED = 12345
MAX_CLUSTER_SIZE = 20
CITIES_PER_CLUSTER = 16
MAX_ITERATIONS = 100
CONVERGENCE = 0.001
UNREACHABLE = 1e9
RESULTS_PATH = Path("results") / "results_clustering.csv"
HEADER = ("Dataset", "Cities", "Tour_Cost", "Execution_Time")
DEFAULT_FILES = (
    "dataset/ulysses16.tsp",
    "dataset/a280.tsp",
    "dataset/xql662",
    "dataset/kz9976.tsp",
)


@dataclass
class Cluster:
    """A group of city indices and the mean of their positions."""

    city_indices: list[int] = field(default_factory=list)
    centroid: Point = Point(0.0, 0.0)


def point_distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def _centroid(problem: Problem, members: Sequence[int]) -> Point:
    count = len(members)
    return Point(
        sum(problem.cities[i].x for i in members) / count,
        sum(problem.cities[i].y for i in members) / count,
    )


def held_karp_cluster(problem: Problem, cluster: Sequence[int]) -> tuple[float, list[int]]:
    """Shortest closed tour through the cluster's cities, starting at its first city.

    Returns the tour's cost and the tour, which ends where it starts.
    """
    if not cluster:
        raise ValueError("cluster has no cities")
    size = len(cluster)
    if size == 1:
        return 0.0, [cluster[0], cluster[0]]

    full = (1 << size) - 1
    memo: dict[tuple[int, int], float] = {}

    def leg(a: int, b: int) -> float:
        return problem.distance(cluster[a], cluster[b])

    def best(mask: int, pos: int) -> float:
        if mask == full:
            return leg(pos, 0)
        cached = memo.get((mask, pos))
        if cached is not None:
            return cached
        result = UNREACHABLE
        for nxt in range(size):
            if mask & (1 << nxt):
                continue
            result = min(result, leg(pos, nxt) + best(mask | (1 << nxt), nxt))
        memo[(mask, pos)] = result
        return result

    total = best(1, 0)

    tour = [cluster[0]]
    mask, pos = 1, 0
    while mask != full:
        chosen = -1
        chosen_cost = UNREACHABLE
        for nxt in range(size):
            if mask & (1 << nxt):
                continue
            cost = leg(pos, nxt) + best(mask | (1 << nxt), nxt)
            if cost < chosen_cost:
                chosen_cost = cost
                chosen = nxt
        tour.append(cluster[chosen])
        mask |= 1 << chosen
        pos = chosen
    tour.append(cluster[0])
    return total, tour


def _split(problem: Problem, members: Sequence[int]) -> tuple[list[int], list[int]]:
    """Divide an oversized cluster in two around its farthest pair of cities."""
    size = len(members)
    half = size // 2
    dist = [[problem.distance(a, b) for b in members] for a in members]

    seed1 = seed2 = 0
    farthest = 0.0
    for j, k in combinations(range(size), 2):
        if dist[j][k] > farthest:
            farthest = dist[j][k]
            seed1, seed2 = j, k

    group1 = [seed1]
    group2 = [seed2]
    assigned = {seed1, seed2}

    for _ in range(size - 2):
        unassigned = [j for j in range(size) if j not in assigned]
        if not unassigned:
            break
        if len(group1) >= half:
            pick = unassigned[0]
            group2.append(pick)
        elif len(group2) >= half:
            pick = unassigned[0]
            group1.append(pick)
        else:
            pick = -1
            best_score = -UNREACHABLE
            to_first = False
            for j in unassigned:
                d1 = min([UNREACHABLE, *(dist[j][m] for m in group1)])
                d2 = min([UNREACHABLE, *(dist[j][m] for m in group2)])
                if d2 - d1 > best_score:
                    best_score = d2 - d1
                    pick = j
                    to_first = True
                if d1 - d2 > best_score:
                    best_score = d1 - d2
                    pick = j
                    to_first = False
            (group1 if to_first else group2).append(pick)
        assigned.add(pick)

    return [members[j] for j in group1], [members[j] for j in group2]


def k_means_plus_plus(problem: Problem, k: int, seed: int = DEFAULT_SEED) -> list[Cluster]:
    """Cluster cities by k-means with k-means++ seeding.

    Empty clusters are dropped, and clusters larger than MAX_CLUSTER_SIZE
    are split in two until none is.
    """
    size = problem.dimension
    if size == 0:
        raise ValueError("problem has no cities")
    if k < 1:
        raise ValueError("k must be at least 1")

    cities = problem.cities
    rng = random.Random(seed)
    centroids = [cities[rng.randint(0, size - 1)]]

    for _ in range(1, k):
        weights = [
            min([UNREACHABLE, *(point_distance(city, c) for c in centroids)]) ** 2
            for city in cities
        ]
        r = rng.uniform(0.0, sum(weights))
        selected = next(
            (j for j, total in enumerate(accumulate(weights)) if total >= r), 0
        )
        centroids.append(cities[selected])

    members: list[list[int]] = [[] for _ in range(k)]
    for _ in range(MAX_ITERATIONS):
        members = [[] for _ in range(k)]
        for idx, city in enumerate(cities):
            nearest = min(range(k), key=lambda j: point_distance(city, centroids[j]))
            members[nearest].append(idx)

        converged = True
        for i, group in enumerate(members):
            if not group:
                continue
            updated = _centroid(problem, group)
            if point_distance(centroids[i], updated) > CONVERGENCE:
                converged = False
            centroids[i] = updated
        if converged:
            break

    clusters = [
        Cluster(group, centroids[i]) for i, group in enumerate(members) if group
    ]

    for cluster in clusters:
        while len(cluster.city_indices) > MAX_CLUSTER_SIZE:
            kept, moved = _split(problem, cluster.city_indices)
            cluster.city_indices = kept
            cluster.centroid = _centroid(problem, kept)
            clusters.append(Cluster(moved, _centroid(problem, moved)))

    return clusters


def cluster_order(clusters: Sequence[Cluster]) -> list[int]:
    """Visiting order of clusters: preorder of the MST over their centroids."""
    if len(clusters) <= 1:
        return list(range(len(clusters)))
    centroids = Problem("clusters", [cluster.centroid for cluster in clusters])
    edges = build_mst(centroids, 0)
    return preorder_walk(len(clusters), edges, 0)


def merge_cycles(
    problem: Problem, cycle_a: Sequence[int], cycle_b: Sequence[int]
) -> list[int]:
    """Join two closed cycles at the cheapest pair of connection cities.

    The two connection cities are left out of the joined cycle, and the
    first city of either cycle is never chosen as one.
    """
    if not cycle_a or not cycle_b:
        return []
    ring_a = list(cycle_a[:-1])
    ring_b = list(cycle_b[:-1])
    best_cost = UNREACHABLE
    merged: list[int] = []

    for node_a in cycle_a:
        if node_a == cycle_a[-1]:
            continue
        pos_a = ring_a.index(node_a)
        prev_a = ring_a[(pos_a - 1) % len(ring_a)]
        next_a = ring_a[(pos_a + 1) % len(ring_a)]
        removed_a = problem.distance(prev_a, node_a) + problem.distance(node_a, next_a)
        added_a = problem.distance(prev_a, next_a)

        for node_b in cycle_b:
            if node_b == cycle_b[-1]:
                continue
            pos_b = ring_b.index(node_b)
            prev_b = ring_b[(pos_b - 1) % len(ring_b)]
            next_b = ring_b[(pos_b + 1) % len(ring_b)]
            removed_b = problem.distance(prev_b, node_b) + problem.distance(node_b, next_b)
            added_b = problem.distance(prev_b, next_b)

            total = (
                problem.distance(node_a, node_b)
                + added_a
                + added_b
                - removed_a
                - removed_b
            )
            if total < best_cost:
                best_cost = total
                merged = [c for c in ring_a if c != node_a]
                merged += [c for c in ring_b if c != node_b]
                if merged:
                    merged.append(merged[0])
    return merged


def solve(problem: Problem, seed: int = DEFAULT_SEED) -> list[int]:
    """Closed tour built from per-cluster optimal cycles merged in MST order."""
    k = max(1, problem.dimension // CITIES_PER_CLUSTER)
    clusters = k_means_plus_plus(problem, k, seed)
    tours = [held_karp_cluster(problem, c.city_indices)[1] for c in clusters]
    order = cluster_order(clusters)
    final = tours[order[0]]
    for idx in order[1:]:
        final = merge_cycles(problem, final, tours[idx])
    return final


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Clustered Held-Karp TSP heuristic.")
    parser.add_argument("files", nargs="*", default=list(DEFAULT_FILES))
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    args = parser.parse_args(argv)

    for filename in args.files:
        print(f"Processing {filename}...")
        try:
            problem = read_problem(filename)
        except (OSError, TSPFormatError):
            print(f"Failed to read {filename}")
            continue

        started = time.process_time()
        k = max(1, problem.dimension // CITIES_PER_CLUSTER)
        clusters = k_means_plus_plus(problem, k, args.seed)
        print("Clustering completed")

        tours = []
        for number, cluster in enumerate(clusters, start=1):
            print(
                f"Solving cluster {number}/{len(clusters)} "
                f"(size: {len(cluster.city_indices)})"
            )
            tours.append(held_karp_cluster(problem, cluster.city_indices)[1])

        order = cluster_order(clusters)
        final = tours[order[0]]
        for idx in order[1:]:
            final = merge_cycles(problem, final, tours[idx])

        cost = problem.tour_cost(final)
        elapsed = time.process_time() - started

        print(f"{problem.name}: {cost:.2f} (time: {elapsed:.2f}s)")
        append_result(
            RESULTS_PATH, HEADER, (problem.name, problem.dimension, cost, elapsed)
        )

    print("Done!")
    return 0