# tspsolve

Solvers for the symmetric travelling salesman problem on TSPLIB
coordinate instances. Distances are great-circle distances for
`EDGE_WEIGHT_TYPE: GEO` and Euclidean distances for every other type.

The package holds:

- `tspsolve.tsplib`: reading problems (`parse_problem`, `read_problem`),
  the `Problem` and `Point` classes with `Problem.distance` and
  `Problem.tour_cost`, and `append_result` for CSV result files;
- `tspsolve.greedy`: the nearest-neighbour tour (`greedy_tour`);
- `tspsolve.mst`: the MST approximation — Prim's tree (`build_mst`),
  its preorder walk (`preorder_walk`), its weight (`mst_cost`) and the
  resulting tour (`mst_tour`);
- `tspsolve.held_karp`: exact Held–Karp dynamic programming with a CPU
  time limit (`HeldKarp`, `format_tour`);
- `tspsolve.clustering`: a heuristic that clusters cities with k-means++
  (`k_means_plus_plus`), solves each cluster exactly
  (`held_karp_cluster`), orders the clusters by an MST over their
  centroids (`cluster_order`) and joins their cycles (`merge_cycles`);
  `solve` runs the whole pipeline;
- `tspsolve.optcheck`: reading `.opt.tour` files (`parse_tour`,
  `read_tour`) and measuring a tour both exactly and as a sum of rounded
  distances (`tour_lengths`).

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install .[test]
pytest
```

## Command-line use

```
tsp-greedy [FILE ...]
tsp-mst [FILE ...]
tsp-held-karp [FILE ...] [--time-limit SECONDS]
tsp-clustering [FILE ...] [--seed N]
tsp-optcheck [NAME ...] [--dataset-dir DIR] [--tour-dir DIR]
```

Without file arguments the solver commands read a fixed list of
instances under `dataset/`. Files that cannot be read or do not parse
are reported with `Failed to read ...` and skipped.

`tsp-greedy`, `tsp-mst`, `tsp-held-karp` and `tsp-clustering` print the
tour cost and CPU time of each instance and append a row to
`results/results_greedy.csv`, `results/results_mst.csv`,
`results/results_held_karp.csv` or `results/results_clustering.csv`,
writing a header line when the file is new or empty. `tsp-mst` also
records the MST weight and the tour/MST ratio. `tsp-held-karp` records
the tour order (1-based) and a `COMPLETED` or `TIMEOUT` status; its
default time limit is 1200 seconds. `tsp-clustering` seeds its random
choices with 12345 unless `--seed` is given.

`tsp-optcheck` reads `<dataset-dir>/<NAME>.tsp` and
`<tour-dir>/<NAME>.opt.tour` (defaults `dataset` and `dataset_opt`,
names `a280` and `xql662`), prints the first five legs and the tour
length both as exact distances and as rounded integers. It writes no
result file.

## Library use

```python
from tspsolve.tsplib import read_problem
from tspsolve.greedy import greedy_tour
from tspsolve.mst import mst_tour
from tspsolve.held_karp import HeldKarp, format_tour
from tspsolve.clustering import solve

problem = read_problem("dataset/ulysses16.tsp")

tour = greedy_tour(problem, 0)
print(problem.tour_cost(tour))

print(problem.tour_cost(mst_tour(problem, 0)))

solver = HeldKarp(problem, 60.0)
cost = solver.cost()
if not solver.timed_out():
    print(cost, format_tour(solver.tour(0)))

print(problem.tour_cost(solve(problem, 12345)))
```

A tour is a list of zero-based city indices that starts and ends at the
same city. `parse_problem` raises `TSPFormatError` (a `ValueError`) when
`DIMENSION` is missing or malformed, or when the number of coordinates
does not match it.

## Limits

- Only coordinate problems are read: there is no support for explicit
  distance matrices or for edge weight types other than `GEO` and
  Euclidean.
- No instance or tour files come with the package; the commands expect
  them on disk.
- `HeldKarp` keeps a memo over all subsets of cities, so it is only
  practical for small instances; when the time limit passes it stops
  early and its results are partial.
- Results are written as CSV only; there is no plotting or tour
  visualisation.