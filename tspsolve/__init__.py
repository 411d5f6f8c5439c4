"""Greedy, MST, Held-Karp and clustering solvers for TSPLIB coordinate problems."""

__version__ = "0.1.0"
__all__ = ["tsplib", "greedy", "mst", "held_karp", "optcheck", "clustering"]