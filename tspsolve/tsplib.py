"""Reading TSPLIB coordinate problems, measuring tours and recording results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import pairwise
from pathlib import Path
from typing import Iterable, Sequence

GEO_RADIUS = 6378.388
DEFAULT_EDGE_WEIGHT_TYPE = "EUC_2D"
_WHITESPACE = " \t\r\n"


class TSPFormatError(ValueError):
    """Raised when text cannot be read as a TSPLIB coordinate problem."""


@dataclass(frozen=True)
class Point:
    """A city position; for GEO problems x is latitude and y longitude."""

    x: float
    y: float


def _geo_radians(value: float) -> float:
    degrees = int(value)
    return (degrees + (value - degrees) * 100.0 / 60.0) * math.pi / 180.0


@dataclass
class Problem:
    """A symmetric TSP instance given by city coordinates."""

    name: str
    cities: list[Point] = field(default_factory=list)
    edge_weight_type: str = DEFAULT_EDGE_WEIGHT_TYPE

    @property
    def dimension(self) -> int:
        return len(self.cities)

    def distance(self, i: int, j: int) -> float:
        """Distance between cities i and j under the problem's edge weight type."""
        if i == j:
            return 0.0
        a, b = self.cities[i], self.cities[j]
        if self.edge_weight_type == "GEO":
            lat1, lon1 = _geo_radians(a.x), _geo_radians(a.y)
            lat2, lon2 = _geo_radians(b.x), _geo_radians(b.y)
            q1 = math.cos(lon1 - lon2)
            q2 = math.cos(lat1 - lat2)
            q3 = math.cos(lat1 + lat2)
            arg = 0.5 * ((1.0 + q1) * q2 - (1.0 - q1) * q3)
            arg = max(-1.0, min(1.0, arg))
            return float(int(GEO_RADIUS * math.acos(arg) + 1.0))
        dx = a.x - b.x
        dy = a.y - b.y
        return math.sqrt(dx * dx + dy * dy)

    def tour_cost(self, tour: Sequence[int]) -> float:
        """Sum of the distances between consecutive cities of a tour."""
        return sum((self.distance(a, b) for a, b in pairwise(tour)), 0.0)


def _header_value(line: str) -> str | None:
    _, sep, rest = line.partition(":")
    return rest if sep else None


def _parse_coordinate(line: str) -> Point | None:
    tokens = line.split()
    if len(tokens) < 3:
        return None
    try:
        int(tokens[0])
        return Point(float(tokens[1]), float(tokens[2]))
    except ValueError:
        return None


def parse_problem(lines: Iterable[str]) -> Problem:
    """Build a Problem from the lines of a TSPLIB file."""
    name = ""
    dimension: int | None = None
    weight_type = DEFAULT_EDGE_WEIGHT_TYPE
    it = iter(lines)

    for raw in it:
        line = raw.rstrip("\n")
        if line.startswith("NAME"):
            value = _header_value(line)
            if value is not None:
                name = value.strip(_WHITESPACE)
        elif line.startswith("DIMENSION"):
            value = _header_value(line)
            if value is not None and value.split():
                try:
                    dimension = int(value.split()[0])
                except ValueError as exc:
                    raise TSPFormatError(f"bad DIMENSION: {value.strip()!r}") from exc
        elif line.startswith("EDGE_WEIGHT_TYPE"):
            value = _header_value(line)
            if value is not None and value.split():
                weight_type = value.split()[0]
        elif line.startswith("NODE_COORD_SECTION"):
            break

    cities = []
    for raw in it:
        if "EOF" in raw:
            break
        point = _parse_coordinate(raw)
        if point is not None:
            cities.append(point)

    if dimension is None:
        raise TSPFormatError("missing DIMENSION")
    if len(cities) != dimension:
        raise TSPFormatError(
            f"expected {dimension} cities, found {len(cities)}"
        )
    return Problem(name, cities, weight_type)


def read_problem(path: str | Path) -> Problem:
    """Read a TSPLIB file from disk."""
    with open(path, encoding="utf-8") as handle:
        return parse_problem(handle)


def _format_field(value: object) -> str:
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


def append_result(path: str | Path, header: Sequence[str], row: Sequence[object]) -> None:
    """Append a CSV row, writing the header first when the file is new or empty."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fresh = not path.exists() or path.stat().st_size == 0
    with path.open("a", encoding="utf-8", newline="") as handle:
        if fresh:
            handle.write(",".join(header) + "\n")
        handle.write(",".join(_format_field(value) for value in row) + "\n")