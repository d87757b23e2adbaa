import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    id: int
    x: float
    y: float


Tour = Tuple[Point, ...]


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def tour_length(tour: Sequence[Point]) -> float:
    dist = 0.0
    n = len(tour)
    if n < 2:
        return dist
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += distance(a, b)
    return float(dist)


def is_permutation(tour: Sequence[Point], points: Iterable[Point]) -> bool:
    expected = sorted(p.id for p in points)
    return sorted(p.id for p in tour) == expected
