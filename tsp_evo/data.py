import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import tsplib95

from .operators.base import Point, tour_length

# Edge weight types whose node coordinates are planar; GEO and friends are not.
PLANAR_WEIGHT_TYPES = ("EUC_2D", "CEIL_2D", "ATT")


@dataclass
class Instance:
    name: str
    path: Path
    points: Tuple[Point, ...]
    optimum: Optional[float]


def generate_points(
    count: int,
    width: float,
    height: float,
    margin: float,
    rng: random.Random,
) -> Tuple[Point, ...]:
    """Uniform random points inside the canvas, keeping ``margin`` clear on every side."""
    span_x = width - 2 * margin
    span_y = height - 2 * margin
    return tuple(
        Point(id=i, x=rng.random() * span_x + margin, y=rng.random() * span_y + margin)
        for i in range(count)
    )


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(points: Tuple[Point, ...], path: Path) -> Optional[float]:
    by_id: Dict[int, Point] = {p.id: p for p in points}
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.parse(candidate.read_text())
        if not tour_file.tours:
            continue
        nodes = list(tour_file.tours[0])
        if sorted(nodes) != sorted(by_id):
            continue
        return tour_length([by_id[n] for n in nodes])
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    problem = tsplib95.load(path)
    if problem.edge_weight_type not in PLANAR_WEIGHT_TYPES:
        raise ValueError(
            f"{path} uses edge weight type {problem.edge_weight_type}; "
            f"only {', '.join(PLANAR_WEIGHT_TYPES)} are supported"
        )
    coords = problem.node_coords
    if not coords:
        raise ValueError(f"{path} has no node coordinates; only coordinate instances are supported")
    points: List[Point] = []
    for node in sorted(coords):
        x, y = coords[node][:2]
        points.append(Point(id=int(node), x=float(x), y=float(y)))
    points_t = tuple(points)
    name = problem.name or path.stem
    return Instance(name=name, path=path, points=points_t, optimum=_load_optimum(points_t, path))
