from dataclasses import dataclass
from typing import Sequence

import numpy as np

# Fitness used when every point coincides and the tour has no length.
ZERO_LENGTH_FITNESS = 1e12


def fitness(length: float) -> float:
    if np.isclose(length, 0.0, rtol=0.0, atol=1e-12):
        return ZERO_LENGTH_FITNESS
    return 1.0 / length


@dataclass(frozen=True)
class PopulationStats:
    size: int
    best_length: float
    mean_length: float
    worst_length: float
    std_length: float
    total_fitness: float


def summarize_population(population: Sequence) -> PopulationStats:
    if not population:
        inf = float("inf")
        return PopulationStats(
            size=0,
            best_length=inf,
            mean_length=inf,
            worst_length=inf,
            std_length=0.0,
            total_fitness=0.0,
        )
    lengths = np.fromiter((ind.length for ind in population), dtype=float, count=len(population))
    total = float(np.sum([ind.fitness for ind in population]))
    return PopulationStats(
        size=len(population),
        best_length=float(lengths.min()),
        mean_length=float(lengths.mean()),
        worst_length=float(lengths.max()),
        std_length=float(lengths.std()),
        total_fitness=total,
    )
