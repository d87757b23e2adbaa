import random
from typing import List, Optional, Sequence

from .base import Point, Tour
from .chromosome import Individual


def select(population: Sequence[Individual], rng: random.Random) -> Individual:
    """Roulette-wheel selection: pick an individual with probability
    proportional to its fitness."""
    if not population:
        raise ValueError("Cannot select from an empty population.")
    total_fitness = sum(ind.fitness for ind in population)
    r = rng.random() * total_fitness
    cumulative = 0.0
    for ind in population:
        cumulative += ind.fitness
        if cumulative >= r:
            return ind
    # Rounding can leave the running sum just short of r.
    return population[-1]


def order_crossover(
    parent1: Sequence[Point],
    parent2: Sequence[Point],
    crossover_rate: float,
    rng: random.Random,
) -> Tour:
    """Order crossover (OX).

    Keeps ``parent1[start..end]`` in place and fills the remaining slots left
    to right with the points of ``parent2`` in their original order, skipping
    points already placed. Without recombination ``parent1`` passes through
    unchanged.
    """
    if rng.random() >= crossover_rate:
        return tuple(parent1)

    size = len(parent1)
    start = rng.randrange(size)
    end = rng.randrange(size)
    if start > end:
        start, end = end, start

    child: List[Optional[Point]] = [None] * size
    placed = set()
    for i in range(start, end + 1):
        child[i] = parent1[i]
        placed.add(parent1[i].id)

    donors = (p for p in parent2 if p.id not in placed)
    for i in range(size):
        if child[i] is None:
            child[i] = next(donors)
    return tuple(child)


def swap_mutation(tour: Sequence[Point], mutation_rate: float, rng: random.Random) -> Tour:
    mutated = list(tour)
    if rng.random() >= mutation_rate:
        return tuple(mutated)
    i = rng.randrange(len(mutated))
    j = rng.randrange(len(mutated))
    mutated[i], mutated[j] = mutated[j], mutated[i]
    return tuple(mutated)
