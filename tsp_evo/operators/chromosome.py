import random
from dataclasses import dataclass
from typing import Sequence

from ..evaluation import fitness
from .base import Point, Tour, tour_length


def random_tour(points: Sequence[Point], rng: random.Random) -> Tour:
    shuffled = list(points)
    rng.shuffle(shuffled)
    return tuple(shuffled)


@dataclass(frozen=True)
class Individual:
    """One candidate tour with its cached length and fitness.

    Instances are never changed after creation; build a new one with
    :meth:`from_tour` whenever the tour changes.
    """

    tour: Tour
    length: float
    fitness: float

    @staticmethod
    def from_tour(tour: Sequence[Point]) -> "Individual":
        tour = tuple(tour)
        length = tour_length(tour)
        return Individual(tour=tour, length=length, fitness=fitness(length))

    @staticmethod
    def random(points: Sequence[Point], rng: random.Random) -> "Individual":
        return Individual.from_tour(random_tour(points, rng))

    @property
    def signature(self) -> str:
        return "-".join(str(p.id) for p in self.tour)
