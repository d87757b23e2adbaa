from .base import Point, Tour, distance, is_permutation, tour_length
from .chromosome import Individual, random_tour
from .variation import order_crossover, select, swap_mutation

__all__ = [
    "Point",
    "Tour",
    "distance",
    "tour_length",
    "is_permutation",
    "Individual",
    "random_tour",
    "select",
    "order_crossover",
    "swap_mutation",
]
