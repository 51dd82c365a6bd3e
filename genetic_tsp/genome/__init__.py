from .base import Indexes, Individual, Population
from .route import Route, change_order, ordered_crossover, random_permutation
from .subsequence import Subsequence

__all__ = [
    "Indexes",
    "Individual",
    "Population",
    "Route",
    "Subsequence",
    "change_order",
    "ordered_crossover",
    "random_permutation",
]
