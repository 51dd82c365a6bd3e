"""
Genetic algorithm for the travelling salesman problem: order crossover,
relocation mutation and elitist selection over deduplicated route populations,
with a fork-join parallel driver.
"""

from .distance import DistanceMatrix
from .errors import InvalidDistanceMatrix, InvalidRoute
from .evolutionary import EvolutionConfig, EvolutionarySearch, evolve_population
from .genome import Route, Subsequence
from .population import Routes

__all__ = [
    "data",
    "evaluation",
    "evolutionary",
    "island",
    "DistanceMatrix",
    "EvolutionConfig",
    "EvolutionarySearch",
    "InvalidDistanceMatrix",
    "InvalidRoute",
    "Route",
    "Routes",
    "Subsequence",
    "evolve_population",
]
