from __future__ import annotations

import logging
import math
import random
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .distance import DistanceMatrix
from .genome.base import Population
from .genome.route import Route


logger = logging.getLogger(__name__)


class Routes(Population):
    """
    Deduplicated, immutable collection of routes.

    Structurally identical routes collapse into one member; the first
    occurrence fixes the iteration order. Every operation returns a new value.
    """

    def __init__(self, routes: Iterable = ()):
        members = (r if isinstance(r, Route) else Route(r) for r in routes)
        self._routes: Tuple[Route, ...] = tuple(dict.fromkeys(members))
        self._members: FrozenSet[Route] = frozenset(self._routes)

    @classmethod
    def random(
        cls, count: int, n_locations: int, rng: Optional[random.Random] = None
    ) -> "Routes":
        if n_locations < 20 and count > math.factorial(n_locations):
            raise ValueError(
                f"cannot draw {count} distinct routes over {n_locations} locations"
            )
        seen = {}
        while len(seen) < count:
            seen.setdefault(Route.random(n_locations, rng), None)
        return cls(seen)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, route) -> bool:
        if not isinstance(route, Route):
            route = Route(route)
        return route in self._members

    def __eq__(self, other) -> bool:
        if not isinstance(other, Routes):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"Routes({[list(r.indexes) for r in self._routes]})"

    def fitnesses(self, distance_matrix: DistanceMatrix) -> List[Tuple[float, Route]]:
        costs = distance_matrix.tour_costs(self._routes)
        return list(zip(costs, self._routes))

    def n_fittest(self, n: int, distance_matrix: DistanceMatrix) -> List[Route]:
        # sorted() is stable: equal costs keep their iteration order.
        scored = sorted(self.fitnesses(distance_matrix), key=lambda x: x[0])
        return [route for _, route in scored[:n]]

    def fittest_population(self, n: int, distance_matrix: DistanceMatrix) -> "Routes":
        return Routes(self.n_fittest(n, distance_matrix))

    def evolve(self, mutate_prob: float, rng: Optional[random.Random] = None) -> "Routes":
        """
        Cross every member with every other member (both directions), mutate
        the children and return them together with the parents.
        """
        offspring = [
            main.crossover(other, rng).mutate(mutate_prob, rng)
            for i, main in enumerate(self._routes)
            for j, other in enumerate(self._routes)
            if i != j
        ]
        return Routes(offspring + list(self._routes))


def run_generations(
    population: Routes,
    n_generations: int,
    size_generation: int,
    distance_matrix: DistanceMatrix,
    mutate_prob: float,
    rng: Optional[random.Random] = None,
) -> Routes:
    """Evolve and truncate ``n_generations`` times on the calling thread."""
    for generation in range(n_generations):
        population = population.evolve(mutate_prob, rng).fittest_population(
            size_generation, distance_matrix
        )
        if logger.isEnabledFor(logging.DEBUG) and len(population):
            best = population.n_fittest(1, distance_matrix)[0]
            logger.debug(
                "generation %d: %d routes, best cost %.4f",
                generation + 1,
                len(population),
                best.fitness(distance_matrix),
            )
    return population
