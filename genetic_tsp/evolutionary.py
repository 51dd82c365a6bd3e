import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .distance import DistanceMatrix
from .genome.route import Route
from .island import run_islands
from .population import Routes, run_generations


logger = logging.getLogger(__name__)

MUTATE_PROB = 0.5


@dataclass
class EvolutionConfig:
    population_size: int = 20
    n_generations: int = 10
    mutation_rate: float = MUTATE_PROB
    n_jobs: int = 0
    random_seed: Optional[int] = None

    def validate(self) -> None:
        _check_parameters(self.n_generations, self.population_size, self.n_jobs, self.mutation_rate)


def _check_parameters(n_generations: int, size_generation: int, n_jobs: int, mutate_prob: float) -> None:
    if n_generations < 0:
        raise ValueError(f"n_generations must be >= 0, got {n_generations}")
    if size_generation < 0:
        raise ValueError(f"size_generation must be >= 0, got {size_generation}")
    if n_jobs < 0:
        raise ValueError(f"n_jobs must be >= 0, got {n_jobs}")
    if not 0.0 <= mutate_prob <= 1.0:
        raise ValueError(f"mutation probability must be in [0, 1], got {mutate_prob}")


def evolve_population(
    initial: Routes,
    n_generations: int,
    size_generation: int,
    distance_matrix: DistanceMatrix,
    n_jobs: int = 0,
    mutate_prob: float = MUTATE_PROB,
    rng: Optional[random.Random] = None,
) -> Routes:
    """
    Run the genetic algorithm on ``initial``.

    With ``n_jobs == 0`` every generation is evolved and truncated to the
    ``size_generation`` fittest routes on the calling thread. With
    ``n_jobs > 0`` the generations are split over that many independent
    islands (see ``island.run_islands``) whose elites are merged.
    """
    _check_parameters(n_generations, size_generation, n_jobs, mutate_prob)
    n_locations = distance_matrix.dimension()
    for route in initial:
        route.validate(n_locations)
    if n_jobs == 0:
        return run_generations(
            initial, n_generations, size_generation, distance_matrix, mutate_prob, rng
        )
    return run_islands(
        initial, n_generations, size_generation, distance_matrix, n_jobs, mutate_prob, rng
    )


class EvolutionarySearch:
    def __init__(
        self,
        config: EvolutionConfig,
        distance_matrix: DistanceMatrix,
        population: Optional[Routes] = None,
        rng: Optional[random.Random] = None,
    ):
        config.validate()
        self.cfg = config
        self.distance_matrix = distance_matrix
        self.rng = rng or random.Random(config.random_seed)
        self.population = population if population is not None else Routes.random(
            config.population_size, distance_matrix.dimension(), self.rng
        )
        self.generation = 0

    def step(self) -> None:
        self.population = run_generations(
            self.population,
            1,
            self.cfg.population_size,
            self.distance_matrix,
            self.cfg.mutation_rate,
            self.rng,
        )
        self.generation += 1

    def run(self) -> Routes:
        self.population = evolve_population(
            self.population,
            self.cfg.n_generations,
            self.cfg.population_size,
            self.distance_matrix,
            n_jobs=self.cfg.n_jobs,
            mutate_prob=self.cfg.mutation_rate,
            rng=self.rng,
        )
        self.generation += self.cfg.n_generations
        logger.debug("search finished after %d generations", self.generation)
        return self.population

    def best(self) -> Tuple[Route, float]:
        fittest = self.population.n_fittest(1, self.distance_matrix)
        if not fittest:
            raise ValueError("population is empty")
        best = fittest[0]
        return best, best.fitness(self.distance_matrix)
