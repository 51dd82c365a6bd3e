import concurrent.futures
import copy
import logging
import math
import random
from typing import List, Optional

from .distance import DistanceMatrix
from .genome.route import Route
from .population import Routes, run_generations


logger = logging.getLogger(__name__)


def generations_per_island(n_generations: int, n_jobs: int) -> int:
    return math.ceil(n_generations / n_jobs)


def _evolve_island(
    island: int,
    population: Routes,
    n_generations: int,
    size_generation: int,
    distance_matrix: DistanceMatrix,
    mutate_prob: float,
    seed: Optional[int],
) -> List[Route]:
    rng = random.Random(seed)
    final = run_generations(
        population, n_generations, size_generation, distance_matrix, mutate_prob, rng
    )
    elites = final.n_fittest(size_generation, distance_matrix)
    logger.debug("island %d finished with %d elites", island, len(elites))
    return elites


def run_islands(
    initial: Routes,
    n_generations: int,
    size_generation: int,
    distance_matrix: DistanceMatrix,
    n_jobs: int,
    mutate_prob: float,
    rng: Optional[random.Random] = None,
) -> Routes:
    """
    Evolve ``n_jobs`` independent copies of ``initial`` on a thread pool and
    merge their elites.

    Each island runs ``ceil(n_generations / n_jobs)`` generations with its own
    random generator. Only the distance matrix is shared, read-only. The merged
    population is not truncated again, so it can hold up to
    ``n_jobs * size_generation`` routes. An exception raised on any island
    aborts the whole run.
    """
    per_island = generations_per_island(n_generations, n_jobs)
    if rng is not None:
        seeds = [rng.randrange(2 ** 32) for _ in range(n_jobs)]
    else:
        seeds = [None] * n_jobs
    logger.debug("running %d islands x %d generations", n_jobs, per_island)
    with concurrent.futures.ThreadPoolExecutor(max_workers=n_jobs) as ex:
        futures = [
            ex.submit(
                _evolve_island,
                island,
                copy.deepcopy(initial),
                per_island,
                size_generation,
                distance_matrix,
                mutate_prob,
                seeds[island],
            )
            for island in range(n_jobs)
        ]
        results = [f.result() for f in futures]
    return Routes(route for elites in results for route in elites)
