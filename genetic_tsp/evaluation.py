import random
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .distance import DistanceMatrix
from .evolutionary import MUTATE_PROB, evolve_population
from .genome.route import Route
from .population import Routes


def optimality_gap(cost: float, optimum: Optional[float]) -> float:
    """Relative excess of ``cost`` over a known optimum, ``inf`` when none is known."""
    if not optimum:
        return float("inf")
    return (cost - optimum) / optimum


@dataclass
class BenchmarkResult:
    n_generations: int
    size_generation: int
    n_jobs: int
    runtime_ms: float
    fitness: float
    route: Route

    def gap(self, optimum: Optional[float]) -> float:
        return optimality_gap(self.fitness, optimum)


def benchmark_population(
    n_generations: int,
    size_generation: int,
    distance_matrix: DistanceMatrix,
    n_jobs: int = 0,
    mutate_prob: float = MUTATE_PROB,
    rng: Optional[random.Random] = None,
) -> BenchmarkResult:
    """Evolve a fresh random population and time the run end to end."""
    if size_generation < 1:
        raise ValueError(f"size_generation must be >= 1 to benchmark, got {size_generation}")
    start = time.perf_counter()
    final = evolve_population(
        Routes.random(size_generation, distance_matrix.dimension(), rng),
        n_generations,
        size_generation,
        distance_matrix,
        n_jobs=n_jobs,
        mutate_prob=mutate_prob,
        rng=rng,
    )
    runtime = time.perf_counter() - start
    best = final.n_fittest(1, distance_matrix)[0]
    return BenchmarkResult(
        n_generations=n_generations,
        size_generation=size_generation,
        n_jobs=n_jobs,
        runtime_ms=runtime * 1000.0,
        fitness=best.fitness(distance_matrix),
        route=best,
    )


def aggregate_results(results: List[BenchmarkResult]) -> Dict[str, float]:
    if not results:
        return {"fitness": float("inf"), "best_fitness": float("inf"), "runtime_ms": float("inf")}
    fitness = sum(r.fitness for r in results) / len(results)
    runtime = sum(r.runtime_ms for r in results) / len(results)
    return {
        "fitness": fitness,
        "best_fitness": min(r.fitness for r in results),
        "runtime_ms": runtime,
    }
