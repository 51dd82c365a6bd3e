import random

import numpy as np

from genetic_tsp.distance import DistanceMatrix
from genetic_tsp.evolutionary import EvolutionConfig, EvolutionarySearch


def main():
    rng = np.random.default_rng(7)
    points = rng.uniform(0.0, 100.0, size=(25, 2))
    distances = DistanceMatrix.from_coordinates(points)

    cfg = EvolutionConfig(
        population_size=12,
        n_generations=1,
        mutation_rate=0.5,
        random_seed=7,
    )
    search = EvolutionarySearch(cfg, distances, rng=random.Random(cfg.random_seed))
    generations = 30
    for g in range(generations):
        search.step()
        best, cost = search.best()
        print(f"gen {g+1}: best cost={cost:.2f}")
    print("route:", " ".join(str(i) for i in best.indexes))


if __name__ == "__main__":
    main()
