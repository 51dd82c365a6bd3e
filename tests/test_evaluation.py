import random

import pytest

from genetic_tsp.evaluation import BenchmarkResult, aggregate_results, benchmark_population, optimality_gap
from genetic_tsp.genome import Route

from .conftest import assert_permutation


class TestBenchmarkPopulation:
    def test_result(self, city_matrix):
        result = benchmark_population(5, 10, city_matrix, rng=random.Random(3))
        assert result.n_generations == 5
        assert result.size_generation == 10
        assert result.n_jobs == 0
        assert result.runtime_ms >= 0.0
        assert_permutation(result.route.indexes, 12)
        assert result.fitness == pytest.approx(result.route.fitness(city_matrix))

    def test_parallel(self, city_matrix):
        result = benchmark_population(4, 6, city_matrix, n_jobs=2, rng=random.Random(3))
        assert result.n_jobs == 2
        assert_permutation(result.route.indexes, 12)

    @pytest.mark.parametrize("size_generation", [0, -1])
    def test_empty_generation(self, city_matrix, size_generation):
        with pytest.raises(ValueError):
            benchmark_population(3, size_generation, city_matrix, rng=random.Random(3))


class TestBenchmarkResult:
    def test_gap(self):
        result = BenchmarkResult(10, 10, 0, 1.0, 110.0, Route([0, 1, 2]))
        assert result.gap(100.0) == pytest.approx(0.1)
        assert result.gap(None) == float("inf")

    def test_optimality_gap(self):
        assert optimality_gap(14.0, 14.0) == 0.0
        assert optimality_gap(21.0, 14.0) == pytest.approx(0.5)
        assert optimality_gap(21.0, None) == float("inf")
        assert optimality_gap(21.0, 0.0) == float("inf")


class TestAggregate:
    def test_empty(self):
        assert aggregate_results([])["fitness"] == float("inf")

    def test_means(self):
        results = [
            BenchmarkResult(10, 10, 0, 2.0, 10.0, Route([0, 1, 2])),
            BenchmarkResult(20, 10, 0, 4.0, 6.0, Route([0, 2, 1])),
        ]
        summary = aggregate_results(results)
        assert summary["fitness"] == pytest.approx(8.0)
        assert summary["best_fitness"] == 6.0
        assert summary["runtime_ms"] == pytest.approx(3.0)
