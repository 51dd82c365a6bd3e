import random

import numpy as np
import pytest

from genetic_tsp.distance import DistanceMatrix


def assert_permutation(indexes, n):
    assert sorted(indexes) == list(range(n))


@pytest.fixture
def small_matrix():
    return DistanceMatrix([[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [2.0, 3.0, 0.0]])


@pytest.fixture
def city_matrix():
    points = np.random.default_rng(42).uniform(0.0, 100.0, size=(12, 2))
    return DistanceMatrix.from_coordinates(points)


@pytest.fixture
def rng():
    return random.Random(1234)
