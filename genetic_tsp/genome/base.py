import random
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple


Indexes = Tuple[int, ...]


class Individual(ABC):
    """Something that can be mutated, crossed over and scored against cost data."""

    @abstractmethod
    def mutate(self, prob: float, rng: Optional[random.Random] = None) -> "Individual":
        raise NotImplementedError

    @abstractmethod
    def crossover(self, other: "Individual", rng: Optional[random.Random] = None) -> "Individual":
        raise NotImplementedError

    @abstractmethod
    def fitness(self, cost_data) -> float:
        raise NotImplementedError


class Population(ABC):
    """A collection of individuals that can be evolved and ranked."""

    @abstractmethod
    def __iter__(self) -> Iterator[Individual]:
        raise NotImplementedError

    @abstractmethod
    def evolve(self, mutate_prob: float, rng: Optional[random.Random] = None) -> "Population":
        raise NotImplementedError

    @abstractmethod
    def n_fittest(self, n: int, cost_data) -> List[Individual]:
        raise NotImplementedError
