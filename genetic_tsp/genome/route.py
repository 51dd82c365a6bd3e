from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from ..errors import InvalidRoute
from .base import Indexes, Individual
from .subsequence import Subsequence


def random_permutation(n_locations: int, rng: Optional[random.Random] = None) -> List[int]:
    rng = rng or random
    indexes = list(range(n_locations))
    rng.shuffle(indexes)
    return indexes


def change_order(data: Sequence[int], put_before_idx: int, move_idx: int) -> Indexes:
    """Move the element at ``move_idx`` so that it lands right before ``put_before_idx``."""
    if put_before_idx == move_idx:
        return tuple(data)
    items = list(data)
    item = items.pop(move_idx)
    # Popping from the left shifts the target one place down.
    items.insert(put_before_idx - (move_idx < put_before_idx), item)
    return tuple(items)


def ordered_crossover(parent_a: "Route", parent_b: "Route", subsequence: Subsequence) -> "Route":
    """
    Order crossover (OX1).

    The child keeps ``parent_a``'s values inside ``subsequence`` at their
    positions; the free positions are filled left to right with the remaining
    values in the order they have in ``parent_b``.
    """
    if len(parent_a) != len(parent_b):
        raise InvalidRoute(
            f"cannot cross routes of different lengths ({len(parent_a)} and {len(parent_b)})"
        )
    segment = subsequence.values_in(parent_a.indexes)
    kept = set(segment)
    filler = [idx for idx in parent_b.indexes if idx not in kept]
    gap = Subsequence(subsequence.start_index, 0)
    return Route(gap.values_before(filler) + segment + gap.values_after(filler))


@dataclass(frozen=True)
class Route(Individual):
    """A tour: the order in which the locations are visited."""

    indexes: Indexes

    def __post_init__(self):
        if not isinstance(self.indexes, tuple):
            object.__setattr__(self, "indexes", tuple(self.indexes))

    @staticmethod
    def random(n_locations: int, rng: Optional[random.Random] = None) -> "Route":
        return Route(random_permutation(n_locations, rng))

    def __len__(self) -> int:
        return len(self.indexes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indexes)

    def mutate(self, prob: float, rng: Optional[random.Random] = None) -> "Route":
        """
        Relocate a single location with probability ``prob``.

        An insertion point ``p`` is drawn from ``[0, n-2]``, then an element from
        any other position except ``p - 1`` (moving it before ``p`` would be a
        no-op) is moved in front of it.
        """
        rng = rng or random
        n = len(self.indexes)
        if n < 2 or rng.random() >= prob:
            return self
        put_before_idx = rng.randint(0, n - 2)
        candidates = [i for i in range(n) if i != put_before_idx and i != put_before_idx - 1]
        move_idx = rng.choice(candidates) if candidates else (put_before_idx + 1) % n
        return Route(change_order(self.indexes, put_before_idx, move_idx))

    def crossover(self, other: "Route", rng: Optional[random.Random] = None) -> "Route":
        if len(self.indexes) < 3:
            # OX1 can only reproduce the first parent on routes this short.
            return Route(self.indexes)
        return ordered_crossover(self, other, Subsequence.random(len(self.indexes), rng))

    def fitness(self, distance_matrix) -> float:
        """Tour cost of the route; lower is fitter."""
        return distance_matrix.tour_cost(self.indexes)

    def validate(self, n_locations: int) -> None:
        if sorted(self.indexes) != list(range(n_locations)):
            raise InvalidRoute(
                f"route {list(self.indexes)} is not a permutation of 0..{n_locations - 1}"
            )
