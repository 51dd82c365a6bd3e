import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Subsequence:
    """
    The half-open index range ``[start_index, start_index + length)``.

    It does not belong to any sequence: the same value can be applied to every
    route of a compatible length.
    """

    start_index: int
    length: int

    @property
    def end_index(self) -> int:
        return self.start_index + self.length

    @staticmethod
    def random(len_sequence: int, rng: Optional[random.Random] = None) -> "Subsequence":
        # Never empty and never the whole sequence.
        if len_sequence < 3:
            raise ValueError(f"need a sequence of at least 3 elements, got {len_sequence}")
        rng = rng or random
        start_index = rng.randint(0, len_sequence - 2)
        length = rng.randint(1, len_sequence - start_index - 1)
        return Subsequence(start_index=start_index, length=length)

    def _check(self, sequence: Sequence) -> None:
        if self.end_index > len(sequence):
            raise IndexError(
                f"subsequence [{self.start_index}, {self.end_index}) out of range "
                f"for a sequence of length {len(sequence)}"
            )

    def values_in(self, sequence: Sequence[T]) -> List[T]:
        self._check(sequence)
        return list(sequence[self.start_index : self.end_index])

    def values_before(self, sequence: Sequence[T]) -> List[T]:
        self._check(sequence)
        return list(sequence[: self.start_index])

    def values_after(self, sequence: Sequence[T]) -> List[T]:
        self._check(sequence)
        return list(sequence[self.end_index :])
