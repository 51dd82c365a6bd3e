from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

import networkx as nx
import numpy as np
import torch

from .errors import InvalidDistanceMatrix, InvalidRoute


class DistanceMatrix:
    """
    Immutable symmetric cost table between locations 0..n.

    The numpy array is the reference representation; a float64 torch copy is
    kept next to it for batched evaluation of whole populations.
    """

    def __init__(self, distances, device=None, validate: bool = True):
        try:
            array = np.array(distances, dtype=np.float64)
        except ValueError as exc:
            raise InvalidDistanceMatrix(f"distances are not a numeric table: {exc}") from exc
        if validate:
            _check_distances(array)
        array.setflags(write=False)
        self._distances = array
        self.device = torch.device(device) if device is not None else torch.device("cpu")
        self._tensor = torch.from_numpy(np.array(array)).to(self.device)

    @classmethod
    def from_coordinates(cls, points, device=None) -> "DistanceMatrix":
        coords = np.asarray(points, dtype=np.float64)
        if coords.ndim == 1:
            coords = coords[:, None]
        diff = coords[:, None, :] - coords[None, :, :]
        return cls(np.sqrt((diff ** 2).sum(axis=-1)), device=device)

    @classmethod
    def from_graph(
        cls, graph: nx.Graph, nodes: Optional[Sequence] = None, device=None
    ) -> "DistanceMatrix":
        # Row i of the matrix belongs to nodes[i].
        if nodes is None:
            nodes = sorted(graph.nodes())
        array = nx.to_numpy_array(graph, nodelist=list(nodes), weight="weight")
        np.fill_diagonal(array, 0.0)
        return cls(array, device=device)

    def dimension(self) -> int:
        return self._distances.shape[0]

    def __len__(self) -> int:
        return self.dimension()

    def __getitem__(self, key):
        return self._distances[key]

    @property
    def distances(self) -> np.ndarray:
        return self._distances

    @property
    def tensor(self) -> torch.Tensor:
        return self._tensor

    def tour_cost(self, route: Iterable[int]) -> float:
        """
        Cost of the closed walk visiting ``route`` in order and returning to
        its first entry. Repeated or missing locations are allowed.
        """
        idx = np.fromiter(getattr(route, "indexes", route), dtype=np.int64)
        if idx.size == 0:
            raise InvalidRoute("cannot compute the cost of an empty route")
        n = self.dimension()
        if idx.min() < 0 or idx.max() >= n:
            raise InvalidRoute(f"route visits locations outside [0, {n})")
        return float(self._distances[idx, np.roll(idx, -1)].sum())

    def tour_costs(self, routes: Iterable) -> List[float]:
        """
        ``tour_cost`` for many routes at once.

        Routes are grouped by length and every group is evaluated with a single
        gather on the torch copy of the matrix.
        """
        sequences = [tuple(getattr(route, "indexes", route)) for route in routes]
        costs = [0.0] * len(sequences)
        by_length: Dict[int, List[int]] = defaultdict(list)
        for pos, seq in enumerate(sequences):
            if not seq:
                raise InvalidRoute("cannot compute the cost of an empty route")
            by_length[len(seq)].append(pos)
        n = self.dimension()
        for positions in by_length.values():
            idx = torch.tensor(
                [sequences[pos] for pos in positions], dtype=torch.long, device=self.device
            )
            if idx.min().item() < 0 or idx.max().item() >= n:
                raise InvalidRoute(f"route visits locations outside [0, {n})")
            values = self._tensor[idx, idx.roll(-1, dims=1)].sum(dim=1)
            for pos, value in zip(positions, values.tolist()):
                costs[pos] = value
        return costs

    def __repr__(self) -> str:
        return f"DistanceMatrix(n={self.dimension()}, device={self.device})"


def _check_distances(array: np.ndarray) -> None:
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise InvalidDistanceMatrix(f"distance matrix must be square, got shape {array.shape}")
    if array.shape[0] == 0:
        raise InvalidDistanceMatrix("distance matrix is empty")
    if np.isnan(array).any():
        raise InvalidDistanceMatrix("distance matrix contains NaN")
    if (array < 0).any():
        raise InvalidDistanceMatrix("distances must be non-negative")
    if (np.diagonal(array) != 0).any():
        raise InvalidDistanceMatrix("distance from a location to itself must be 0")
    if not np.allclose(array, array.T):
        raise InvalidDistanceMatrix("distance matrix must be symmetric")
