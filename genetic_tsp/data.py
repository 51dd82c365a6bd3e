from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
import tsplib95

from .distance import DistanceMatrix


@dataclass
class Instance:
    name: str
    path: Path
    distances: DistanceMatrix
    optimum: Optional[float]


def load_distance_matrix(path: Path, delimiter: str = ";", device=None) -> DistanceMatrix:
    """Read one matrix row per line, columns separated by ``delimiter``."""
    rows = np.loadtxt(Path(path), delimiter=delimiter, dtype=np.float64, ndmin=2)
    return DistanceMatrix(rows, device=device)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(distances: DistanceMatrix, nodes: List, path: Path) -> Optional[float]:
    position = {node: i for i, node in enumerate(nodes)}
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.parse(candidate.read_text())
        if not tour_file.tours:
            continue
        tour = tour_file.tours[0]
        if any(node not in position for node in tour):
            # Tour belongs to another instance.
            continue
        return distances.tour_cost([position[node] for node in tour])
    return None


def load_tsplib(path: Path, device=None) -> Instance:
    path = Path(path)
    problem = tsplib95.load(path)
    graph = problem.get_graph()
    nodes = sorted(graph.nodes())
    distances = DistanceMatrix.from_graph(graph, nodes=nodes, device=device)
    optimum = _load_optimum(distances, nodes, path)
    return Instance(name=problem.name or path.stem, path=path, distances=distances, optimum=optimum)


def load_instance(path: Path, delimiter: str = ";", device=None) -> Instance:
    path = Path(path)
    if path.suffix.lower() == ".tsp":
        return load_tsplib(path, device=device)
    distances = load_distance_matrix(path, delimiter=delimiter, device=device)
    return Instance(name=path.stem, path=path, distances=distances, optimum=None)
