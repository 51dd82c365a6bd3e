import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

from genetic_tsp.data import load_instance
from genetic_tsp.evaluation import aggregate_results, benchmark_population, optimality_gap
from genetic_tsp.evolutionary import EvolutionConfig, EvolutionarySearch


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def parse_range(text: str) -> List[int]:
    """``START:STOP:STEP`` with an inclusive stop, or a single integer."""
    parts = text.split(":")
    try:
        values = [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid range {text!r}")
    if len(values) == 1:
        return values
    if len(values) != 3 or values[2] <= 0:
        raise argparse.ArgumentTypeError(f"expected START:STOP:STEP with STEP > 0, got {text!r}")
    start, stop, step = values
    return list(range(start, stop + 1, step))


def solve(args) -> None:
    instance = load_instance(Path(args.path), delimiter=args.delimiter)
    log(f"loaded {instance.name} with {instance.distances.dimension()} locations")
    cfg = EvolutionConfig(
        population_size=args.size,
        n_generations=args.generations,
        mutation_rate=args.mutation_rate,
        n_jobs=args.jobs,
        random_seed=args.seed,
    )
    search = EvolutionarySearch(cfg, instance.distances)
    t0 = time.perf_counter()
    search.run()
    elapsed = time.perf_counter() - t0
    best, cost = search.best()
    log(f"finished {cfg.n_generations} generations in {elapsed:.2f}s")
    print(f"best cost: {cost:.4f}")
    if instance.optimum:
        print(f"optimum: {instance.optimum:.4f} gap: {optimality_gap(cost, instance.optimum):.2%}")
    print("route: " + " ".join(str(i) for i in best.indexes))


def benchmark(args) -> None:
    instance = load_instance(Path(args.path), delimiter=args.delimiter)
    log(f"benchmarking on {instance.name} ({instance.distances.dimension()} locations), jobs={args.jobs}")
    rng = random.Random(args.seed)
    results = []
    for n_generations in args.generations:
        for size_generation in args.sizes:
            result = benchmark_population(
                n_generations,
                size_generation,
                instance.distances,
                n_jobs=args.jobs,
                mutate_prob=args.mutation_rate,
                rng=rng,
            )
            results.append(result)
            line = (
                f"n_generations: {n_generations}, size_generation: {size_generation}, "
                f"time: {result.runtime_ms:.0f} ms, fitness: {result.fitness:.4f}"
            )
            if instance.optimum:
                line += f", gap: {result.gap(instance.optimum):.2%}"
            print(line, flush=True)
    summary = aggregate_results(results)
    log(
        f"{len(results)} runs: mean fitness={summary['fitness']:.4f} "
        f"best={summary['best_fitness']:.4f} mean time={summary['runtime_ms']:.0f} ms"
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Genetic algorithm for the travelling salesman problem")
    parser.add_argument("--verbose", action="store_true", help="Log every generation")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub):
        sub.add_argument("path", help="Distance matrix (delimited text) or TSPLIB .tsp file")
        sub.add_argument("--delimiter", default=";")
        sub.add_argument("--jobs", type=int, default=0, help="Worker threads, 0 runs sequentially")
        sub.add_argument("--mutation-rate", type=float, default=0.5)
        sub.add_argument("--seed", type=int, default=None)

    solve_parser = subparsers.add_parser("solve", help="Evolve a population and print the best route")
    add_common(solve_parser)
    solve_parser.add_argument("--generations", type=int, default=100)
    solve_parser.add_argument("--size", type=int, default=20)
    solve_parser.set_defaults(func=solve)

    bench_parser = subparsers.add_parser("benchmark", help="Time runs over generations x population sizes")
    add_common(bench_parser)
    bench_parser.add_argument("--generations", type=parse_range, default=parse_range("10:510:100"))
    bench_parser.add_argument("--sizes", type=parse_range, default=parse_range("10:40:10"))
    bench_parser.set_defaults(func=benchmark)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")
    try:
        args.func(args)
    except (ValueError, OSError) as exc:  # includes InvalidDistanceMatrix and InvalidRoute
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
