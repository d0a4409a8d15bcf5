import argparse
import logging
import time
from pathlib import Path

from salesman_ga import rng
from salesman_ga.data import Instance, load_instance, random_instance
from salesman_ga.evolutionary import EvolutionConfig, EvolutionarySearch
from salesman_ga.statistics import (
    JsonLinesSink,
    LoggingSink,
    StatisticsReporter,
    read_statistics,
)


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _load(args) -> Instance:
    if args.tsplib:
        return load_instance(Path(args.tsplib))
    return random_instance(args.destinations)


def _step(search: EvolutionarySearch, cfg: EvolutionConfig) -> None:
    search.reproduce()
    if cfg.mutate_duplicates:
        search.repair_duplicates()


def run(args) -> None:
    if args.seed is not None:
        rng.seed(args.seed)
    instance = _load(args)
    log(f"instance {instance.name}: origin=({instance.origin}) destinations={len(instance.destinations)}")

    cfg = EvolutionConfig(
        population_size=args.population,
        crossover_enabled=not args.no_crossover,
        mutate_failed_crossovers=not args.no_mutate_failed_crossovers,
        mutate_duplicates=not args.no_mutate_duplicates,
        workers=args.workers,
    )
    sink = JsonLinesSink(Path(args.stats_file)) if args.stats_file else LoggingSink(logging.DEBUG)
    with StatisticsReporter(sink) as reporter:
        search = EvolutionarySearch(instance.origin, instance.destinations, cfg, reporter=reporter)
        log(f"initial best={search.best_distance:.2f}")
        t0 = time.perf_counter()
        steps = 0
        try:
            while args.generations <= 0 or steps < args.generations:
                _step(search, cfg)
                steps += 1
                if steps % args.report_every == 0:
                    log(f"step {steps} (gen {search.generation}): best={search.best_distance:.2f}")
        except KeyboardInterrupt:
            log("Interrupted.")
        elapsed = time.perf_counter() - t0
    log(f"finished {steps} steps in {elapsed:.2f}s, best={search.best_distance:.2f}")
    print(" -> ".join(f"({p})" for p in [search.origin, *search.best_tour_so_far(), search.origin]))


def stats(args) -> None:
    path = Path(args.stats_file)
    if not path.exists():
        print(f"No statistics file at {path}; pass --stats-file to `run` first.")
        return
    records = read_statistics(path)
    if not records:
        print(f"{path} is empty.")
        return
    first, last = records[0].summary(), records[-1].summary()
    print(f"generations={len(records)} (last={records[-1].generation})")
    print(f"first: best={first['best']:.2f} mean={first['mean']:.2f}")
    print(f"last:  best={last['best']:.2f} mean={last['mean']:.2f} std={last['std']:.2f}")


def _positive(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def main(argv=None):
    parser = argparse.ArgumentParser(description="Travelling salesman GA")
    parser.add_argument("--verbose", action="store_true", help="Log every generation")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve tours for a random or TSPLIB instance")
    run_parser.add_argument("--destinations", type=int, default=30)
    run_parser.add_argument("--tsplib", default=None, help="TSPLIB .tsp file; first node is the origin")
    run_parser.add_argument("--population", type=int, default=100)
    run_parser.add_argument("--generations", type=int, default=200, help="0 runs until Ctrl+C")
    run_parser.add_argument("--no-crossover", action="store_true")
    run_parser.add_argument("--no-mutate-failed-crossovers", action="store_true")
    run_parser.add_argument("--no-mutate-duplicates", action="store_true")
    run_parser.add_argument("--workers", type=_positive, default=4)
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument("--stats-file", default=None, help="Append per-generation JSON lines here")
    run_parser.add_argument("--report-every", type=_positive, default=50)
    run_parser.set_defaults(func=run)

    stats_parser = subparsers.add_parser("stats", help="Summarise a statistics file")
    stats_parser.add_argument("stats_file")
    stats_parser.set_defaults(func=stats)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    if args.command == "run":
        if args.tsplib is None and args.destinations < 2:
            parser.error("--destinations must be at least 2")
        if args.population < 2 or args.population % 2:
            parser.error("--population must be an even number of at least 2")
    args.func(args)


if __name__ == "__main__":
    main()
