from salesman_ga.data import random_instance
from salesman_ga.evolutionary import EvolutionConfig, EvolutionarySearch
from salesman_ga.rng import seed
from salesman_ga.statistics import MemorySink, StatisticsReporter


def main():
    seed(7)
    instance = random_instance(20)
    cfg = EvolutionConfig(population_size=40, workers=2)
    sink = MemorySink()
    with StatisticsReporter(sink) as reporter:
        search = EvolutionarySearch(instance.origin, instance.destinations, cfg, reporter=reporter)
        generations = 50
        for g in range(generations):
            search.reproduce()
            repaired = search.repair_duplicates()
            print(f"gen {g+1}: best={search.best_distance:.2f} repaired={repaired}")
    print(f"recorded {len(sink.records)} generation steps")


if __name__ == "__main__":
    main()
