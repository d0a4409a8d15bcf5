import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidArgumentError
from .operators import crossover, fully_randomize, mutate_random
from .points import Point, Tour, same_sequence, tour_length
from .rng import get_random_value
from .statistics import StatisticsReporter


logger = logging.getLogger(__name__)


@dataclass
class EvolutionConfig:
    """
    Search settings. There is no seed here: reproducible runs call
    ``salesman_ga.rng.seed`` once before building the instance and the search,
    since both draw from the same process-wide random source.
    """

    population_size: int = 100
    crossover_enabled: bool = True
    mutate_failed_crossovers: bool = True
    mutate_duplicates: bool = True
    workers: int = 4


@dataclass
class Individual:
    tour: Tour
    distance: float


class TourView:
    """Lazy, restartable view over a tour. Iterating does not copy it."""

    def __init__(self, tour: Sequence[Point]):
        self._tour = tour

    def __iter__(self) -> Iterator[Point]:
        return iter(self._tour)

    def __len__(self) -> int:
        return len(self._tour)


class EvolutionarySearch:
    """
    Generational GA over closed tours starting and ending at ``origin``.

    The population is always sorted by distance. ``reproduce`` breeds two
    children from each individual of the fitter half and keeps the previous best
    in the last slot; ``repair_duplicates`` mutates individuals equal to their
    neighbour. Both fan out over a thread pool and both count as one generation.
    """

    def __init__(
        self,
        origin: Point,
        destinations: Sequence[Point],
        config: EvolutionConfig = None,
        reporter: Optional[StatisticsReporter] = None,
    ):
        self.cfg = config or EvolutionConfig()
        if origin is None:
            raise InvalidArgumentError("origin is required")
        if destinations is None:
            raise InvalidArgumentError("destinations are required")
        destinations = list(destinations)
        if any(d is None for d in destinations):
            raise InvalidArgumentError("destinations can't contain None values")
        if len(destinations) < 2:
            raise InvalidArgumentError("at least two destinations are required")
        size = self.cfg.population_size
        if size < 2:
            raise InvalidArgumentError(f"population_size must be at least 2, got {size}")
        if size % 2 != 0:
            raise InvalidArgumentError(f"population_size must be even, got {size}")

        self._origin = origin
        self.reporter = reporter
        self.crossover_enabled = self.cfg.crossover_enabled
        self.mutate_failed_crossovers = self.cfg.mutate_failed_crossovers
        self.workers = max(1, self.cfg.workers)

        self._population: List[Individual] = []
        for _ in range(size):
            tour = list(destinations)
            fully_randomize(tour)
            self._population.append(self._score(tour))
        self._population.sort(key=lambda ind: ind.distance)
        self._generation = 0
        logger.info(
            "initial population of %d over %d destinations, best=%.2f",
            size,
            len(destinations),
            self.best_distance,
        )

    @property
    def origin(self) -> Point:
        return self._origin

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def population(self) -> Tuple[Individual, ...]:
        return tuple(self._population)

    @property
    def best_distance(self) -> float:
        return self._population[0].distance

    def best_tour_so_far(self) -> TourView:
        return TourView(self._population[0].tour)

    def _score(self, tour: Tour) -> Individual:
        return Individual(tour=tour, distance=tour_length(self._origin, tour))

    def _child(self, parent: Tour, parents: Sequence[Tour]) -> Individual:
        child = list(parent)
        if not self.crossover_enabled:
            # Without crossovers every child is a mutation.
            mutate_random(child)
            return self._score(child)
        other = parents[get_random_value(len(parents))]
        crossover(child, other, self.mutate_failed_crossovers)
        if not self.mutate_failed_crossovers and get_random_value(10) == 0:
            mutate_random(child)
        return self._score(child)

    def reproduce(self) -> None:
        best = self._population[0]
        half = len(self._population) // 2
        # Children only ever see this snapshot, never slots rewritten this step.
        parents = [ind.tour for ind in self._population[:half]]

        def breed(i: int) -> Tuple[Individual, Individual]:
            parent = parents[i]
            return self._child(parent, parents), self._child(parent, parents)

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as ex:
            offspring = list(ex.map(breed, range(half)))

        new_pop: List[Individual] = []
        for child1, child2 in offspring:
            new_pop.append(child1)
            new_pop.append(child2)
        # Keep the best alive from one generation to the next.
        new_pop[-1] = best
        new_pop.sort(key=lambda ind: ind.distance)
        self._population = new_pop
        logger.debug("generation %d reproduced, best=%.2f", self._generation, self.best_distance)
        self._finish_step()

    def find_duplicates(self) -> List[int]:
        """Indices whose tour equals the last distinct tour before them."""
        duplicates = []
        previous = self._population[0].tour
        for index in range(1, len(self._population)):
            tour = self._population[index].tour
            if same_sequence(previous, tour):
                duplicates.append(index)
            else:
                previous = tour
        return duplicates

    def repair_duplicates(self) -> int:
        duplicates = self.find_duplicates()

        def repair(index: int) -> Individual:
            tour = list(self._population[index].tour)
            mutate_random(tour)
            return self._score(tour)

        if duplicates:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as ex:
                repaired = list(ex.map(repair, duplicates))
            new_pop = list(self._population)
            for index, ind in zip(duplicates, repaired):
                new_pop[index] = ind
            new_pop.sort(key=lambda ind: ind.distance)
            self._population = new_pop
            logger.debug("generation %d: mutated %d duplicates", self._generation, len(duplicates))
        self._finish_step()
        return len(duplicates)

    def _finish_step(self) -> None:
        if self.reporter is not None:
            self.reporter.report(self._generation, [ind.distance for ind in self._population])
        self._generation += 1
