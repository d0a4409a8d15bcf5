from typing import Callable, Dict, List, Optional, Sequence

from .errors import InvalidArgumentError, InvariantViolation, OutOfRangeError
from .points import Point, Tour, move, reverse_range, same_sequence, swap
from .rng import get_random_value


MUTATION_PRIMS: List[Callable[[Tour, int, int], None]] = [swap, move, reverse_range]

AREA_MIN_X, AREA_MAX_X = 50, 750
AREA_MIN_Y, AREA_MAX_Y = 50, 550


def _require_tour(tour: Optional[Sequence[Point]], name: str) -> None:
    if tour is None:
        raise InvalidArgumentError(f"{name} is required")
    if len(tour) < 2:
        raise InvalidArgumentError(f"{name} must have at least two points")


def random_destinations(count: int) -> List[Point]:
    if count < 2:
        raise OutOfRangeError(f"count must be at least 2, got {count}")
    return [
        Point(
            get_random_value(AREA_MAX_X - AREA_MIN_X) + AREA_MIN_X,
            get_random_value(AREA_MAX_Y - AREA_MIN_Y) + AREA_MIN_Y,
        )
        for _ in range(count)
    ]


def mutate_random(tour: Tour) -> None:
    """Apply 1 + rand(len // 10) random swap/move/reverse steps in place."""
    _require_tour(tour, "tour")
    n = len(tour)
    mutation_count = get_random_value(n // 10) + 1
    for _ in range(mutation_count):
        i = get_random_value(n)
        j = get_random_value(n - 1)
        if j >= i:
            j += 1
        MUTATION_PRIMS[get_random_value(len(MUTATION_PRIMS))](tour, i, j)


def fully_randomize(tour: Tour) -> None:
    if tour is None:
        raise InvalidArgumentError("tour is required")
    for i in range(len(tour) - 1, 0, -1):
        j = get_random_value(i + 1)
        if j != i:
            swap(tour, i, j)


def crossover(tour_a: Tour, tour_b: Sequence[Point], mutate_failed_crossovers: bool) -> None:
    """
    Copy a random segment of ``tour_b`` into ``tour_a`` and repair duplicates.

    Positions whose point already appeared earlier in ``tour_a`` are refilled with
    the points the copied segment pushed out, so ``tour_a`` stays a permutation of
    the points it started with. When ``mutate_failed_crossovers`` is set and the
    chosen segment is already identical in both tours, ``tour_a`` is mutated
    instead. ``tour_b`` is never modified.
    """
    _require_tour(tour_a, "tour_a")
    _require_tour(tour_b, "tour_b")
    if len(tour_a) != len(tour_b):
        raise InvalidArgumentError(
            f"tours must have the same length ({len(tour_a)} != {len(tour_b)})"
        )

    available: Dict[int, Point] = {id(p): p for p in tour_a}

    n = len(tour_a)
    start = get_random_value(n)
    end = start + get_random_value(n - start)

    if mutate_failed_crossovers and same_sequence(tour_a[start:end], tour_b[start:end]):
        mutate_random(tour_a)
        return

    tour_a[start:end] = tour_b[start:end]

    to_replace: List[int] = []
    for index, point in enumerate(tour_a):
        if available.pop(id(point), None) is None:
            to_replace.append(index)

    if len(to_replace) != len(available):
        raise InvariantViolation(
            f"{len(to_replace)} duplicated positions but {len(available)} unused points"
        )
    for index, point in zip(to_replace, available.values()):
        tour_a[index] = point
