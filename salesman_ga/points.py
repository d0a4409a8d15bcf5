import math
from dataclasses import dataclass
from typing import List, MutableSequence, Optional, Sequence

from .errors import InvalidArgumentError, OutOfRangeError


@dataclass(frozen=True, eq=False)
class Point:
    # eq=False keeps identity equality and hashing: equal coordinates are
    # still distinct destinations.
    x: int
    y: int

    def distance(self, other: "Point") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __str__(self) -> str:
        return f"{self.x}, {self.y}"


Tour = List[Point]


def distance(a: Point, b: Point) -> float:
    return a.distance(b)


def tour_length(origin: Optional[Point], tour: Optional[Sequence[Point]]) -> float:
    """Length of the closed tour origin -> tour[0] -> ... -> tour[-1] -> origin."""
    if origin is None:
        raise InvalidArgumentError("origin is required")
    if tour is None:
        raise InvalidArgumentError("tour is required")
    if len(tour) == 0:
        raise InvalidArgumentError("tour must have at least one point")
    if any(p is None for p in tour):
        raise InvalidArgumentError("tour can't contain None values")
    dist = origin.distance(tour[0])
    for i in range(len(tour) - 1):
        dist += tour[i].distance(tour[i + 1])
    dist += tour[-1].distance(origin)
    return float(dist)


def same_sequence(a: Sequence[Point], b: Sequence[Point]) -> bool:
    if len(a) != len(b):
        return False
    return all(x is y for x, y in zip(a, b))


def _check_index(seq: Sequence, index: int, name: str) -> None:
    if index < 0 or index >= len(seq):
        raise OutOfRangeError(f"{name}={index} is outside [0, {len(seq)})")


def _check_seq(seq) -> None:
    if seq is None:
        raise InvalidArgumentError("sequence is required")


def swap(seq: MutableSequence, i: int, j: int) -> None:
    _check_seq(seq)
    _check_index(seq, i, "i")
    _check_index(seq, j, "j")
    seq[i], seq[j] = seq[j], seq[i]


def move(seq: MutableSequence, from_index: int, to_index: int) -> None:
    """Move one element; the items in between shift by one position.

    Moving 1 -> 5 turns the items previously at 2, 3, 4, 5 into 1, 2, 3, 4.
    """
    _check_seq(seq)
    _check_index(seq, from_index, "from_index")
    _check_index(seq, to_index, "to_index")
    item = seq.pop(from_index)
    seq.insert(to_index, item)


def reverse_range(seq: MutableSequence, start: int, end: int) -> None:
    _check_seq(seq)
    _check_index(seq, start, "start")
    _check_index(seq, end, "end")
    if end < start:
        start, end = end, start
    seq[start : end + 1] = seq[start : end + 1][::-1]
