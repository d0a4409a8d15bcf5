"""Distance and in-place sequence transforms."""

import math

import pytest

from salesman_ga.errors import InvalidArgumentError, OutOfRangeError
from salesman_ga.points import (
    Point,
    distance,
    move,
    reverse_range,
    same_sequence,
    swap,
    tour_length,
)

from conftest import make_points


def test_distance_to_same_point_is_zero():
    p = Point(5, 10)
    assert p.distance(p) == 0


def test_distance_pythagorean():
    assert distance(Point(0, 0), Point(3, 4)) == 5


def test_points_compare_by_identity():
    a, b = Point(1, 2), Point(1, 2)
    assert a != b
    assert len({a, b}) == 2
    assert a == a


def test_str_renders_coordinates():
    assert str(Point(3, 4)) == "3, 4"


def test_tour_length_closed_tour():
    origin = Point(0, 0)
    tour = [Point(3, 4), Point(8, 6)]
    expected = 5 + math.sqrt(29) + 10
    assert tour_length(origin, tour) == pytest.approx(expected)
    assert tour_length(origin, tour) == pytest.approx(20.385, abs=1e-3)


def test_tour_length_single_point_goes_and_returns():
    assert tour_length(Point(0, 0), [Point(3, 4)]) == pytest.approx(10)


@pytest.mark.parametrize(
    "origin, tour",
    [
        (None, [Point(1, 1)]),
        (Point(0, 0), None),
        (Point(0, 0), []),
        (Point(0, 0), [Point(1, 1), None]),
    ],
)
def test_tour_length_rejects_bad_input(origin, tour):
    with pytest.raises(InvalidArgumentError):
        tour_length(origin, tour)


def test_swap():
    p0, p1 = make_points(2)
    seq = [p0, p1]
    swap(seq, 0, 1)
    assert seq[0] is p1 and seq[1] is p0


def test_move_forward_and_backward():
    p0, p1, p2 = make_points(3)
    seq = [p0, p1, p2]
    move(seq, 0, 2)
    assert same_sequence(seq, [p1, p2, p0])

    seq = [p0, p1, p2]
    move(seq, 2, 0)
    assert same_sequence(seq, [p2, p0, p1])


def test_move_shifts_intervening_block():
    seq = list(range(7))
    move(seq, 1, 5)
    assert seq == [0, 2, 3, 4, 5, 1, 6]


def test_reverse_range_is_order_independent():
    p0, p1, p2, p3 = make_points(4)
    a = [p0, p1, p2, p3]
    b = [p0, p1, p2, p3]
    reverse_range(a, 1, 2)
    reverse_range(b, 2, 1)
    assert same_sequence(a, [p0, p2, p1, p3])
    assert same_sequence(a, b)


def test_reverse_range_full():
    seq = list(range(5))
    reverse_range(seq, 4, 0)
    assert seq == [4, 3, 2, 1, 0]


@pytest.mark.parametrize("op", [swap, move, reverse_range])
@pytest.mark.parametrize("i, j", [(-1, 0), (0, 3), (3, 3), (0, -2)])
def test_transforms_reject_out_of_range(op, i, j):
    with pytest.raises(OutOfRangeError):
        op(make_points(3), i, j)


@pytest.mark.parametrize("op", [swap, move, reverse_range])
def test_transforms_reject_none(op):
    with pytest.raises(InvalidArgumentError):
        op(None, 0, 0)


def test_inverse_transforms_preserve_distance():
    origin = Point(0, 0)
    tour = make_points(8)
    before = tour_length(origin, tour)
    reverse_range(tour, 2, 6)
    reverse_range(tour, 2, 6)
    assert tour_length(origin, tour) == pytest.approx(before)
    swap(tour, 1, 7)
    swap(tour, 1, 7)
    assert tour_length(origin, tour) == pytest.approx(before)


def test_same_sequence_uses_identity():
    a = [Point(1, 1), Point(2, 2)]
    b = [Point(1, 1), Point(2, 2)]
    assert same_sequence(a, list(a))
    assert not same_sequence(a, b)
    assert not same_sequence(a, a[:1])
