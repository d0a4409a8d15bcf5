import pytest

from salesman_ga import rng
from salesman_ga.points import Point


@pytest.fixture(autouse=True)
def seeded_random():
    rng.seed(1234)
    yield
    rng.seed(None)


@pytest.fixture
def origin():
    return Point(0, 0)


@pytest.fixture
def destinations():
    return [Point(100, 100), Point(200, 50), Point(350, 200)]


def make_points(n):
    return [Point(10 * i, (7 * i) % 13) for i in range(n)]
