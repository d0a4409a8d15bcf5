"""
Genetic algorithm for closed travelling salesman tours over 2-D points.
"""

from .errors import InvalidArgumentError, InvariantViolation, OutOfRangeError
from .evolutionary import EvolutionConfig, EvolutionarySearch, Individual, TourView
from .points import Point, Tour, tour_length

__all__ = [
    "data",
    "evolutionary",
    "operators",
    "points",
    "rng",
    "statistics",
    "EvolutionConfig",
    "EvolutionarySearch",
    "Individual",
    "TourView",
    "Point",
    "Tour",
    "tour_length",
    "InvalidArgumentError",
    "InvariantViolation",
    "OutOfRangeError",
]
