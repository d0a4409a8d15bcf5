from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np
import tsplib95

from .errors import InvalidArgumentError
from .operators import random_destinations
from .points import Point


@dataclass
class Instance:
    name: str
    origin: Point
    destinations: List[Point]


def random_instance(count: int, name: str = "random") -> Instance:
    # One extra point serves as the origin.
    points = random_destinations(count + 1)
    return Instance(name=f"{name}{count}", origin=points[0], destinations=points[1:])


def load_instance(path: Path) -> Instance:
    """Load a TSPLIB file; the first node is the origin, the rest are destinations."""
    problem = tsplib95.load(str(path))
    nodes = list(problem.get_nodes())
    coords = problem.node_coords or problem.display_data
    if not coords:
        raise InvalidArgumentError(f"{path} has no node coordinates")
    if len(nodes) < 3:
        raise InvalidArgumentError(f"{path} needs at least 3 nodes, has {len(nodes)}")
    xy = np.rint(np.array([coords[n][:2] for n in nodes], dtype=float)).astype(int)
    points = [Point(int(x), int(y)) for x, y in xy]
    name = problem.name or Path(path).stem
    return Instance(name=name, origin=points[0], destinations=points[1:])
