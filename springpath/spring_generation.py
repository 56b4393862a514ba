"""
Module containing the spring path generator, which approximates a helix of constant diameter between two points with a polyline.
The helix is modelled as a circular offset superimposed on a linear sweep from the first point to the second.
"""

import math
from dataclasses import dataclass
import numpy as np
from numpy.typing import ArrayLike

from .config import MAX_SAMPLE_COUNT
from .points import Point, Polyline

class ConfigurationError(ValueError):
    """
    Raised when spring parameters cannot describe a drawable spring, such as a non-positive tension or points per revolution.
    """

@dataclass(frozen = True, eq = False)
class SpringSpec:
    """
    Resolved parameters of a single spring. All lengths are in millimeters (or any common unit).
    - `tension`: inverse pitch density, lower tension packs more revolutions into the same span
    - `num_points`: number of points sampled per revolution
    Raises 'ConfigurationError' on construction if parameters are invalid.
    """
    p0: Point
    p1: Point
    diameter: float
    tension: float
    num_points: int
    path_id: int = 0

    def __post_init__(self) -> None:
        if not (np.all(np.isfinite(self.p0.coords)) and np.all(np.isfinite(self.p1.coords))):
            raise ConfigurationError(f"Spring endpoints must be finite, got {self.p0} and {self.p1}")
        if not math.isfinite(self.tension) or self.tension <= 0:
            raise ConfigurationError(f"Tension must be larger than zero, got {self.tension}")
        if isinstance(self.num_points, bool) or int(self.num_points) != self.num_points or self.num_points <= 0:
            raise ConfigurationError(f"Number of points per revolution must be a positive integer, got {self.num_points}")
        if not math.isfinite(self.diameter) or self.diameter < 0:
            raise ConfigurationError(f"Diameter must be a non-negative length, got {self.diameter}")
        if self.diameter == 0 and self.length > 0:
            raise ConfigurationError("Diameter must be larger than zero for a spring of non-zero length")

    @property
    def length(self) -> float:
        return float(Point.distance_between_points(self.p0, self.p1))

class SpringPathPlan:
    """
    Calculates and stores values needed to generate a spring path:
    - Direct length between endpoints
    - No. revolutions of the coil
    - No. samples, and whether it was clamped to the sample budget
    """

    def __init__(self, spec: SpringSpec, max_sample_count: int = MAX_SAMPLE_COUNT) -> None:
        self.length = spec.length
        self.revolutions = count_revolutions(self.length, spec.diameter, spec.tension)
        requested_sample_count = count_samples(self.revolutions, spec.num_points)
        self.sample_count = min(requested_sample_count, max_sample_count)
        self.clamped = requested_sample_count > max_sample_count

def count_revolutions(length: float, diameter: float, tension: float) -> float:
    """
    Returns the number of coil revolutions needed to span `length`.
    """
    if length == 0:
        return 0.0
    return length / (diameter * tension)

def count_samples(revolutions: float, num_points: int) -> int:
    """
    Returns the number of points sampled along the whole spring, at least 2 unless the spring has no revolutions.
    """
    if revolutions <= 0:
        return 0
    return max(2, math.ceil(num_points * revolutions))

def generate_spring_path(spec: SpringSpec, max_sample_count: int = MAX_SAMPLE_COUNT) -> Polyline:
    """
    Returns the polyline approximating the spring described by `spec`, tagged with `spec.path_id`.
    A zero-length spring yields an empty polyline, meaning there is nothing to draw.
    """
    plan = SpringPathPlan(spec, max_sample_count)
    if plan.sample_count == 0:
        return Polyline(np.empty((0, 2)), spec.path_id)

    # Angular and linear parameters are sampled over the same index so the pitch stays uniform
    radians = np.linspace(0, plan.revolutions * 2 * np.pi, plan.sample_count)
    x = np.linspace(spec.p0.x, spec.p1.x, plan.sample_count)
    y = np.linspace(spec.p0.y, spec.p1.y, plan.sample_count)

    radius = spec.diameter / 2
    points = np.column_stack((np.cos(radians) * radius + x, np.sin(radians) * radius + y))
    return Polyline(points, spec.path_id)

def create_spring(
    p0: ArrayLike,
    p1: ArrayLike,
    diameter: float,
    tension: float,
    num_points: int,
    path_id: int = 0,
    max_sample_count: int = MAX_SAMPLE_COUNT
) -> Polyline:
    """
    Validates the parameters and generates a single spring path between two points given as (x, y) pairs.
    Raises 'ConfigurationError' if parameters are invalid.
    """
    spec = SpringSpec(Point(p0), Point(p1), float(diameter), float(tension), num_points, path_id)
    return generate_spring_path(spec, max_sample_count)
