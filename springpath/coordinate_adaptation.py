"""
Module containing the coordinate systems that map data coordinates to viewport fractions,
and the `adapt()` function that turns transformed rows into unresolved spring parameters.
"""

import warnings
from collections.abc import Mapping, Sequence
from typing import Any
import numpy as np

from .config import DEFAULT_DIAMETER, DEFAULT_TENSION, DIAMETER_UNIT
from .interfaces import CoordinateTransform
from .scene import SpringParameters
from .units import FractionOfViewport, PhysicalLength

class DegradedCorrectnessWarning(UserWarning):
    """
    Issued when springs are drawn in a coordinate system they cannot follow exactly.
    """
    pass

def rescale(value: float, value_range: tuple[float, float]) -> float:
    """
    Linearly maps `value` from `value_range` onto [0, 1].
    """
    low, high = value_range
    return (value - low) / (high - low)

class CartesianCoordinates(CoordinateTransform):
    """
    Linear coordinate system mapping the panel's x and y ranges onto the viewport.
    """

    def __init__(self) -> None:
        super().__init__()

    def is_linear(self) -> bool:
        return True

    def transform_point(self, x: float, y: float, panel_params: CoordinateTransform.PanelParams) -> tuple[float, float]:
        return rescale(x, panel_params.x_range), rescale(y, panel_params.y_range)

class PolarCoordinates(CoordinateTransform):
    """
    Non-linear coordinate system mapping one data axis to an angle and the other to a radius.
    Angles start at 12 o'clock and run clockwise unless `direction` is -1.
    The polar disc is centred in the viewport with a radius of 0.4.
    """

    RADIUS = 0.4
    CENTRE = (0.5, 0.5)

    def __init__(self, theta: str = "x", start: float = 0.0, direction: int = 1) -> None:
        super().__init__()
        if theta not in ("x", "y"):
            raise ValueError(f"Angle must be mapped to 'x' or 'y', got '{theta}'")
        if direction not in (1, -1):
            raise ValueError(f"Direction must be 1 (clockwise) or -1 (anticlockwise), got {direction}")
        self.theta = theta
        self.start = start
        self.direction = direction

    def is_linear(self) -> bool:
        return False

    def transform_point(self, x: float, y: float, panel_params: CoordinateTransform.PanelParams) -> tuple[float, float]:
        if self.theta == "x":
            angle_fraction, radius_fraction = rescale(x, panel_params.x_range), rescale(y, panel_params.y_range)
        else:
            angle_fraction, radius_fraction = rescale(y, panel_params.y_range), rescale(x, panel_params.x_range)
        angle = self.start + self.direction * angle_fraction * 2 * np.pi
        radius = radius_fraction * self.RADIUS
        return self.CENTRE[0] + radius * np.sin(angle), self.CENTRE[1] + radius * np.cos(angle)

def adapt(
    rows: Sequence[Mapping[str, Any]],
    coord_system_is_linear: bool,
    diameter_unit: str = DIAMETER_UNIT
) -> list[SpringParameters]:
    """
    Returns unresolved spring parameters for rows whose endpoints are already viewport fractions.
    Endpoints become `FractionOfViewport` values and diameters become `PhysicalLength` values in `diameter_unit`.
    Issues a 'DegradedCorrectnessWarning' if the coordinate system is not linear; springs are still produced
    as straight sweeps between the transformed endpoints.
    """
    if not coord_system_is_linear:
        warnings.warn(
            "Springs are only drawn correctly in linear coordinate systems; endpoints are transformed but paths are not bent",
            DegradedCorrectnessWarning,
            stacklevel = 2
        )

    springs = []
    for row in rows:
        springs.append(SpringParameters(
            x0 = FractionOfViewport(float(row["x"])),
            y0 = FractionOfViewport(float(row["y"])),
            x1 = FractionOfViewport(float(row["xend"])),
            y1 = FractionOfViewport(float(row["yend"])),
            diameter = PhysicalLength(float(row.get("diameter", DEFAULT_DIAMETER)), diameter_unit),
            tension = float(row.get("tension", DEFAULT_TENSION))
        ))
    return springs
