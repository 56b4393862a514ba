"""
Module containing interfaces (abstract classes) for drawables and coordinate transforms.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .logging import Loggable
from .points import Polyline
from .viewport import ViewportContext

class Drawable(ABC, Loggable):
    """
    Retained description of something to draw whose concrete geometry is computed lazily against a viewport.
    """

    @abstractmethod
    def resolve_and_generate(self, context: ViewportContext) -> list[Polyline]:
        """
        Resolves all unit values against `context` and returns freshly generated polylines in millimeters
        relative to the viewport origin. Never reads or writes any cache.
        """
        pass

    @abstractmethod
    def draw(self, context: ViewportContext) -> list[Polyline]:
        """
        Returns the polylines for `context`, regenerating them only if the viewport changed since the last call.
        """
        pass

    def is_empty(self) -> bool:
        """
        Returns True if this drawable never produces anything to draw.
        """
        return False

class CoordinateTransform(ABC, Loggable):
    """
    Used to map data coordinates into viewport fractions before a drawable is constructed.
    """

    @dataclass
    class PanelParams:
        """
        Data ranges shown by a panel along x and y, as (min, max) pairs.
        """
        x_range: tuple[float, float]
        y_range: tuple[float, float]

        def __post_init__(self) -> None:
            for name in ("x_range", "y_range"):
                low, high = getattr(self, name)
                if low == high:
                    raise ValueError(f"Panel {name.replace('_', ' ')} must not be empty, got {(low, high)}")

    @abstractmethod
    def is_linear(self) -> bool:
        """
        Returns True if straight lines in data space stay straight in viewport space.
        """
        pass

    @abstractmethod
    def transform_point(self, x: float, y: float, panel_params: CoordinateTransform.PanelParams) -> tuple[float, float]:
        """
        Returns the viewport fractions of a single data point.
        """
        pass

    def transform(self, rows: Sequence[Mapping[str, Any]], panel_params: CoordinateTransform.PanelParams) -> list[dict[str, Any]]:
        """
        Returns copies of `rows` with both endpoints ('x', 'y' and 'xend', 'yend') mapped to viewport fractions.
        """
        transformed_rows = []
        for row in rows:
            transformed_row = dict(row)
            transformed_row["x"], transformed_row["y"] = self.transform_point(row["x"], row["y"], panel_params)
            transformed_row["xend"], transformed_row["yend"] = self.transform_point(row["xend"], row["yend"], panel_params)
            transformed_rows.append(transformed_row)
        return transformed_rows
