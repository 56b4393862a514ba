"""
Module containing the `ViewportContext` and `Viewport` classes, which describe the drawing surface that units are resolved against.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Self
import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import DEFAULT_DPI, MM_PER_INCH
from .logging import Loggable

@dataclass(frozen = True)
class ViewportContext:
    """
    Immutable snapshot of the drawing surface geometry.
    - `origin`, `extent`: position and size of the viewport in device units
    - `device_to_physical_scale`: millimeters per device unit along x and y (may differ per axis)
    - `version`: token that changes whenever the geometry changes
    """
    origin: tuple[float, float]
    extent: tuple[float, float]
    device_to_physical_scale: tuple[float, float]
    version: int = 0

    def __post_init__(self) -> None:
        if self.extent[0] < 0 or self.extent[1] < 0:
            raise ValueError(f"Viewport extent must be non-negative, got {self.extent}")
        if self.device_to_physical_scale[0] <= 0 or self.device_to_physical_scale[1] <= 0:
            raise ValueError(f"Device to physical scale must be positive, got {self.device_to_physical_scale}")

    @property
    def physical_extent(self) -> tuple[float, float]:
        """
        Returns the viewport size in millimeters.
        """
        return (self.extent[0] * self.device_to_physical_scale[0], self.extent[1] * self.device_to_physical_scale[1])

    def same_geometry(self, other: ViewportContext) -> bool:
        return (self.origin == other.origin
                and self.extent == other.extent
                and self.device_to_physical_scale == other.device_to_physical_scale)

    def to_device(self, points_mm: ArrayLike) -> NDArray[np.float64]:
        """
        Maps points given in millimeters relative to the viewport origin back to absolute device coordinates.
        Argument 'points_mm' must be of shape [N][2].
        """
        points = np.asarray(points_mm, dtype = np.float64).reshape(-1, 2)
        scale = np.array(self.device_to_physical_scale)
        return np.array(self.origin) + points / scale

class Viewport(Loggable):
    """
    Mutable drawing surface that issues a fresh `ViewportContext` every time its geometry changes.
    Version tokens increase monotonically; changes that leave the geometry untouched keep the current token.
    """

    def __init__(
        self,
        width: float,
        height: float,
        origin: tuple[float, float] = (0.0, 0.0),
        device_to_physical_scale: tuple[float, float] | None = None,
        dpi: float = DEFAULT_DPI
    ) -> None:
        super().__init__()
        if device_to_physical_scale is None:
            device_to_physical_scale = (MM_PER_INCH / dpi, MM_PER_INCH / dpi)
        self._context = ViewportContext(
            origin = (float(origin[0]), float(origin[1])),
            extent = (float(width), float(height)),
            device_to_physical_scale = (float(device_to_physical_scale[0]), float(device_to_physical_scale[1])),
            version = 0
        )
        self.log(f"Viewport created: extent {self._context.extent}, scale {self._context.device_to_physical_scale} mm/unit")

    @property
    def context(self) -> ViewportContext:
        return self._context

    @property
    def version(self) -> int:
        return self._context.version

    def _update(self, **changes) -> ViewportContext:
        candidate = replace(self._context, **changes)
        if candidate.same_geometry(self._context):
            return self._context
        self._context = replace(candidate, version = self._context.version + 1)
        self.log(f"Viewport changed to version {self._context.version}: origin {self._context.origin}, "
                 f"extent {self._context.extent}, scale {self._context.device_to_physical_scale}")
        return self._context

    def resize(self, width: float, height: float) -> Self:
        self._update(extent = (float(width), float(height)))
        return self

    def pan(self, dx: float, dy: float) -> Self:
        """
        Moves the viewport origin by the provided offsets in device units.
        """
        x, y = self._context.origin
        self._update(origin = (x + dx, y + dy))
        return self

    def rescale(self, scale_x: float, scale_y: float | None = None) -> Self:
        """
        Sets the device to physical scale (millimeters per device unit).
        If `scale_y` is not provided, it will use the same value as `scale_x`.
        """
        if scale_y is None:
            scale_y = scale_x
        self._update(device_to_physical_scale = (float(scale_x), float(scale_y)))
        return self

    def set_geometry(self, origin: tuple[float, float], extent: tuple[float, float], device_to_physical_scale: tuple[float, float]) -> ViewportContext:
        """
        Replaces the whole geometry at once, e.g. when a backend reports a new surface size.
        """
        return self._update(
            origin = (float(origin[0]), float(origin[1])),
            extent = (float(extent[0]), float(extent[1])),
            device_to_physical_scale = (float(device_to_physical_scale[0]), float(device_to_physical_scale[1]))
        )
