"""
Module containing numpy NDArray wrapper classes for working with points and polylines.
Point, PointArray and Polyline classes use numpy's efficient linear algebra operations while providing full type hinting.
"""

from __future__ import annotations
from typing import overload
import numpy as np
from numpy.typing import ArrayLike, NDArray

class Point:
    def __init__(self, coords: ArrayLike) -> None:
        """
        Argument 'coords' must be a 2-element array.
        """
        self.coords = np.asarray(coords, dtype = np.float64)

    def __str__(self) -> str:
        return str(self.coords)

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return bool(np.array_equal(self.coords, other.coords))

    @property
    def x(self) -> np.float64:
        return self.coords[0]

    @property
    def y(self) -> np.float64:
        return self.coords[1]

    @staticmethod
    def distance_between_points(p1: Point, p2: Point) -> np.float64:
        """
        Returns the Euclidean distance between two points.
        """
        return np.linalg.norm(p2.coords - p1.coords)

class PointArray:
    def __init__(self, points: ArrayLike) -> None:
        """
        Argument 'points' must be of shape [N][2].
        """
        self.points = np.asarray(points, dtype = np.float64).reshape(-1, 2)

    def __str__(self) -> str:
        return str(self.points)

    def __len__(self) -> int:
        return len(self.points)

    @overload
    def __getitem__(self, index: int) -> Point: ...

    @overload
    def __getitem__(self, index: slice) -> PointArray: ...

    def __getitem__(self, index: int | slice) -> Point | PointArray:
        if isinstance(index, slice):
            return PointArray(self.points[index])
        return Point(self.points[index])

    @property
    def x(self) -> NDArray[np.float64]:
        return self.points[:, 0]

    @property
    def y(self) -> NDArray[np.float64]:
        return self.points[:, 1]

    def is_empty(self) -> bool:
        return len(self.points) == 0

    def bounding_points(self, margin_factor: float = 0) -> tuple[Point, Point]:
        """
        Returns min and max Point instances that bound this PointArray, widened by a margin proportional to its range.
        """
        # Use 'axis = 0' to perform operation down the columns
        min_point = np.min(self.points, axis = 0)
        max_point = np.max(self.points, axis = 0)

        margins = (max_point - min_point) * margin_factor
        return Point(min_point - margins), Point(max_point + margins)

    def sum_of_distances(self, wraparound: bool = False) -> np.float64:
        """
        Returns the sum of Euclidean distances between adjacent points.
        If 'wraparound' is true, distance between the first and last point is included.
        """
        if len(self.points) < 2:
            return np.float64(0.0)
        diffs = np.diff(self.points, axis = 0)
        if wraparound:
            diffs = np.vstack((diffs, self.points[:1] - self.points[-1:]))
        distances = np.sqrt(np.sum(diffs**2, axis = 1))
        return np.sum(distances)

    @staticmethod
    def concatenate(point_arrays: list[PointArray]) -> PointArray:
        """
        Returns the concatenation of a list of PointArray instances.
        """
        if not point_arrays:
            return PointArray(np.empty((0, 2)))
        ndarrays = [point_array.points for point_array in point_arrays]
        return PointArray(np.concatenate(ndarrays))

class Polyline(PointArray):
    """
    Ordered sequence of points tagged with the id of the path it belongs to.
    Several polylines sharing one style are told apart by their `path_id`.
    """

    def __init__(self, points: ArrayLike, path_id: int = 0) -> None:
        super().__init__(points)
        self.path_id = path_id

    def __repr__(self) -> str:
        return f"Polyline(path_id={self.path_id}, num_points={len(self)})"

    def __getitem__(self, index: int | slice) -> Point | Polyline:
        if isinstance(index, slice):
            return Polyline(self.points[index], self.path_id)
        return Point(self.points[index])

    def arc_length(self) -> np.float64:
        return self.sum_of_distances(wraparound = False)

    def perpendicular_excursion(self, start: Point, end: Point) -> tuple[np.float64, np.float64]:
        """
        Returns the largest signed distances on either side of the line through `start` and `end` (negative side, positive side).
        Useful to measure the cross-section of a path that winds around that line.
        """
        direction = end.coords - start.coords
        length = np.linalg.norm(direction)
        if length == 0 or self.is_empty():
            return np.float64(0.0), np.float64(0.0)
        normal = np.array([-direction[1], direction[0]]) / length
        offsets = (self.points - start.coords) @ normal
        return np.min(offsets), np.max(offsets)
