"""
Module containing the 'SpringLayer' class, which turns rows of data into a spring node, and the `draw_layer()` entry point.
"""

from collections.abc import Mapping, Sequence
from functools import wraps
from typing import Any, Self

from .config import (
    DEFAULT_ALPHA, DEFAULT_COLOUR, DEFAULT_DIAMETER, DEFAULT_LINE_CAP, DEFAULT_LINETYPE,
    DEFAULT_NUM_POINTS, DEFAULT_SIZE, DEFAULT_TENSION, DIAMETER_UNIT
)
from .coordinate_adaptation import adapt
from .interfaces import CoordinateTransform, Drawable
from .logging import Loggable
from .points import Polyline
from .scene import EmptyNode, SpringNode, validate_state
from .spring_generation import create_spring
from .styles import SpringStyle, is_missing
from .viewport import ViewportContext

REQUIRED_FIELDS: tuple[str, ...] = ("x", "y", "xend", "yend")
# Optional fields that invalidate a row when present but missing
CHECKED_OPTIONAL_FIELDS: tuple[str, ...] = ("linetype", "size", "diameter", "tension")
DEFAULT_FIELDS: dict[str, Any] = {
    "colour": DEFAULT_COLOUR,
    "size": DEFAULT_SIZE,
    "linetype": DEFAULT_LINETYPE,
    "alpha": DEFAULT_ALPHA,
    "diameter": DEFAULT_DIAMETER,
    "tension": DEFAULT_TENSION
}

def fill_defaults(row: Mapping[str, Any]) -> dict[str, Any]:
    """
    Returns a copy of `row` with absent or missing optional fields set to their defaults.
    """
    filled_row = dict(DEFAULT_FIELDS)
    filled_row.update({field: value for field, value in row.items() if field not in DEFAULT_FIELDS or not is_missing(value)})
    return filled_row

def has_missing_values(row: Mapping[str, Any]) -> bool:
    """
    Returns True if a required field is absent or missing, or a checked optional field is missing.
    """
    for field in REQUIRED_FIELDS:
        if field not in row or is_missing(row[field]):
            return True
    return any(field in row and is_missing(row[field]) for field in CHECKED_OPTIONAL_FIELDS)

def compute_data_springs(rows: Sequence[Mapping[str, Any]], num_points: int = DEFAULT_NUM_POINTS) -> list[Polyline]:
    """
    Returns one spring per row computed directly in data space, with the diameter in data units.
    Rows with missing values are skipped; `path_id` is the row index.
    Useful for previewing springs when no physical viewport is available.
    """
    springs = []
    for row_index, row in enumerate(rows):
        if has_missing_values(row):
            continue
        row = fill_defaults(row)
        spring = create_spring(
            (row["x"], row["y"]), (row["xend"], row["yend"]), row["diameter"], row["tension"], num_points, path_id = row_index
        )
        if not spring.is_empty():
            springs.append(spring)
    return springs

class SpringLayer(Loggable):
    """
    Orchestrates the construction of a spring node from rows of data:
    missing-value filtering, coordinate transformation, adaptation to unit values and styling.
    """

    # ----------------------------
    # Construction, state validation, and logging
    # ----------------------------

    def __init__(self, num_points: int = DEFAULT_NUM_POINTS, line_cap: str = DEFAULT_LINE_CAP) -> None:
        super().__init__()
        self.num_points = num_points
        self.line_cap = line_cap

        self.rows: list[dict[str, Any]] = None
        self.num_removed_rows: int = 0
        self.removal_notice: str | None = None
        self.node: Drawable = None

    def group_logs(title: str):
        """Decorator that adds a title and separator lines before and after a method's execution to group its logs."""
        def decorator(func):
            @wraps(func)
            def wrapper(self, *args, **kwargs):
                self.log(f"\n{title}")
                self.log("-" * 50)
                result = func(self, *args, **kwargs)
                self.log("-" * 50 + "\n")
                return result
            return wrapper
        return decorator

    # ----------------------------
    # Data loading
    # ----------------------------

    def set_rows(self, rows: Sequence[Mapping[str, Any]], drop_missing: bool = False) -> Self:
        """
        Sets the rows to draw, one spring per row.
        Rows missing any of 'x', 'y', 'xend', 'yend' (or holding a missing 'linetype', 'size', 'diameter' or 'tension') are removed.
        The removal is logged, and later passed on to the built node, unless `drop_missing` is True.
        """
        kept_rows = [row for row in rows if not has_missing_values(row)]
        self.num_removed_rows = len(rows) - len(kept_rows)
        self.rows = [fill_defaults(row) for row in kept_rows]

        self.removal_notice = None
        if self.num_removed_rows > 0 and not drop_missing:
            self.removal_notice = f"Removed {self.num_removed_rows} rows containing missing values"
            self.log(self.removal_notice)
        self.log(f"Layer set with {len(self.rows)} rows")
        return self

    # ----------------------------
    # Node construction
    # ----------------------------

    @validate_state("rows", "Set rows")
    @group_logs("SPRING NODE CONSTRUCTION")
    def build_node(self, panel_params: CoordinateTransform.PanelParams, coord_transform: CoordinateTransform) -> Self:
        """
        Builds the drawable for the loaded rows.
        Endpoints are mapped to viewport fractions by `coord_transform`; diameters are centimeters.
        Builds an `EmptyNode` if no rows are left.
        Raises 'ConfigurationError' if a row has a non-positive tension.
        """
        if not self.rows:
            self.node = EmptyNode()
            self.log_removal_notice_to_node()
            self.log("No rows left to draw, built empty node")
            return self

        transformed_rows = coord_transform.transform(self.rows, panel_params)
        springs = adapt(transformed_rows, coord_transform.is_linear(), DIAMETER_UNIT)
        style = SpringStyle.from_rows(self.rows, self.line_cap)
        self.node = SpringNode(springs, self.num_points, style)
        self.log_removal_notice_to_node()

        self.log(f"Spring node built using {coord_transform.__class__.__name__}")
        if not coord_transform.is_linear():
            self.log("Coordinate system is not linear, springs are approximated", indent_level = 1)
        self.log_lines([
            f"No. springs: {self.node.num_springs}",
            f"Points per revolution: {self.num_points}",
            f"Line cap: {self.line_cap}"
        ], indent_level = 1)
        self.log(self.node.get_log(indent_level = 1))
        return self

    def log_removal_notice_to_node(self) -> None:
        """
        Copies the missing-value notice into the node's log so callers that only keep the node still see it.
        """
        if self.removal_notice is not None:
            self.node.log(self.removal_notice)

    @validate_state("node", "Build node")
    def get_node(self) -> Drawable:
        return self.node

    # ----------------------------
    # Drawing
    # ----------------------------

    @validate_state("node", "Build node")
    def draw(self, context: ViewportContext) -> list[Polyline]:
        """
        Returns the polylines of the built node for `context`.
        """
        return self.node.draw(context)

    @validate_state("rows", "Set rows")
    def compute_data_springs(self) -> list[Polyline]:
        """
        Returns the springs of the loaded rows computed in data space.
        """
        return compute_data_springs(self.rows, self.num_points)

def draw_layer(
    rows: Sequence[Mapping[str, Any]],
    panel_params: CoordinateTransform.PanelParams,
    coord_transform: CoordinateTransform,
    n: int = DEFAULT_NUM_POINTS,
    line_cap: str = DEFAULT_LINE_CAP,
    drop_missing: bool = False
) -> Drawable:
    """
    Returns the drawable for a layer of springs, one per row, or an `EmptyNode` if no valid rows remain.
    Issues one 'DegradedCorrectnessWarning' if `coord_transform` is not linear.
    """
    layer = SpringLayer(num_points = n, line_cap = line_cap)
    layer.set_rows(rows, drop_missing = drop_missing)
    return layer.build_node(panel_params, coord_transform).get_node()
