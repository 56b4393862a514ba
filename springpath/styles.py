"""
Module containing the `SpringStyle` class, which holds the stroke style shared by every path drawn from one spring node.
Only stroke colour, stroke width, dash pattern and cap style are used; other style attributes are ignored.
"""

from __future__ import annotations
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple
from matplotlib.colors import to_rgba

from .config import DEFAULT_ALPHA, DEFAULT_COLOUR, DEFAULT_LINE_CAP, DEFAULT_LINETYPE, DEFAULT_SIZE, POINTS_PER_MM

RGBA = tuple[float, float, float, float]
DashPattern = tuple[float, ...] | None

# Linetypes by name and by index; hex digit strings give on/off lengths in multiples of the line width
LINETYPE_NAMES: list[str] = ["blank", "solid", "dashed", "dotted", "dotdash", "longdash", "twodash"]
LINETYPE_DASH_CODES: dict[str, str | None] = {
    "blank": None,
    "solid": None,
    "dashed": "44",
    "dotted": "13",
    "dotdash": "1343",
    "longdash": "73",
    "twodash": "2262"
}

# Cap style names mapped to their matplotlib equivalents
CAP_STYLES: dict[str, str] = {
    "butt": "butt",
    "round": "round",
    "square": "projecting"
}

class StrokeStyle(NamedTuple):
    colour: RGBA
    width: float
    dashes: DashPattern
    cap: str

def is_missing(value: Any) -> bool:
    """
    Returns True for None and NaN.
    """
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False

def linetype_name(linetype: str | int) -> str | None:
    """
    Returns the linetype name for a name or an index, None if `linetype` is a dash code.
    """
    if isinstance(linetype, bool):
        raise ValueError(f"Linetype '{linetype}' is unrecognized")
    if isinstance(linetype, int):
        if not 0 <= linetype < len(LINETYPE_NAMES):
            raise ValueError(f"Linetype index must be between 0 and {len(LINETYPE_NAMES) - 1}, got {linetype}")
        return LINETYPE_NAMES[linetype]
    if linetype in LINETYPE_DASH_CODES:
        return linetype
    return None

def dash_pattern(linetype: str | int | Sequence[float]) -> DashPattern:
    """
    Returns the on/off dash lengths for a linetype, or None for a solid line.
    Accepts linetype names, indices 0-6, hex digit strings (e.g. "44") and explicit sequences of lengths.
    Raises ValueError if the linetype is unrecognized.
    """
    if isinstance(linetype, (str, int)):
        name = linetype_name(linetype)
        code = LINETYPE_DASH_CODES[name] if name is not None else linetype
        if code is None:
            return None
        if len(code) % 2 != 0 or len(code) > 8:
            raise ValueError(f"Linetype '{linetype}' is unrecognized; dash codes need 2, 4, 6 or 8 hex digits")
        try:
            return tuple(float(int(digit, 16)) for digit in code)
        except ValueError:
            raise ValueError(f"Linetype '{linetype}' is unrecognized; use one of {', '.join(LINETYPE_NAMES)} or hex digits")
    dashes = tuple(float(length) for length in linetype)
    if len(dashes) % 2 != 0 or any(length <= 0 for length in dashes):
        raise ValueError(f"Dash sequence must contain an even number of positive lengths, got {dashes}")
    return dashes

def stroke_colour(colour: Any, alpha: float | None = None) -> RGBA:
    """
    Returns `colour` as an RGBA tuple, with its opacity replaced by `alpha` if given.
    """
    if is_missing(alpha):
        alpha = None
    return to_rgba(colour, alpha)

def stroke_width(size: float) -> float:
    """
    Converts a line size in millimeters to a stroke width in points.
    """
    return size * POINTS_PER_MM

@dataclass(frozen = True)
class SpringStyle:
    """
    Stroke style of a batch of paths.
    Each field holds one value shared by all paths or one value per path, recycled by path index.
    The cap style is always shared by the whole batch.
    """
    colours: tuple[RGBA, ...] = (to_rgba(DEFAULT_COLOUR),)
    widths: tuple[float, ...] = (stroke_width(DEFAULT_SIZE),)
    dashes: tuple[DashPattern, ...] = (None,)
    cap: str = DEFAULT_LINE_CAP

    def __post_init__(self) -> None:
        if self.cap not in CAP_STYLES:
            raise ValueError(f"Line cap style '{self.cap}' is unrecognized; use one of {', '.join(CAP_STYLES)}")
        for name in ("colours", "widths", "dashes"):
            if len(getattr(self, name)) == 0:
                raise ValueError(f"Style field '{name}' needs at least one value")

    @classmethod
    def uniform(
        cls,
        colour: Any = DEFAULT_COLOUR,
        size: float = DEFAULT_SIZE,
        linetype: str | int | Sequence[float] = DEFAULT_LINETYPE,
        alpha: float | None = DEFAULT_ALPHA,
        cap: str = DEFAULT_LINE_CAP
    ) -> SpringStyle:
        """
        Returns a style shared by every path of the batch.
        """
        # Blank lines keep their slot in the batch but are fully transparent
        if isinstance(linetype, (str, int)) and linetype_name(linetype) == "blank":
            alpha = 0.0
        return cls((stroke_colour(colour, alpha),), (stroke_width(size),), (dash_pattern(linetype),), cap)

    @classmethod
    def from_rows(cls, rows: Sequence[Mapping[str, Any]], cap: str = DEFAULT_LINE_CAP) -> SpringStyle:
        """
        Returns a style with one entry per row, read from the 'colour', 'alpha', 'size' and 'linetype' fields.
        Missing fields fall back to the defaults in `config.py`.
        """
        colours, widths, dashes = [], [], []
        for row in rows:
            row_style = cls.uniform(
                colour = row.get("colour", DEFAULT_COLOUR),
                size = row.get("size", DEFAULT_SIZE),
                linetype = row.get("linetype", DEFAULT_LINETYPE),
                alpha = row.get("alpha", DEFAULT_ALPHA),
                cap = cap
            )
            colours.append(row_style.colours[0])
            widths.append(row_style.widths[0])
            dashes.append(row_style.dashes[0])
        if not rows:
            return cls(cap = cap)
        return cls(tuple(colours), tuple(widths), tuple(dashes), cap)

    def for_path(self, path_index: int) -> StrokeStyle:
        def recycle(values: tuple) -> Any:
            return values[path_index % len(values)]
        return StrokeStyle(recycle(self.colours), recycle(self.widths), recycle(self.dashes), self.cap)

    def is_uniform(self) -> bool:
        """
        Returns True if every path is drawn with the same stroke.
        """
        return all(len(set(values)) == 1 for values in (self.colours, self.widths, self.dashes))

    def collection_properties(self, num_paths: int) -> dict[str, Any]:
        """
        Returns keyword arguments for a matplotlib `LineCollection` drawing `num_paths` paths.
        """
        strokes = [self.for_path(i) for i in range(max(num_paths, 1))]
        return {
            "colors": [stroke.colour for stroke in strokes],
            "linewidths": [stroke.width for stroke in strokes],
            "linestyles": ["solid" if stroke.dashes is None else (0, stroke.dashes) for stroke in strokes],
            "capstyle": CAP_STYLES[self.cap]
        }
