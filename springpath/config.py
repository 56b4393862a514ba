"""
Module containing constants that define default behaviour.
"""

# Canonical length unit that every physical quantity is resolved to
CANONICAL_LENGTH_UNIT: str = "mm"

# Unit name used for viewport-relative (fractional) values
FRACTION_UNIT: str = "npc"

# Unit assumed for plain scalars passed to `make_spring_node()`
DEFAULT_UNIT: str = FRACTION_UNIT

# Spring parameters
# Number of points sampled per revolution of the coil
DEFAULT_NUM_POINTS: int = 50
DEFAULT_TENSION: float = 0.75
# Layer-level diameter is a physical length
DEFAULT_DIAMETER: float = 0.35
DIAMETER_UNIT: str = "cm"
# Node-level diameter is a fraction of the viewport width
DEFAULT_NODE_DIAMETER: float = 0.1

# Upper bound on samples generated for a single spring
MAX_SAMPLE_COUNT: int = 100_000

# Style defaults
DEFAULT_COLOUR: str = "black"
DEFAULT_SIZE: float = 0.5
DEFAULT_LINETYPE: str = "solid"
DEFAULT_ALPHA: float | None = None
DEFAULT_LINE_CAP: str = "butt"

# Line width conversion: `size` is given in mm, strokes are drawn in points
POINTS_PER_MM: float = 72.27 / 25.4

# Device resolution assumed by `Viewport` when none is given (device units per inch)
DEFAULT_DPI: float = 72.0
MM_PER_INCH: float = 25.4

# Visualization plot parameters
PLOT_MARGIN_FACTOR: float = 0.1
