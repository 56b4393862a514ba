"""
Module containing the scene graph: the `SpringNode` drawable, the `EmptyNode` drawable and the `Scene` that retains them.
A spring node keeps its parameters as unresolved unit values and only computes concrete geometry at draw time,
again whenever the viewport it is drawn into changes.
"""

from __future__ import annotations
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from functools import wraps
from numbers import Integral
from typing import Any, Self
import numpy as np

from .config import DEFAULT_NODE_DIAMETER, DEFAULT_NUM_POINTS, DEFAULT_TENSION, DEFAULT_UNIT, MAX_SAMPLE_COUNT
from .interfaces import Drawable
from .logging import Loggable
from .points import Point, Polyline
from .spring_generation import ConfigurationError, SpringPathPlan, SpringSpec, generate_spring_path
from .styles import SpringStyle
from .units import UnitReferenceError, UnitValue, as_unit_value, resolve
from .viewport import ViewportContext

def validate_state(attribute_name: str, error_message_root: str | None = None) -> Callable:
    """
    Decorator to validate that a specific attribute is not None.
    The error reads '<error_message_root> before invoking <method>()', or reports the object as disposed if no root is given.
    """
    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            if getattr(self, attribute_name) is None:
                if error_message_root is None:
                    raise RuntimeError(f"{self.__class__.__name__} is disposed; cannot invoke {method.__name__}()")
                raise RuntimeError(error_message_root + " before invoking " + method.__name__ + "()")
            return method(self, *args, **kwargs)
        return wrapper
    return decorator

@dataclass(frozen = True)
class SpringParameters:
    """
    Unresolved parameters of a single spring.
    Endpoints and diameter are unit values; tension is a plain positive number.
    """
    x0: UnitValue
    y0: UnitValue
    x1: UnitValue
    y1: UnitValue
    diameter: UnitValue
    tension: float = DEFAULT_TENSION

    def siblings(self) -> dict[str, UnitValue]:
        """
        Returns the named unit values that derived values of this spring may refer to.
        """
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1, "diameter": self.diameter}

class SpringNode(Drawable):
    """
    Drawable holding a batch of springs that share one style.
    Each spring becomes one polyline whose `path_id` is the spring's index in the batch.

    States:
    - 'unresolved': no geometry has been generated yet
    - 'resolved': geometry is cached for the last viewport drawn into
    - 'disposed': terminal, the node can no longer be drawn
    """

    def __init__(
        self,
        springs: Sequence[SpringParameters],
        num_points: int = DEFAULT_NUM_POINTS,
        style: SpringStyle | None = None,
        siblings: Mapping[str, UnitValue] | None = None,
        max_sample_count: int = MAX_SAMPLE_COUNT,
        name: str | None = None
    ) -> None:
        super().__init__()

        springs = tuple(springs)

        # Validate everything that does not depend on the viewport
        if isinstance(num_points, bool) or not isinstance(num_points, Integral) or num_points <= 0:
            raise ConfigurationError(f"Number of points per revolution must be a positive integer, got {num_points}")
        for index, spring in enumerate(springs):
            if not spring.tension > 0:
                raise ConfigurationError(f"Tension must be larger than zero, got {spring.tension} for spring {index}")

        self.name = name
        self.raw_params: tuple[SpringParameters, ...] | None = springs
        self.num_points = num_points
        self.style = style if style is not None else SpringStyle()
        self.siblings = dict(siblings) if siblings is not None else {}
        self.max_sample_count = max_sample_count

        self._resolved_children: tuple[Polyline, ...] | None = None
        self._last_context: ViewportContext | None = None
        self.log(f"Spring node created with {len(self.raw_params)} springs, {num_points} points per revolution")

    def __repr__(self) -> str:
        label = self.name if self.name is not None else hex(id(self))
        return f"SpringNode({label}, state={self.state})"

    @property
    def state(self) -> str:
        if self.raw_params is None:
            return "disposed"
        if self._resolved_children is None:
            return "unresolved"
        return "resolved"

    @property
    def num_springs(self) -> int:
        return 0 if self.raw_params is None else len(self.raw_params)

    @property
    def last_viewport_version(self) -> int | None:
        return None if self._last_context is None else self._last_context.version

    def is_stale(self, context: ViewportContext) -> bool:
        """
        Returns True if the cached geometry was not generated for `context`.
        """
        if self._resolved_children is None or self._last_context is None:
            return True
        return self._last_context.version != context.version or not self._last_context.same_geometry(context)

    @validate_state('raw_params')
    def resolve_and_generate(self, context: ViewportContext) -> list[Polyline]:
        # Resolve every spring first so a failure leaves nothing half generated
        specs = []
        for path_id, spring in enumerate(self.raw_params):
            siblings = {**self.siblings, **spring.siblings()}
            p0 = Point([resolve(spring.x0, context, "x", siblings), resolve(spring.y0, context, "y", siblings)])
            p1 = Point([resolve(spring.x1, context, "x", siblings), resolve(spring.y1, context, "y", siblings)])
            # Diameter is a single scalar, resolved along the width axis
            diameter = resolve(spring.diameter, context, "x", siblings)
            specs.append(SpringSpec(p0, p1, diameter, spring.tension, self.num_points, path_id))

        polylines = []
        for spec in specs:
            plan = SpringPathPlan(spec, self.max_sample_count)
            if plan.clamped:
                self.log(f"Spring {spec.path_id}: {plan.revolutions:.1f} revolutions exceed the sample budget, "
                         f"clamped to {plan.sample_count} samples", indent_level = 1)
            polyline = generate_spring_path(spec, self.max_sample_count)
            # Zero-length springs have nothing to draw
            if not polyline.is_empty():
                polylines.append(polyline)
        return polylines

    @validate_state('raw_params')
    def draw(self, context: ViewportContext) -> list[Polyline]:
        if self.is_stale(context):
            children = self.resolve_and_generate(context)
            self._resolved_children = tuple(children)
            self._last_context = context
            num_samples = sum(len(child) for child in children)
            self.log(f"Regenerated {len(children)} paths ({num_samples} samples) for viewport version {context.version}")
        # Hand out copies so the cache can only be replaced by regeneration
        return [Polyline(child.points.copy(), child.path_id) for child in self._resolved_children]

    def dispose(self) -> None:
        self.raw_params = None
        self._resolved_children = None
        self._last_context = None
        self.log("Spring node disposed")

class EmptyNode(Drawable):
    """
    Drawable standing for 'nothing to draw'.
    """

    def __init__(self) -> None:
        super().__init__()

    def __repr__(self) -> str:
        return "EmptyNode()"

    def resolve_and_generate(self, context: ViewportContext) -> list[Polyline]:
        return []

    def draw(self, context: ViewportContext) -> list[Polyline]:
        return []

    def is_empty(self) -> bool:
        return True

class Scene(Loggable):
    """
    Retains the drawables of one figure and draws them in sequence.
    Errors raised by one node while drawing are recorded and do not stop the other nodes.
    """

    def __init__(self) -> None:
        super().__init__()
        self.nodes: list[Drawable] = []
        self.errors: dict[Drawable, Exception] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: Drawable) -> bool:
        return any(node is existing for existing in self.nodes)

    def add(self, node: Drawable) -> Drawable:
        if node not in self:
            self.nodes.append(node)
        return node

    def remove(self, node: Drawable) -> Self:
        self.nodes = [existing for existing in self.nodes if existing is not node]
        self.errors.pop(node, None)
        return self

    def draw(self, context: ViewportContext) -> dict[Drawable, list[Polyline]]:
        """
        Draws every node into `context`.
        Returns the polylines of each node; nodes that failed map to an empty list and are listed in `errors`.
        """
        self.errors = {}
        results = {}
        for node in self.nodes:
            if isinstance(node, SpringNode) and node.state == "disposed":
                results[node] = []
                continue
            try:
                results[node] = node.draw(context)
            except (ConfigurationError, UnitReferenceError) as error:
                self.errors[node] = error
                results[node] = []
                self.log(f"{node!r} could not be drawn for viewport version {context.version}: {error}")
        return results

    def dispose(self) -> None:
        for node in self.nodes:
            if isinstance(node, SpringNode):
                node.dispose()
        self.nodes = []
        self.errors = {}
        self.log("Scene disposed")

def make_spring_node(
    p0: tuple[Any, Any],
    p1: tuple[Any, Any],
    diameter: UnitValue | float | Sequence[UnitValue | float] = DEFAULT_NODE_DIAMETER,
    tension: float | Sequence[float] = DEFAULT_TENSION,
    num_points: int = DEFAULT_NUM_POINTS,
    default_unit: str = DEFAULT_UNIT,
    style: SpringStyle | None = None,
    scene: Scene | None = None,
    name: str | None = None
) -> SpringNode:
    """
    Constructs a spring node from start points `p0` and end points `p1`, each given as an (x, y) pair.
    Coordinates, diameter and tension may be single values or sequences (one value per spring, recycled).
    Plain numbers are tagged with `default_unit`; unit values are kept as they are.
    If `scene` is provided, the node is added to it once construction succeeded.
    Raises 'ConfigurationError' if a tension is not positive or `num_points` is not a positive integer.
    """
    def as_list(value: Any) -> list:
        if isinstance(value, np.ndarray):
            return list(value.ravel())
        if isinstance(value, (str, UnitValue)) or not isinstance(value, Sequence):
            return [value]
        return list(value)

    columns = [as_list(p0[0]), as_list(p0[1]), as_list(p1[0]), as_list(p1[1]), as_list(diameter), as_list(tension)]
    if any(len(column) == 0 for column in columns):
        num_springs = 0
    else:
        num_springs = max(len(column) for column in columns)

    springs = []
    for i in range(num_springs):
        x0, y0, x1, y1, spring_diameter, spring_tension = (column[i % len(column)] for column in columns)
        springs.append(SpringParameters(
            as_unit_value(x0, default_unit),
            as_unit_value(y0, default_unit),
            as_unit_value(x1, default_unit),
            as_unit_value(y1, default_unit),
            as_unit_value(spring_diameter, default_unit),
            float(spring_tension)
        ))

    node = SpringNode(springs, num_points, style, name = name)
    if scene is not None:
        scene.add(node)
    return node

def draw(node: Drawable, context: ViewportContext) -> list[Polyline]:
    """
    Returns the polylines of `node` for `context`; repeated calls with an unchanged viewport reuse the cached geometry.
    """
    return node.draw(context)
