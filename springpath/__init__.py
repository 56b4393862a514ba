from .units import (
    UnitValue, FractionOfViewport, PhysicalLength, CompositeSum, DerivedFromSibling,
    UnitReferenceError, make_unit, as_unit_value, resolve
)
from .viewport import ViewportContext, Viewport
from .points import Point, PointArray, Polyline
from .spring_generation import ConfigurationError, SpringSpec, SpringPathPlan, generate_spring_path, create_spring
from .styles import SpringStyle
from .interfaces import Drawable, CoordinateTransform
from .scene import SpringParameters, SpringNode, EmptyNode, Scene, make_spring_node, draw
from .coordinate_adaptation import DegradedCorrectnessWarning, CartesianCoordinates, PolarCoordinates, adapt
from .spring_layer import SpringLayer, draw_layer, compute_data_springs

PanelParams = CoordinateTransform.PanelParams

__all__ = [
    'UnitValue',
    'FractionOfViewport',
    'PhysicalLength',
    'CompositeSum',
    'DerivedFromSibling',
    'UnitReferenceError',
    'make_unit',
    'as_unit_value',
    'resolve',
    'ViewportContext',
    'Viewport',
    'Point',
    'PointArray',
    'Polyline',
    'ConfigurationError',
    'SpringSpec',
    'SpringPathPlan',
    'generate_spring_path',
    'create_spring',
    'SpringStyle',
    'Drawable',
    'CoordinateTransform',
    'PanelParams',
    'SpringParameters',
    'SpringNode',
    'EmptyNode',
    'Scene',
    'make_spring_node',
    'draw',
    'DegradedCorrectnessWarning',
    'CartesianCoordinates',
    'PolarCoordinates',
    'adapt',
    'SpringLayer',
    'draw_layer',
    'compute_data_springs',
]
