"""
Module containing the unit value types used to describe graphic objects in a mix of relative and physical units.
Unit values are inert data until resolved against a `ViewportContext`, which yields a length in millimeters.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal
from collections.abc import Mapping

from .config import DEFAULT_UNIT, FRACTION_UNIT
from .unit_conversion import validate_unit, to_canonical
from .viewport import ViewportContext

Axis = Literal["x", "y"]
AXIS_INDEX: dict[str, int] = {"x": 0, "y": 1}

class UnitReferenceError(LookupError):
    """
    Raised when a derived unit value refers to a sibling that is absent (or circular) at resolution time.
    """
    pass

class UnitValue(ABC):
    """
    Base class for all unit value kinds.
    Arithmetic never resolves anything; it only builds new unit values.
    """

    @abstractmethod
    def scaled(self, factor: float) -> UnitValue:
        """
        Returns a copy of this unit value with its magnitude multiplied by `factor`.
        """
        pass

    def __add__(self, other: UnitValue) -> UnitValue:
        if not isinstance(other, UnitValue):
            return NotImplemented
        return combine([self, other])

    def __radd__(self, other: UnitValue | int) -> UnitValue:
        # Allows sum() over unit values, which starts from 0
        if isinstance(other, int) and other == 0:
            return self
        if not isinstance(other, UnitValue):
            return NotImplemented
        return combine([other, self])

    def __sub__(self, other: UnitValue) -> UnitValue:
        if not isinstance(other, UnitValue):
            return NotImplemented
        return combine([self, other.scaled(-1.0)])

    def __neg__(self) -> UnitValue:
        return self.scaled(-1.0)

    def __mul__(self, factor: float) -> UnitValue:
        if isinstance(factor, UnitValue):
            return NotImplemented
        return self.scaled(float(factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> UnitValue:
        if isinstance(divisor, UnitValue):
            return NotImplemented
        return self.scaled(1.0 / float(divisor))

@dataclass(frozen = True)
class FractionOfViewport(UnitValue):
    """
    Fraction of the viewport extent along the axis it is resolved on.
    """
    magnitude: float

    def scaled(self, factor: float) -> FractionOfViewport:
        return FractionOfViewport(self.magnitude * factor)

@dataclass(frozen = True)
class PhysicalLength(UnitValue):
    """
    Absolute length that does not depend on the viewport.
    """
    magnitude: float
    unit: str = "mm"

    def __post_init__(self) -> None:
        validate_unit(self.unit)

    def scaled(self, factor: float) -> PhysicalLength:
        return PhysicalLength(self.magnitude * factor, self.unit)

    def to_mm(self) -> float:
        return to_canonical(self.magnitude, self.unit)

@dataclass(frozen = True)
class CompositeSum(UnitValue):
    """
    Sum of unit values of differing kinds.
    """
    terms: tuple[UnitValue, ...]

    def scaled(self, factor: float) -> CompositeSum:
        return CompositeSum(tuple(term.scaled(factor) for term in self.terms))

@dataclass(frozen = True)
class DerivedFromSibling(UnitValue):
    """
    Multiple of a named sibling value held by the same owner.
    If `axis` is given, the sibling is resolved along that axis instead of the caller's.
    """
    ref: str
    axis: Axis | None = None
    magnitude: float = 1.0

    def scaled(self, factor: float) -> DerivedFromSibling:
        return DerivedFromSibling(self.ref, self.axis, self.magnitude * factor)

def combine(values: list[UnitValue]) -> UnitValue:
    """
    Adds unit values together.
    Fractions are folded into one term, physical lengths are folded per unit, and everything else is kept as is.
    Returns a `CompositeSum` only if more than one term remains.
    """
    # Flatten nested sums
    flat_terms: list[UnitValue] = []
    for value in values:
        if isinstance(value, CompositeSum):
            flat_terms.extend(value.terms)
        else:
            flat_terms.append(value)

    fraction_total: float | None = None
    physical_totals: dict[str, float] = {}
    other_terms: list[UnitValue] = []
    for term in flat_terms:
        if isinstance(term, FractionOfViewport):
            fraction_total = term.magnitude + (fraction_total or 0.0)
        elif isinstance(term, PhysicalLength):
            physical_totals[term.unit] = physical_totals.get(term.unit, 0.0) + term.magnitude
        else:
            other_terms.append(term)

    terms: list[UnitValue] = []
    if fraction_total is not None:
        terms.append(FractionOfViewport(fraction_total))
    terms.extend(PhysicalLength(magnitude, unit) for unit, magnitude in physical_totals.items())
    terms.extend(other_terms)

    if len(terms) == 1:
        return terms[0]
    return CompositeSum(tuple(terms))

def make_unit(magnitude: float, unit: str) -> UnitValue:
    """
    Returns a unit value from a magnitude and a unit name ('npc' or a physical unit).
    Raises ValueError if the unit is unrecognized.
    """
    if unit == FRACTION_UNIT:
        return FractionOfViewport(float(magnitude))
    return PhysicalLength(float(magnitude), unit)

def as_unit_value(value: UnitValue | float, default_unit: str = DEFAULT_UNIT) -> UnitValue:
    """
    Returns `value` unchanged if it already is a unit value, otherwise tags it with `default_unit`.
    """
    if isinstance(value, UnitValue):
        return value
    return make_unit(value, default_unit)

def resolve(
    value: UnitValue,
    context: ViewportContext,
    axis: Axis = "x",
    siblings: Mapping[str, UnitValue] | None = None,
    _visiting: frozenset[str] = frozenset()
) -> float:
    """
    Resolves a unit value to millimeters against a viewport context.
    Fractions use the extent and scale of `axis`; physical lengths do not depend on the viewport.
    Raises UnitReferenceError if a derived value refers to an absent or circular sibling.
    """
    axis_index = AXIS_INDEX[axis]
    if isinstance(value, FractionOfViewport):
        return value.magnitude * context.extent[axis_index] * context.device_to_physical_scale[axis_index]
    elif isinstance(value, PhysicalLength):
        return value.to_mm()
    elif isinstance(value, CompositeSum):
        return sum(resolve(term, context, axis, siblings, _visiting) for term in value.terms)
    elif isinstance(value, DerivedFromSibling):
        if siblings is None or value.ref not in siblings:
            raise UnitReferenceError(f"Unit value refers to sibling '{value.ref}', which is absent")
        if value.ref in _visiting:
            raise UnitReferenceError(f"Unit value refers to sibling '{value.ref}' circularly")
        sibling_axis = value.axis if value.axis is not None else axis
        sibling_mm = resolve(siblings[value.ref], context, sibling_axis, siblings, _visiting | {value.ref})
        return value.magnitude * sibling_mm
    raise TypeError(f"Cannot resolve object of type {type(value).__name__}")
